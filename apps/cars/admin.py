"""Admin registration for cars."""

from __future__ import annotations

from django.contrib import admin

from .models import Car


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ("make", "model", "year", "registration_number", "daily_rate", "seats", "created_at")
    list_filter = ("transmission", "fuel_type", "year")
    search_fields = ("make", "model", "registration_number")
    readonly_fields = ("created_at", "updated_at")
