"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer",
        "email",
        "status",
        "payment_status",
        "pickup_date",
        "return_date",
        "amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "pickup_date", "return_date", "source")
    search_fields = ("customer", "email", "phone")
    readonly_fields = (
        "car",
        "created_at",
        "updated_at",
    )
