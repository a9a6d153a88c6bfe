"""Serializers for the car catalogue."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Car


class CarSerializer(serializers.ModelSerializer):
    dailyRate = serializers.DecimalField(source="daily_rate", max_digits=10, decimal_places=2, coerce_to_string=False)
    fuelType = serializers.CharField(source="fuel_type")
    registrationNumber = serializers.CharField(source="registration_number")

    class Meta:
        model = Car
        fields = [
            "id",
            "make",
            "model",
            "year",
            "registrationNumber",
            "dailyRate",
            "seats",
            "transmission",
            "fuelType",
            "mileage",
            "image",
        ]
        read_only_fields = fields
