"""Shared fixtures for booking tests."""

from __future__ import annotations

import io
from datetime import date
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.bookings.domain import CarSummary
from apps.bookings.models import Booking
from apps.cars.models import Car


def make_car(**overrides) -> Car:
    fields = {
        "make": "Hyundai",
        "model": "Creta",
        "year": 2023,
        "registration_number": "MH12XY9876",
        "daily_rate": Decimal("100.00"),
        "transmission": Car.Transmission.AUTOMATIC,
        "fuel_type": Car.FuelType.DIESEL,
    }
    fields.update(overrides)
    return Car.objects.create(**fields)


def make_booking(car: Car, pickup: date, return_: date, **overrides) -> Booking:
    fields = {
        "customer": "Test Customer",
        "email": "customer@example.com",
        "car": CarSummary.from_car(car).to_dict(),
        "pickup_date": pickup,
        "return_date": return_,
        "amount": Decimal("100.00"),
    }
    fields.update(overrides)
    return Booking.objects.create(**fields)


def png_upload(name: str = "car.png") -> SimpleUploadedFile:
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), color=(200, 30, 30)).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")
