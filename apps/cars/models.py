"""Fleet models for GoWheels."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Car(models.Model):
    """A rentable vehicle."""

    class Transmission(models.TextChoices):
        AUTOMATIC = "automatic", _("Automatic")
        MANUAL = "manual", _("Manual")

    class FuelType(models.TextChoices):
        PETROL = "petrol", _("Petrol")
        DIESEL = "diesel", _("Diesel")
        ELECTRIC = "electric", _("Electric")
        HYBRID = "hybrid", _("Hybrid")
        CNG = "cng", _("CNG")

    make = models.CharField(max_length=100)
    model = models.CharField(max_length=100, blank=True)
    year = models.PositiveSmallIntegerField(null=True, blank=True)
    registration_number = models.CharField(max_length=32, blank=True)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    seats = models.PositiveSmallIntegerField(default=4)
    transmission = models.CharField(max_length=20, choices=Transmission.choices, blank=True)
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices, blank=True)
    mileage = models.PositiveIntegerField(default=0)
    image = models.CharField(max_length=255, blank=True, help_text=_("Public path or URL of the car photo."))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Car")
        verbose_name_plural = _("Cars")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        label = f"{self.make} {self.model}".strip()
        return f"{label} ({self.year})" if self.year else label
