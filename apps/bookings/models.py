"""Booking domain models for GoWheels."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import CarSummary


def _default_currency() -> str:
    return getattr(settings, "BOOKING_DEFAULT_CURRENCY", "INR")


class Booking(models.Model):
    """A car reservation for an inclusive pickup/return date range."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        ACTIVE = "active", _("Active")
        UPCOMING = "upcoming", _("Upcoming")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        COMPLETED = "completed", _("Completed")
        FAILED = "failed", _("Failed")
        REFUNDED = "refunded", _("Refunded")

    class Source(models.TextChoices):
        WEBSITE = "website", _("Website")
        ADMIN = "admin", _("Admin")
        PHONE = "phone", _("Phone")
        WALK_IN = "walk-in", _("Walk-in")

    # Statuses that hold the car for their date range.
    BLOCKING_STATUSES = (
        Status.PENDING,
        Status.CONFIRMED,
        Status.ACTIVE,
        Status.UPCOMING,
    )

    # Values accepted by the administrative status patch.
    ADMIN_STATUSES = (
        Status.PENDING,
        Status.CONFIRMED,
        Status.COMPLETED,
        Status.CANCELLED,
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    customer = models.CharField(max_length=150, blank=True)
    email = models.CharField(max_length=254, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    car = models.JSONField(default=dict, help_text=_("Snapshot of the car taken at booking time."))
    car_image = models.CharField(max_length=255, blank=True)
    pickup_date = models.DateField()
    return_date = models.DateField()
    booking_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default=_default_currency)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(max_length=50, blank=True)
    details = models.JSONField(default=dict, blank=True)
    address = models.JSONField(default=dict, blank=True)
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.WEBSITE)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(return_date__gt=models.F("pickup_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["pickup_date", "return_date"], name="booking_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for car {self.car_id_snapshot}"

    @property
    def car_summary(self) -> CarSummary | None:
        return CarSummary.parse(self.car)

    @property
    def car_id_snapshot(self):
        return (self.car or {}).get("id")

    @property
    def is_blocking(self) -> bool:
        return self.status in self.BLOCKING_STATUSES

    def clean(self) -> None:
        if self.pickup_date and self.return_date and self.pickup_date >= self.return_date:
            raise ValidationError(_("Return date must be after pickup date"))
