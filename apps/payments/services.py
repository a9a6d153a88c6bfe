"""Checkout stub services.

A checkout creates a booking with ``status=confirmed`` and
``paymentStatus=completed`` straight away. The caller supplies the
amount; no price is computed here.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from django.contrib.auth import get_user_model  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore

from apps.bookings.domain import CarSummary
from apps.bookings.models import Booking
from apps.bookings.services import (
    DATE_ORDER_MESSAGE,
    _lock_queryset_if_possible,
    ensure_car_is_available,
    parse_calendar_date,
)
from apps.cars.models import Car
from apps.core.exceptions import BadRequest, NotFound, ServerError

logger = logging.getLogger(__name__)

User = get_user_model()

CHECKOUT_CURRENCY = "INR"


def _positive_amount(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise BadRequest("Invalid amount")
    if not amount.is_finite() or amount <= 0:
        raise BadRequest("Invalid amount")
    return amount


def _json_object(value: Any, field: str) -> dict:
    if value in (None, ""):
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise BadRequest(f"Invalid JSON for {field}")
    if not isinstance(value, Mapping):
        raise BadRequest(f"Invalid value for {field}")
    return dict(value)


def normalize_car(value: Any) -> dict:
    """Mapping, JSON object text, or a bare name wrapped as ``{"name": ...}``."""

    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, str) and value.strip():
        try:
            parsed = json.loads(value)
        except ValueError:
            return {"name": value}
        if isinstance(parsed, Mapping):
            return dict(parsed)
        return {"name": value}
    return {}


def _existing_car(car: Mapping[str, Any]) -> Car | None:
    car_id = car.get("id", car.get("_id"))
    if car_id is None or not str(car_id).strip().isdigit():
        return None
    return _lock_queryset_if_possible(Car.objects.filter(pk=int(str(car_id).strip()))).first()


def _owner(user_id: Any):
    if user_id is None or not str(user_id).strip().isdigit():
        return None
    return User.objects.filter(pk=int(str(user_id).strip())).first()


def create_checkout_booking(data: Mapping[str, Any]) -> Booking:
    """Create a confirmed, paid booking from a checkout request."""

    amount = _positive_amount(data.get("amount"))
    email = str(data.get("email") or "").strip()
    if not email:
        raise BadRequest("Email required")
    if not data.get("pickupDate") or not data.get("returnDate"):
        raise BadRequest("pickupDate and returnDate required")
    try:
        pickup = parse_calendar_date(data.get("pickupDate"))
        return_ = parse_calendar_date(data.get("returnDate"))
    except ValueError:
        raise BadRequest("Invalid dates")
    if pickup >= return_:
        raise BadRequest(DATE_ORDER_MESSAGE)

    details = _json_object(data.get("details"), "details")
    address = _json_object(data.get("address"), "address")
    car_field = normalize_car(data.get("car"))

    try:
        with transaction.atomic():
            car = _existing_car(car_field)
            if car is not None:
                ensure_car_is_available(car.pk, pickup, return_)
                car_field = CarSummary.from_car(car).to_dict()

            booking = Booking.objects.create(
                user=_owner(data.get("userId")),
                customer=str(data.get("customer") or ""),
                email=email,
                phone=str(data.get("phone") or ""),
                car=car_field,
                car_image=str(data.get("carImage") or ""),
                pickup_date=pickup,
                return_date=return_,
                amount=amount,
                currency=CHECKOUT_CURRENCY,
                status=Booking.Status.CONFIRMED,
                payment_status=Booking.PaymentStatus.COMPLETED,
                details=details,
                address=address,
            )
    except DatabaseError as exc:
        logger.exception("Error creating booking from checkout")
        raise ServerError("Error creating booking") from exc

    logger.info("Checkout created booking %s, amount %s %s", booking.pk, amount, CHECKOUT_CURRENCY)
    return booking


def get_booking_for_confirmation(booking_id: Any) -> Booking:
    """Read-only lookup behind the payment confirmation redirect."""

    if not booking_id:
        raise BadRequest("Booking ID is required")
    if not str(booking_id).strip().isdigit():
        raise NotFound("Booking not found")
    booking = Booking.objects.filter(pk=int(str(booking_id).strip())).first()
    if booking is None:
        raise NotFound("Booking not found")
    return booking
