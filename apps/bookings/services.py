"""Domain services for booking workflows.

Admission runs inside one ``transaction.atomic()`` block: the car row is
locked, overlapping bookings are looked up and the new booking is
inserted before the transaction commits. Two requests for the same car
therefore cannot both pass the availability check.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Mapping

from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils.dateparse import parse_date, parse_datetime  # type: ignore

from apps.cars.models import Car
from apps.core.exceptions import BadRequest, Conflict, NotFound, ServerError
from apps.core.storage import delete_stored_image, save_uploaded_image

from .domain import CarSummary
from .models import Booking

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Car is not available for the selected dates"
DATE_ORDER_MESSAGE = "Return date must be after pickup date"


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def parse_calendar_date(value: Any) -> date:
    """Parse an ISO date or date-time into a calendar date.

    Raises ``ValueError`` for anything that is not a valid date.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        raise ValueError("empty date")
    parsed_datetime = parse_datetime(text)
    if parsed_datetime is not None:
        return parsed_datetime.date()
    parsed = parse_date(text)
    if parsed is None:
        raise ValueError(f"invalid date {text!r}")
    return parsed


def rental_days(pickup: date, return_: date) -> int:
    """Whole days between the two dates; a started day counts in full."""

    delta = abs(return_ - pickup)
    return math.ceil(delta / timedelta(days=1))


def compute_amount(pickup: date, return_: date, daily_rate: Any) -> Decimal:
    return Decimal(rental_days(pickup, return_)) * Decimal(str(daily_rate or 0))


def find_conflicting_bookings(car_id, pickup: date, return_: date, *, exclude_booking_id=None):
    """Blocking bookings on ``car_id`` overlapping ``[pickup, return_]``.

    Bounds are inclusive: a booking returned on the day another is picked
    up conflicts with it.
    """

    overlapping_filter = Q(pickup_date__lte=return_) & Q(return_date__gte=pickup)

    bookings_qs = Booking.objects.filter(
        car__id=car_id,
        status__in=Booking.BLOCKING_STATUSES,
    ).filter(overlapping_filter)

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    return _lock_queryset_if_possible(bookings_qs)


def ensure_car_is_available(car_id, pickup: date, return_: date, *, exclude_booking_id=None) -> None:
    """Raise ``Conflict`` when the car is already held for any of the dates."""

    if find_conflicting_bookings(car_id, pickup, return_, exclude_booking_id=exclude_booking_id).exists():
        raise Conflict(UNAVAILABLE_MESSAGE)


def lock_car(car_id) -> Car:
    """Load and row-lock the car; ``NotFound`` when it does not exist."""

    if not str(car_id).strip().isdigit():
        raise NotFound("Car not found")
    car = _lock_queryset_if_possible(Car.objects.filter(pk=int(str(car_id).strip()))).first()
    if car is None:
        raise NotFound("Car not found")
    return car


@dataclass
class BookingRequest:
    """Input of the admission engine."""

    car_id: Any
    pickup_date: Any
    return_date: Any
    customer: str | None = None
    email: str | None = None
    phone: str | None = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "BookingRequest":
        return cls(
            car_id=data.get("carId"),
            pickup_date=data.get("pickupDate"),
            return_date=data.get("returnDate"),
            customer=data.get("customer"),
            email=data.get("email"),
            phone=data.get("phone"),
        )


def _parse_dates(pickup_value: Any, return_value: Any) -> tuple[date, date]:
    try:
        pickup = parse_calendar_date(pickup_value)
    except ValueError:
        raise BadRequest("Invalid date format for pickupDate")
    try:
        return_ = parse_calendar_date(return_value)
    except ValueError:
        raise BadRequest("Invalid date format for returnDate")
    if pickup >= return_:
        raise BadRequest(DATE_ORDER_MESSAGE)
    return pickup, return_


def create_booking(user, request: BookingRequest, image=None) -> Booking:
    """Admit a new booking for ``user`` or raise a classified API error."""

    if not request.pickup_date or not request.return_date or not request.car_id:
        raise BadRequest("Missing required booking information")
    pickup, return_ = _parse_dates(request.pickup_date, request.return_date)

    car_image = ""
    try:
        with transaction.atomic():
            car = lock_car(request.car_id)
            ensure_car_is_available(car.pk, pickup, return_)

            summary = CarSummary.from_car(car)
            if image is not None:
                car_image = save_uploaded_image(image)

            booking = Booking.objects.create(
                user=user,
                customer=request.customer or getattr(user, "name", ""),
                email=request.email or getattr(user, "email", ""),
                phone=request.phone or "",
                car=summary.to_dict(),
                car_image=car_image,
                pickup_date=pickup,
                return_date=return_,
                amount=compute_amount(pickup, return_, car.daily_rate),
                status=Booking.Status.PENDING,
            )
    except Exception as exc:
        # The upload is not part of the transaction; drop it on any failure.
        delete_stored_image(car_image)
        if isinstance(exc, (DatabaseError, OSError)):
            logger.exception("Error creating booking for car %s", request.car_id)
            raise ServerError("Error creating booking", code="server_error") from exc
        raise

    logger.info(
        "Created booking %s for car %s (%s - %s), amount %s",
        booking.pk,
        car.pk,
        pickup,
        return_,
        booking.amount,
    )
    return booking
