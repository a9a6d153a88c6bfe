"""Admin-side booking updates.

Only the fields listed in ``UPDATABLE_FIELDS`` can be written through the
API. Each entry names the model attribute and a coercer; a coercer either
returns the value to store, returns ``SKIP`` to leave the field alone, or
raises ``ValueError`` with the message sent back to the client.
"""

from __future__ import annotations

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore

from apps.core.exceptions import BadRequest, NotFound, ServerError
from apps.core.storage import delete_stored_image, delete_stored_image_on_commit, save_uploaded_image

from .domain import CarSummary
from .models import Booking
from .services import (
    DATE_ORDER_MESSAGE,
    _lock_queryset_if_possible,
    ensure_car_is_available,
    parse_calendar_date,
)

logger = logging.getLogger(__name__)

SKIP = object()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def _text(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        return "" if value is None else str(value).strip()

    return coerce


def _required_text(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        text = "" if value is None else str(value).strip()
        if not text:
            raise ValueError(f"{field} is required")
        return text

    return coerce


def _email(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        text = "" if value is None else str(value).strip()
        if not EMAIL_PATTERN.match(text):
            raise ValueError(f"Validation failed for {field}")
        return text

    return coerce


def _date(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        try:
            return parse_calendar_date(value)
        except ValueError:
            raise ValueError(f"Invalid date format for {field}")

    return coerce


def _decimal(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"Invalid number format for {field}")
        if not number.is_finite():
            raise ValueError(f"Invalid number format for {field}")
        return number

    return coerce


def _choice(field: str, choices) -> Callable[[Any, Booking], Any]:
    allowed = [str(choice) for choice in choices]

    def coerce(value, booking):
        text = "" if value is None else str(value).strip()
        if text not in allowed:
            raise ValueError(f"Invalid value for {field}. Must be one of: {', '.join(allowed)}")
        return text

    return coerce


def _boolean(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ValueError(f"Invalid boolean value for {field}")

    return coerce


def _json_object(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        if isinstance(value, str):
            if not value.strip():
                return SKIP
            try:
                value = json.loads(value)
            except ValueError:
                return SKIP
        if not isinstance(value, Mapping):
            return SKIP
        return dict(value)

    return coerce


def _car(field: str) -> Callable[[Any, Booking], Any]:
    def coerce(value, booking):
        try:
            summary = CarSummary.parse(value)
        except ValueError as exc:
            raise ValueError(f"Invalid value for {field}: {exc}")
        if summary is None:
            return SKIP
        if summary.id is None and booking.car_id_snapshot is not None:
            summary = summary.with_id(booking.car_id_snapshot)
        return summary.to_dict()

    return coerce


# API field -> (model attribute, coercer)
UPDATABLE_FIELDS: dict[str, tuple[str, Callable[[Any, Booking], Any]]] = {
    "customer": ("customer", _required_text("customer")),
    "email": ("email", _email("email")),
    "phone": ("phone", _text("phone")),
    "car": ("car", _car("car")),
    "pickupDate": ("pickup_date", _date("pickupDate")),
    "returnDate": ("return_date", _date("returnDate")),
    "bookingDate": ("booking_date", _date("bookingDate")),
    "status": ("status", _choice("status", Booking.Status.values)),
    "amount": ("amount", _decimal("amount")),
    "paymentStatus": ("payment_status", _choice("paymentStatus", Booking.PaymentStatus.values)),
    "paymentMethod": ("payment_method", _text("paymentMethod")),
    "details": ("details", _json_object("details")),
    "address": ("address", _json_object("address")),
    "source": ("source", _choice("source", Booking.Source.values)),
    "isVerified": ("is_verified", _boolean("isVerified")),
}


def apply_updates(booking: Booking, patch: Mapping[str, Any]) -> list[str]:
    """Coerce allow-listed keys of ``patch`` onto ``booking``.

    Unknown keys are ignored. Returns the model attributes that changed.
    """

    changed: list[str] = []
    for api_field, (attribute, coerce) in UPDATABLE_FIELDS.items():
        if api_field not in patch:
            continue
        try:
            value = coerce(patch.get(api_field), booking)
        except ValueError as exc:
            raise BadRequest(str(exc))
        if value is SKIP:
            continue
        setattr(booking, attribute, value)
        changed.append(attribute)
    return changed


def _get_locked_booking(booking_id) -> Booking:
    if not str(booking_id).strip().isdigit():
        raise BadRequest("Invalid ID format")
    booking = _lock_queryset_if_possible(Booking.objects.filter(pk=int(str(booking_id).strip()))).first()
    if booking is None:
        raise NotFound("Booking not found")
    return booking


def update_booking(booking_id, patch: Mapping[str, Any], new_image=None) -> Booking:
    """Apply ``patch`` (and optionally a replacement image) atomically."""

    stored_image = ""
    try:
        with transaction.atomic():
            booking = _get_locked_booking(booking_id)
            previous_image = booking.car_image

            apply_updates(booking, patch)

            if booking.pickup_date >= booking.return_date:
                raise BadRequest(DATE_ORDER_MESSAGE)
            car_id = booking.car_id_snapshot
            if booking.is_blocking and car_id is not None:
                ensure_car_is_available(
                    car_id,
                    booking.pickup_date,
                    booking.return_date,
                    exclude_booking_id=booking.pk,
                )

            if new_image is not None:
                stored_image = save_uploaded_image(new_image)
                booking.car_image = stored_image
                delete_stored_image_on_commit(previous_image)
            elif "carImage" in patch and not patch.get("carImage"):
                booking.car_image = ""
                delete_stored_image_on_commit(previous_image)

            booking.full_clean(exclude=["user"])
            booking.save()
    except DjangoValidationError as exc:
        delete_stored_image(stored_image)
        raise BadRequest("Validation error", error="; ".join(exc.messages))
    except APIException:
        delete_stored_image(stored_image)
        raise
    except (DatabaseError, OSError) as exc:
        delete_stored_image(stored_image)
        logger.exception("Error updating booking %s", booking_id)
        raise ServerError("Error updating booking") from exc
    except Exception:
        delete_stored_image(stored_image)
        raise

    logger.info("Updated booking %s", booking.pk)
    return booking


def set_status(booking_id, status: str | None) -> Booking:
    """Narrow administrative status change."""

    if status not in Booking.ADMIN_STATUSES:
        raise BadRequest("Invalid status value")
    with transaction.atomic():
        booking = _get_locked_booking(booking_id)
        was_blocking = booking.is_blocking
        booking.status = status
        # Re-activating a booking must not double-book its car.
        if booking.is_blocking and not was_blocking and booking.car_id_snapshot is not None:
            ensure_car_is_available(
                booking.car_id_snapshot,
                booking.pickup_date,
                booking.return_date,
                exclude_booking_id=booking.pk,
            )
        booking.save(update_fields=["status", "updated_at"])
    logger.info("Booking %s status set to %s", booking.pk, status)
    return booking


def delete_booking(booking_id) -> None:
    """Delete a booking and release its stored image after commit."""

    with transaction.atomic():
        booking = _get_locked_booking(booking_id)
        delete_stored_image_on_commit(booking.car_image)
        booking.delete()
    logger.info("Deleted booking %s", booking_id)
