"""
Car summary value object

A booking keeps its own copy of the car it was made for. The copy is
taken once and never follows later edits of the car row, so historical
bookings keep the make, model and rate they were priced with.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

DEFAULT_SEATS = 4


def _number(value: Any, default: int | float | None) -> int | float | None:
    """Coerce to a JSON-friendly number; falsy input yields ``default``."""

    if value in (None, "", 0, False):
        return default
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def _identifier(value: Any) -> int | str | None:
    if value in (None, ""):
        return None
    text = str(value).strip()
    return int(text) if text.isdigit() else text


@dataclass(frozen=True)
class CarSummary:
    """Snapshot of a car embedded into a booking."""

    id: int | str | None
    make: str | None
    model: str = ""
    year: int | None = None
    dailyRate: int | float = 0
    seats: int = DEFAULT_SEATS
    transmission: str | None = None
    fuelType: str | None = None
    mileage: int | float = 0
    image: str = ""

    @classmethod
    def from_car(cls, car) -> "CarSummary":
        """Snapshot a ``Car`` row."""

        return cls(
            id=car.pk,
            make=car.make,
            model=car.model or "",
            year=_number(car.year, None),
            dailyRate=_number(car.daily_rate, 0),
            seats=_number(car.seats, DEFAULT_SEATS),
            transmission=car.transmission or None,
            fuelType=car.fuel_type or None,
            mileage=_number(car.mileage, 0),
            image=car.image or "",
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CarSummary":
        """Build from a loosely shaped mapping (API input or stored JSON).

        Raises ``ValueError`` when a numeric attribute is not a number.
        """

        return cls(
            id=_identifier(data.get("id", data.get("_id"))),
            make=data.get("make"),
            model=data.get("model") or "",
            year=_number(data.get("year"), None),
            dailyRate=_number(data.get("dailyRate", data.get("daily_rate")), 0),
            seats=_number(data.get("seats"), DEFAULT_SEATS),
            transmission=data.get("transmission"),
            fuelType=data.get("fuelType", data.get("fuel_type")),
            mileage=_number(data.get("mileage"), 0),
            image=data.get("image") or data.get("carImage") or "",
        )

    @classmethod
    def parse(cls, value: Any) -> "CarSummary | None":
        """Accept a mapping or its JSON text; ``None`` for empty or non-object input."""

        if isinstance(value, CarSummary):
            return value
        if isinstance(value, (str, bytes)):
            if not value.strip():
                return None
            try:
                value = json.loads(value)
            except ValueError:
                return None
        if not isinstance(value, Mapping) or not value:
            return None
        return cls.from_mapping(value)

    def with_id(self, car_id: int | str | None) -> "CarSummary":
        return replace(self, id=_identifier(car_id))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
