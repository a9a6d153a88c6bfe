"""Unit tests for the car summary value object."""

from __future__ import annotations

import json
from decimal import Decimal

from django.test import SimpleTestCase

from apps.bookings.domain import CarSummary
from apps.cars.models import Car


class CarSummaryTests(SimpleTestCase):
    def test_defaults(self) -> None:
        summary = CarSummary.from_mapping({"make": "Honda"})

        self.assertIsNone(summary.id)
        self.assertEqual(summary.model, "")
        self.assertIsNone(summary.year)
        self.assertEqual(summary.dailyRate, 0)
        self.assertEqual(summary.seats, 4)
        self.assertEqual(summary.mileage, 0)
        self.assertEqual(summary.image, "")

    def test_numeric_coercion_and_aliases(self) -> None:
        summary = CarSummary.from_mapping(
            {"_id": "12", "make": "Honda", "year": "2021", "daily_rate": "99.5", "seats": "7", "carImage": "/x.png"}
        )

        self.assertEqual(summary.id, 12)
        self.assertEqual(summary.year, 2021)
        self.assertEqual(summary.dailyRate, 99.5)
        self.assertEqual(summary.seats, 7)
        self.assertEqual(summary.image, "/x.png")

    def test_non_numeric_value_raises(self) -> None:
        with self.assertRaises(ValueError):
            CarSummary.from_mapping({"make": "Honda", "seats": "many"})

    def test_parse_accepts_json_text(self) -> None:
        summary = CarSummary.parse(json.dumps({"id": 3, "make": "Honda", "model": "City"}))

        assert summary is not None
        self.assertEqual(summary.id, 3)
        self.assertEqual(summary.model, "City")

    def test_parse_rejects_empty_and_non_objects(self) -> None:
        for value in (None, "", "   ", "{broken", "[1, 2]", {}, 42):
            with self.subTest(value=value):
                self.assertIsNone(CarSummary.parse(value))

    def test_from_car_row(self) -> None:
        car = Car(pk=5, make="Toyota", model="Innova", year=2020, daily_rate=Decimal("150.00"), seats=7)

        data = CarSummary.from_car(car).to_dict()

        self.assertEqual(data["id"], 5)
        self.assertEqual(data["dailyRate"], 150)
        self.assertEqual(data["seats"], 7)
        self.assertIsNone(data["transmission"])
        self.assertEqual(json.loads(json.dumps(data)), data)

    def test_with_id(self) -> None:
        summary = CarSummary.from_mapping({"make": "Honda"}).with_id("8")

        self.assertEqual(summary.id, 8)
