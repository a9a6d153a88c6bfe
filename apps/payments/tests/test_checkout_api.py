"""API tests for the checkout stub."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.domain import CarSummary
from apps.bookings.models import Booking
from apps.cars.models import Car
from apps.users.models import User


class CheckoutSessionAPITests(APITestCase):
    def setUp(self) -> None:
        self.url = reverse("payments:create-checkout-session")
        self.car = Car.objects.create(make="Kia", model="Seltos", daily_rate=Decimal("120.00"))

    def _payload(self, **overrides) -> dict:
        payload = {
            "customer": "Neha",
            "email": "neha@example.com",
            "phone": "+917777777777",
            "car": {"id": self.car.pk, "make": "Kia", "model": "Seltos"},
            "pickupDate": "2024-08-01",
            "returnDate": "2024-08-04",
            "amount": 4500,
            "details": json.dumps({"notes": "child seat"}),
        }
        payload.update(overrides)
        return payload

    def test_creates_confirmed_paid_booking(self) -> None:
        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking = Booking.objects.get(pk=response.data["bookingId"])
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.COMPLETED)
        self.assertEqual(booking.currency, "INR")
        self.assertEqual(booking.amount, Decimal("4500.00"))
        self.assertEqual(booking.details, {"notes": "child seat"})
        self.assertEqual(booking.car["id"], self.car.pk)
        self.assertIsNone(booking.user)

    def test_attaches_existing_user(self) -> None:
        user = User.objects.create_user(email="neha@example.com", password="NehaPass123", name="Neha")

        response = self.client.post(self.url, self._payload(userId=user.pk), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Booking.objects.get().user, user)

    def test_plain_car_name_is_wrapped(self) -> None:
        response = self.client.post(self.url, self._payload(car="Any SUV"), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Booking.objects.get().car, {"name": "Any SUV"})

    def test_invalid_amount(self) -> None:
        for amount in (0, -5, "abc", None):
            with self.subTest(amount=amount):
                response = self.client.post(self.url, self._payload(amount=amount), format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data["message"], "Invalid amount")

    def test_email_required(self) -> None:
        response = self.client.post(self.url, self._payload(email=""), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Email required")

    def test_dates_validated(self) -> None:
        missing = self.client.post(self.url, self._payload(returnDate=""), format="json")
        invalid = self.client.post(self.url, self._payload(pickupDate="someday"), format="json")
        backwards = self.client.post(self.url, self._payload(pickupDate="2024-08-05"), format="json")

        self.assertEqual(missing.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(backwards.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_existing_car_is_checked_for_overlap(self) -> None:
        Booking.objects.create(
            customer="Earlier",
            email="earlier@example.com",
            car=CarSummary.from_car(self.car).to_dict(),
            pickup_date=date(2024, 8, 3),
            return_date=date(2024, 8, 6),
        )

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Booking.objects.count(), 1)


class ConfirmPaymentAPITests(APITestCase):
    def setUp(self) -> None:
        self.url = reverse("payments:confirm")

    def test_returns_booking(self) -> None:
        booking = Booking.objects.create(
            customer="Neha",
            email="neha@example.com",
            car={"name": "Any SUV"},
            pickup_date=date(2024, 8, 1),
            return_date=date(2024, 8, 2),
            status=Booking.Status.CONFIRMED,
        )

        response = self.client.get(self.url, {"bookingId": booking.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking confirmed successfully")
        self.assertEqual(response.data["booking"]["id"], booking.pk)

    def test_booking_id_required(self) -> None:
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_booking(self) -> None:
        response = self.client.get(self.url, {"bookingId": 12345})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
