"""Integration tests for booking creation."""

from __future__ import annotations

import shutil
import tempfile
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from unittest import mock

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User

from .utils import make_booking, make_car, png_upload


class BookingCreateAPITests(APITestCase):
    """Covers admission, pricing and date conflicts."""

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123", name="Guest User")
        self.car = make_car(daily_rate=Decimal("100.00"))
        self.client.force_authenticate(self.user)
        self.list_url = reverse("booking-list")

    def _payload(self, pickup: str, return_: str, **extra) -> dict:
        payload = {"carId": self.car.pk, "pickupDate": pickup, "returnDate": return_}
        payload.update(extra)
        return payload

    def test_create_prices_by_day_and_starts_pending(self) -> None:
        response = self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-03"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        booking = Booking.objects.get()
        self.assertEqual(booking.amount, Decimal("200.00"))
        self.assertEqual(booking.status, Booking.Status.PENDING)
        self.assertEqual(booking.user, self.user)
        self.assertEqual(booking.customer, "Guest User")
        self.assertEqual(booking.email, "guest@example.com")
        self.assertEqual(response.data["booking"]["pickupDate"], "2024-01-01")
        self.assertEqual(response.data["booking"]["car"]["id"], self.car.pk)

    def test_date_time_input_is_reduced_to_dates(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload("2024-01-01T09:00:00Z", "2024-01-04T08:00:00Z"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.get().amount, Decimal("300.00"))

    def test_overlapping_request_conflicts(self) -> None:
        first = self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-03"), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        second = self.client.post(self.list_url, self._payload("2024-01-02", "2024-01-04"), format="json")

        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT, second.data)
        self.assertEqual(second.data["message"], "Car is not available for the selected dates")
        self.assertEqual(Booking.objects.count(), 1)

    def test_return_day_equal_to_pickup_day_conflicts(self) -> None:
        make_booking(self.car, date(2024, 1, 1), date(2024, 1, 3))

        response = self.client.post(self.list_url, self._payload("2024-01-03", "2024-01-05"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_containing_range_conflicts(self) -> None:
        make_booking(self.car, date(2024, 1, 5), date(2024, 1, 6))

        response = self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-10"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_confirmed_booking_blocks(self) -> None:
        make_booking(self.car, date(2024, 1, 1), date(2024, 1, 3), status=Booking.Status.CONFIRMED)

        response = self.client.post(self.list_url, self._payload("2024-01-02", "2024-01-04"), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_cancelled_and_completed_bookings_do_not_block(self) -> None:
        make_booking(self.car, date(2024, 1, 1), date(2024, 1, 3), status=Booking.Status.CANCELLED)
        make_booking(self.car, date(2024, 1, 2), date(2024, 1, 4), status=Booking.Status.COMPLETED)

        response = self.client.post(self.list_url, self._payload("2024-01-02", "2024-01-04"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_other_car_does_not_block(self) -> None:
        other = make_car(registration_number="DL01ZZ0001")
        make_booking(other, date(2024, 1, 1), date(2024, 1, 3))

        response = self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-03"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_missing_information(self) -> None:
        response = self.client.post(self.list_url, {"carId": self.car.pk, "pickupDate": "2024-01-01"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Missing required booking information")

    def test_return_must_follow_pickup(self) -> None:
        same_day = self.client.post(self.list_url, self._payload("2024-01-03", "2024-01-03"), format="json")
        backwards = self.client.post(self.list_url, self._payload("2024-01-05", "2024-01-03"), format="json")

        self.assertEqual(same_day.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(backwards.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(backwards.data["message"], "Return date must be after pickup date")
        self.assertFalse(Booking.objects.exists())

    def test_invalid_date(self) -> None:
        response = self.client.post(self.list_url, self._payload("soon", "2024-01-03"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_or_malformed_car(self) -> None:
        unknown = self.client.post(
            self.list_url, self._payload("2024-01-01", "2024-01-03", carId=self.car.pk + 100), format="json"
        )
        malformed = self.client.post(
            self.list_url, self._payload("2024-01-01", "2024-01-03", carId="not-an-id"), format="json"
        )

        self.assertEqual(unknown.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(unknown.data["message"], "Car not found")
        self.assertEqual(malformed.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-03"), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Booking.objects.exists())

    def test_snapshot_does_not_follow_car_edits(self) -> None:
        self.client.post(self.list_url, self._payload("2024-01-01", "2024-01-03"), format="json")
        self.car.make = "Renamed"
        self.car.daily_rate = Decimal("999.00")
        self.car.save()

        booking = Booking.objects.get()
        self.assertEqual(booking.car["make"], "Hyundai")
        self.assertEqual(booking.car["dailyRate"], 100)
        self.assertEqual(booking.car["seats"], 4)

    def test_contact_fields_from_request(self) -> None:
        payload = self._payload("2024-01-01", "2024-01-03", customer="Someone Else", phone="+919999999999")

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.customer, "Someone Else")
        self.assertEqual(booking.phone, "+919999999999")


class BookingImageUploadTests(APITestCase):
    def setUp(self) -> None:
        self.media_root = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media_root)
        self.override.enable()
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123", name="Guest")
        self.car = make_car()
        self.client.force_authenticate(self.user)
        self.list_url = reverse("booking-list")

    def tearDown(self) -> None:
        self.override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_uploaded_image_is_stored(self) -> None:
        payload = {
            "carId": str(self.car.pk),
            "pickupDate": "2024-03-01",
            "returnDate": "2024-03-02",
            "carImage": png_upload(),
        }

        response = self.client.post(self.list_url, payload, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        reference = Booking.objects.get().car_image
        self.assertTrue(reference.startswith("/uploads/"))
        self.assertTrue(reference.endswith(".png"))
        self.assertTrue((Path(self.media_root) / reference[len("/uploads/"):]).exists())

    def test_upload_removed_when_booking_is_rejected(self) -> None:
        make_booking(self.car, date(2024, 3, 1), date(2024, 3, 5))
        payload = {
            "carId": str(self.car.pk),
            "pickupDate": "2024-03-02",
            "returnDate": "2024-03-03",
            "carImage": png_upload(),
        }

        response = self.client.post(self.list_url, payload, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(list(Path(self.media_root).iterdir()), [])

    def test_upload_removed_on_unexpected_error(self) -> None:
        payload = {
            "carId": str(self.car.pk),
            "pickupDate": "2024-03-01",
            "returnDate": "2024-03-02",
            "carImage": png_upload(),
        }

        with mock.patch("apps.bookings.services.compute_amount", side_effect=InvalidOperation):
            response = self.client.post(self.list_url, payload, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "Server error.")
        self.assertFalse(Booking.objects.exists())
        self.assertEqual(list(Path(self.media_root).iterdir()), [])

    def test_non_image_upload_rejected(self) -> None:
        payload = {
            "carId": str(self.car.pk),
            "pickupDate": "2024-03-01",
            "returnDate": "2024-03-02",
            "carImage": SimpleUploadedFile("notes.png", b"plain text", content_type="image/png"),
        }

        response = self.client.post(self.list_url, payload, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Validation error")
        self.assertFalse(Booking.objects.exists())
