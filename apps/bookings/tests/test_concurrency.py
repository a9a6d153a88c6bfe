"""Concurrent admission for the same car.

PostgreSQL serializes the two requests on the car row lock; SQLite on
the database write lock taken when the transaction opens.
"""

from __future__ import annotations

import threading

from django.db import connections
from django.test import TransactionTestCase

from apps.bookings import services
from apps.bookings.models import Booking
from apps.core.exceptions import Conflict
from apps.users.models import User

from .utils import make_car


class ConcurrentAdmissionTests(TransactionTestCase):
    def test_only_one_overlapping_admission_succeeds(self) -> None:
        user = User.objects.create_user(email="race@example.com", password="RacePass123", name="Racer")
        car = make_car()
        barrier = threading.Barrier(2, timeout=30)
        outcomes: list[str] = []
        lock = threading.Lock()

        def admit(pickup: str, return_: str) -> None:
            request = services.BookingRequest(car_id=car.pk, pickup_date=pickup, return_date=return_)
            barrier.wait()
            try:
                services.create_booking(user, request)
                result = "created"
            except Conflict:
                result = "conflict"
            finally:
                connections.close_all()
            with lock:
                outcomes.append(result)

        threads = [
            threading.Thread(target=admit, args=("2024-09-01", "2024-09-05")),
            threading.Thread(target=admit, args=("2024-09-03", "2024-09-07")),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sorted(outcomes), ["conflict", "created"])
        self.assertEqual(Booking.objects.count(), 1)
