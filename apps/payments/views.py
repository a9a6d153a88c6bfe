"""Checkout stub endpoints.

Both endpoints are public: the checkout page posts the booking it wants
created and the confirmation page reads it back by id.
"""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.serializers import BookingSerializer

from . import services


class CreateCheckoutSessionView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        booking = services.create_checkout_booking(request.data)
        return Response(
            {
                "success": True,
                "message": "Booking created successfully",
                "bookingId": booking.pk,
                "booking": BookingSerializer(booking).data,
            },
            status=status.HTTP_200_OK,
        )


class ConfirmPaymentView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def get(self, request):  # type: ignore
        booking = services.get_booking_for_confirmation(request.query_params.get("bookingId"))
        return Response(
            {
                "success": True,
                "message": "Booking confirmed successfully",
                "booking": BookingSerializer(booking).data,
            }
        )
