"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking
from .services import BookingRequest


class BookingCreateSerializer(serializers.Serializer):
    """Booking request as sent by a customer.

    Presence and date checks live in the admission service so the client
    gets one message for every missing field.
    """

    carId = serializers.CharField(required=False, allow_blank=True, default="")
    pickupDate = serializers.CharField(required=False, allow_blank=True, default="")
    returnDate = serializers.CharField(required=False, allow_blank=True, default="")
    customer = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.CharField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")

    def to_booking_request(self) -> BookingRequest:
        return BookingRequest.from_data(self.validated_data)


class BookingImageSerializer(serializers.Serializer):
    """Validates the optional ``carImage`` upload."""

    carImage = serializers.ImageField(required=False)


class BookingSerializer(serializers.ModelSerializer):
    """Booking as returned by the API."""

    userId = serializers.ReadOnlyField(source="user_id")
    carImage = serializers.CharField(source="car_image", read_only=True)
    pickupDate = serializers.DateField(source="pickup_date", read_only=True)
    returnDate = serializers.DateField(source="return_date", read_only=True)
    bookingDate = serializers.DateField(source="booking_date", read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)
    paymentStatus = serializers.CharField(source="payment_status", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    isVerified = serializers.BooleanField(source="is_verified", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    carDetails = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "userId",
            "customer",
            "email",
            "phone",
            "car",
            "carImage",
            "carDetails",
            "pickupDate",
            "returnDate",
            "bookingDate",
            "status",
            "amount",
            "currency",
            "paymentStatus",
            "paymentMethod",
            "details",
            "address",
            "source",
            "isVerified",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_carDetails(self, obj: Booking):  # type: ignore
        """Live car row behind the snapshot, when it still exists."""

        cars = self.context.get("cars")
        if cars is None:
            return None
        car = cars.get(obj.car_id_snapshot)
        if car is None:
            return None
        return {
            "id": car.pk,
            "make": car.make,
            "model": car.model,
            "year": car.year,
            "registrationNumber": car.registration_number,
        }
