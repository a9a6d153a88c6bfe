"""API views for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.cars.models import Car
from apps.users.permissions import IsAdmin

from . import mutations, services
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingCreateSerializer, BookingImageSerializer, BookingSerializer

logger = logging.getLogger(__name__)


def _uploaded_image(request):
    """Validated ``carImage`` upload, or ``None`` when nothing was sent."""

    serializer = BookingImageSerializer(data=request.FILES)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get("carImage")


def _car_map(bookings) -> dict:
    """Live cars referenced by the bookings' snapshots, keyed by id."""

    ids = {booking.car_id_snapshot for booking in bookings}
    ids = {car_id for car_id in ids if isinstance(car_id, int)}
    if not ids:
        return {}
    return {car.pk: car for car in Car.objects.filter(pk__in=ids)}


class BookingViewSet(viewsets.GenericViewSet):
    """Customer booking requests and the admin booking desk."""

    queryset = Booking.objects.select_related("user").all()
    serializer_class = BookingSerializer
    filterset_class = BookingFilterSet
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def get_permissions(self):  # type: ignore
        if self.action in ("create", "my_bookings"):
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    def _serialize(self, bookings, many: bool = False):
        items = list(bookings) if many else [bookings]
        context = self.get_serializer_context()
        context["cars"] = _car_map(items)
        return BookingSerializer(items if many else bookings, many=many, context=context).data

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = _uploaded_image(request)
        booking = services.create_booking(request.user, serializer.to_booking_request(), image=image)
        return Response(
            {
                "success": True,
                "message": "Booking created successfully",
                "booking": self._serialize(booking),
            },
            status=status.HTTP_201_CREATED,
        )

    def list(self, request, *args, **kwargs):  # type: ignore
        data = self._serialize(self.filter_queryset(self.get_queryset()), many=True)
        return Response({"success": True, "data": data, "count": len(data)})

    @action(detail=False, methods=["get"], url_path="my-bookings")
    def my_bookings(self, request):  # type: ignore
        data = self._serialize(self.get_queryset().filter(user=request.user), many=True)
        return Response({"success": True, "data": data, "count": len(data)})

    def update(self, request, pk=None, *args, **kwargs):  # type: ignore
        image = _uploaded_image(request)
        booking = mutations.update_booking(pk, request.data, new_image=image)
        return Response(
            {
                "success": True,
                "message": "Booking updated successfully",
                "data": self._serialize(booking),
            }
        )

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        booking = mutations.set_status(pk, request.data.get("status"))
        return Response(
            {
                "success": True,
                "data": self._serialize(booking),
                "message": "Booking status updated successfully",
            }
        )

    def destroy(self, request, pk=None, *args, **kwargs):  # type: ignore
        mutations.delete_booking(pk)
        return Response({"success": True, "message": "Booking deleted successfully"})
