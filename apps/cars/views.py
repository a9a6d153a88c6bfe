"""Read-only API for the car catalogue."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Car
from .serializers import CarSerializer


class CarViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Car.objects.all()
    serializer_class = CarSerializer
    permission_classes = [permissions.AllowAny]

    def list(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.filter_queryset(self.get_queryset()), many=True)
        return Response({"success": True, "data": serializer.data, "count": len(serializer.data)})

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_object())
        return Response({"success": True, "data": serializer.data})
