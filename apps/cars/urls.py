"""URL routing for the car catalogue."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import CarViewSet

router = SimpleRouter(trailing_slash=False)
router.register(r"cars", CarViewSet, basename="car")

urlpatterns = [
    path("", include(router.urls)),
]
