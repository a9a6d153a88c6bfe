"""URL routing for authentication endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .auth_views import LoginView, RefreshView, RegisterView, ValidateTokenView

app_name = "auth"

urlpatterns = [
    path("register", RegisterView.as_view(), name="register"),
    path("login", LoginView.as_view(), name="login"),
    path("refresh", RefreshView.as_view(), name="refresh"),
    path("validate", ValidateTokenView.as_view(), name="validate"),
]
