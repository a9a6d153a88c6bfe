"""URL routing for the checkout stub."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ConfirmPaymentView, CreateCheckoutSessionView

app_name = "payments"

urlpatterns = [
    path("create-checkout-session", CreateCheckoutSessionView.as_view(), name="create-checkout-session"),
    path("confirm", ConfirmPaymentView.as_view(), name="confirm"),
]
