"""API error taxonomy and the JSON error envelope.

Every failure leaves the API as::

    {"success": false, "message": "...", "error": "...", "errors": {...}}

``error`` and ``errors`` are only present when there is something to put
in them. Expired access tokens additionally carry ``expiredAt``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore

logger = logging.getLogger(__name__)


class BadRequest(exceptions.APIException):
    """Malformed, missing or wrongly typed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"

    def __init__(self, detail=None, code=None, error: str | None = None):
        super().__init__(detail, code)
        self.error = error


class Unauthorized(exceptions.APIException):
    """Missing, invalid or expired access credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authorized."
    default_code = "unauthorized"


class TokenExpired(Unauthorized):
    """Access token past its expiry; clients may try a refresh."""

    default_detail = "Token expired"
    default_code = "token_expired"

    def __init__(self, expired_at: datetime | None = None, detail=None, code=None):
        super().__init__(detail, code)
        self.expired_at = expired_at


class Forbidden(exceptions.APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden."
    default_code = "forbidden"


class NotFound(exceptions.APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class Conflict(exceptions.APIException):
    """Duplicate user or overlapping booking dates."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class ServerError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server error."
    default_code = "server_error"


# Messages used in place of DRF's defaults.
_DEFAULT_MESSAGES: dict[type, str] = {
    exceptions.NotAuthenticated: "Not authorized, token missing",
    exceptions.ValidationError: "Validation error",
    exceptions.ParseError: "Malformed request body",
}


def _message_for(exc: exceptions.APIException) -> str:
    for exc_type, message in _DEFAULT_MESSAGES.items():
        if isinstance(exc, exc_type):
            return message
    detail = exc.detail
    if isinstance(detail, (list, dict)):
        return str(exc.default_detail)
    return str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """DRF exception handler rendering the ``success/message`` envelope."""

    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = Forbidden()

    # Imported here: rest_framework.views loads the authentication classes,
    # which import this module.
    from rest_framework import views as drf_views  # type: ignore

    response = drf_views.exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
        return Response(
            {"success": False, "message": str(ServerError.default_detail)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    body: dict[str, Any] = {"success": False, "message": _message_for(exc)}
    if isinstance(exc, exceptions.ValidationError):
        body["errors"] = exc.detail
    if getattr(exc, "error", None):
        body["error"] = exc.error
    if isinstance(exc, TokenExpired) and exc.expired_at is not None:
        body["expiredAt"] = exc.expired_at.isoformat()
    response.data = body
    return response
