"""Credential flows: registration, login, token authentication and refresh."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.hashers import check_password, make_password  # type: ignore
from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.core.validators import validate_email  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore

from apps.core.exceptions import BadRequest, Conflict, Forbidden, NotFound, TokenExpired, Unauthorized

from .models import normalize_email_address
from .tokens import ExpiredToken, InvalidToken, TokenPair, get_token_issuer

logger = logging.getLogger(__name__)

User = get_user_model()

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid email or password."

# Hash compared against when the email is unknown, so both failure paths
# cost one password check.
_DUMMY_PASSWORD_HASH = None


def _dummy_hash() -> str:
    global _DUMMY_PASSWORD_HASH
    if _DUMMY_PASSWORD_HASH is None:
        _DUMMY_PASSWORD_HASH = make_password("not-a-real-password")
    return _DUMMY_PASSWORD_HASH


@dataclass(frozen=True)
class AuthResult:
    user: "User"
    tokens: TokenPair


def _active_user(subject):
    """User named by a token subject, or NotFound."""

    user = User.objects.filter(pk=subject).first() if str(subject).isdigit() else None
    if user is None or not user.is_active:
        raise NotFound("User not found")
    return user


def register(name: str | None, email: str | None, password: str | None) -> AuthResult:
    """Create a customer account and issue its first token pair."""

    name = str(name or "").strip()
    email = normalize_email_address(email)
    password = str(password or "")

    if not name or not email or not password:
        raise BadRequest("All fields are required.")
    try:
        validate_email(email)
    except DjangoValidationError:
        raise BadRequest("Invalid email.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadRequest(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    if User.objects.filter(email=email).exists():
        raise Conflict("User already exists.")

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        raise Conflict("User already exists.")

    logger.info("Registered user %s", user.pk)
    return AuthResult(user=user, tokens=get_token_issuer().issue_pair(user.pk))


def login(email: str | None, password: str | None) -> AuthResult:
    """Verify credentials; every failure looks the same to the caller."""

    email = normalize_email_address(email)
    password = str(password or "")
    if not email or not password:
        raise BadRequest("All fields are required.")

    user = User.objects.filter(email=email).first()
    if user is None:
        check_password(password, _dummy_hash())
        logger.info("Failed login for unknown email")
        raise Unauthorized(INVALID_CREDENTIALS)

    if not user.check_password(password) or not user.is_active:
        logger.info("Failed login for user %s", user.pk)
        raise Unauthorized(INVALID_CREDENTIALS)

    return AuthResult(user=user, tokens=get_token_issuer().issue_pair(user.pk))


def authenticate_access_token(token: str | None):
    """Resolve an access token to its user."""

    if not token:
        raise Unauthorized("Not authorized, token missing")
    try:
        payload = get_token_issuer().decode_access(token)
    except ExpiredToken as exc:
        raise TokenExpired(expired_at=exc.expired_at)
    except InvalidToken:
        raise Unauthorized("Not authorized, token failed")

    return _active_user(payload["sub"])


def refresh_tokens(refresh_token: str | None) -> AuthResult:
    """Verify a refresh token and rotate both tokens."""

    if not refresh_token:
        raise Unauthorized("No refresh token provided")
    try:
        payload = get_token_issuer().decode_refresh(refresh_token)
    except InvalidToken as exc:
        logger.info("Rejected refresh token: %s", exc)
        raise Forbidden("Invalid refresh token")

    user = _active_user(payload["sub"])
    logger.info("Rotated tokens for user %s", user.pk)
    return AuthResult(user=user, tokens=get_token_issuer().issue_pair(user.pk))
