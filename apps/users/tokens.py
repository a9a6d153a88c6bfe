"""Access and refresh token issuing.

Both token classes are HS256 JWTs carrying the user id (``sub``), the
token class (``type``), a unique id (``jti``), ``iat`` and ``exp``. Each
class is signed with its own key, so a refresh token never verifies as
an access token and the other way round.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Any

import jwt
from django.conf import settings  # type: ignore
from django.core.exceptions import ImproperlyConfigured  # type: ignore

ACCESS = "access"
REFRESH = "refresh"


class InvalidToken(Exception):
    """Token is malformed, has a bad signature or the wrong class."""


class ExpiredToken(InvalidToken):
    """Token signature is fine but its ``exp`` is in the past."""

    def __init__(self, expired_at: datetime | None = None):
        super().__init__("Token expired")
        self.expired_at = expired_at


@dataclass(frozen=True)
class TokenPair:
    access: str
    refresh: str


class TokenIssuer:
    """Issues and verifies access/refresh token pairs."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_lifetime: timedelta = timedelta(minutes=15),
        refresh_lifetime: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ):
        if not access_secret or not refresh_secret:
            raise ImproperlyConfigured("Both token secrets must be configured.")
        if access_secret == refresh_secret:
            raise ImproperlyConfigured("Access and refresh token secrets must differ.")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self._lifetimes = {ACCESS: access_lifetime, REFRESH: refresh_lifetime}
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls) -> "TokenIssuer":
        conf = settings.AUTH_TOKENS
        return cls(
            access_secret=conf["ACCESS_TOKEN_SECRET"],
            refresh_secret=conf["REFRESH_TOKEN_SECRET"],
            access_lifetime=conf.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=15)),
            refresh_lifetime=conf.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7)),
            algorithm=conf.get("ALGORITHM", "HS256"),
        )

    def _encode(self, user_id: Any, token_type: str, now: datetime) -> str:
        payload = {
            "sub": str(user_id),
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self._lifetimes[token_type],
        }
        return jwt.encode(payload, self._secrets[token_type], algorithm=self.algorithm)

    def issue_pair(self, user_id: Any) -> TokenPair:
        now = datetime.now(dt_timezone.utc)
        return TokenPair(
            access=self._encode(user_id, ACCESS, now),
            refresh=self._encode(user_id, REFRESH, now),
        )

    def _decode(self, token: str, token_type: str) -> dict[str, Any]:
        secret = self._secrets[token_type]
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub", "type"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredToken(self._expiry_of(token, secret)) from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc

        if payload.get("type") != token_type:
            raise InvalidToken(f"Expected a {token_type} token.")
        return payload

    def _expiry_of(self, token: str, secret: str) -> datetime | None:
        # Signature was already checked by the failed decode; only exp is read.
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except jwt.InvalidTokenError:
            return None
        exp = payload.get("exp")
        if exp is None:
            return None
        return datetime.fromtimestamp(int(exp), tz=dt_timezone.utc)

    def decode_access(self, token: str) -> dict[str, Any]:
        return self._decode(token, ACCESS)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self._decode(token, REFRESH)


def get_token_issuer() -> TokenIssuer:
    """Issuer built from the current ``AUTH_TOKENS`` settings."""

    return TokenIssuer.from_settings()
