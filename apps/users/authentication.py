"""DRF authentication backed by the access-token issuer."""

from __future__ import annotations

from rest_framework import authentication  # type: ignore

from .services import authenticate_access_token


class AccessTokenAuthentication(authentication.BaseAuthentication):
    """Reads ``Authorization: Bearer <access token>``.

    Requests without the header stay anonymous so public endpoints keep
    working; a present but bad token fails the request.
    """

    keyword = "Bearer"

    def authenticate(self, request):  # type: ignore
        header = authentication.get_authorization_header(request).decode("latin-1")
        if not header:
            return None

        parts = header.split()
        if not parts or parts[0] != self.keyword:
            return None
        token = parts[1] if len(parts) == 2 else None
        user = authenticate_access_token(token)
        return user, token

    def authenticate_header(self, request):  # type: ignore
        return f'{self.keyword} realm="api"'
