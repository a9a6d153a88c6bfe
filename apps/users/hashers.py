"""Password hashers used by the users app."""

from __future__ import annotations

from django.contrib.auth.hashers import BCryptPasswordHasher  # type: ignore


class BCryptCost10PasswordHasher(BCryptPasswordHasher):
    """Plain salted bcrypt with a work factor of 10."""

    rounds = 10
