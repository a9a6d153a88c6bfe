"""Permission classes for the users domain."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from apps.core.exceptions import Unauthorized


class IsAdmin(permissions.BasePermission):
    """Only identities carrying the admin flag pass.

    Authenticated non-admins get 401 "Not authorized as admin", the same
    answer the API gives for a missing credential.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if not getattr(user, "is_admin", False):
            raise Unauthorized("Not authorized as admin")
        return True
