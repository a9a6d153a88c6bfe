"""Serializers for user-related API responses."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public view of an account; never exposes the password hash."""

    isAdmin = serializers.BooleanField(source="is_admin", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "isAdmin"]
        read_only_fields = fields
