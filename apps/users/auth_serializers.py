"""Serializers for authentication flows (register, login, refresh)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class RegisterSerializer(serializers.Serializer):
    """Registration payload; content rules are enforced by the service."""

    name = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(required=False, allow_blank=True, default="", write_only=True, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(required=False, allow_blank=True, default="", write_only=True, trim_whitespace=False)


class RefreshSerializer(serializers.Serializer):
    refreshToken = serializers.CharField(required=False, allow_blank=True, default="")
