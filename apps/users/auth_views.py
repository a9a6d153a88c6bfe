"""Views for authentication flows (register, login, token refresh, validate)."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.permissions import AllowAny, IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from . import services
from .auth_serializers import LoginSerializer, RefreshSerializer, RegisterSerializer
from .serializers import UserSerializer


def _auth_payload(result: services.AuthResult, message: str) -> dict:
    return {
        "success": True,
        "message": message,
        "accessToken": result.tokens.access,
        "refreshToken": result.tokens.refresh,
        "user": UserSerializer(result.user).data,
    }


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.register(**serializer.validated_data)
        return Response(_auth_payload(result, "Account created successfully."), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.login(**serializer.validated_data)
        return Response(_auth_payload(result, "Login successful!"), status=status.HTTP_200_OK)


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.refresh_tokens(serializer.validated_data["refreshToken"])
        return Response(_auth_payload(result, "Token refreshed successfully"), status=status.HTTP_200_OK)


class ValidateTokenView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(
            {
                "success": True,
                "message": "Token is valid",
                "user": UserSerializer(request.user).data,
            }
        )
