"""
ADMIN AUTH VIEWS (DASHBOARD)

Endpoints:
- POST /api/auth/admin/login/   -> JWT pair + admin summary
- GET  /api/auth/admin/me/      -> {is_authenticated, admin?} (never 401)
- POST /api/auth/admin/logout/  -> blacklist refresh token
- POST /api/auth/admin/create/  -> create another admin (admins only)

Security hardening:
- Login is throttled (anon scope)
- Only users with role=admin can sign in here
- Same error message for unknown user and wrong password
"""

from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from permissions.roles import CAP_ADMINS_MANAGE, HasCapability, ROLE_ADMIN
from users.authentication import OptionalJWTAuthentication
from users.serializers import (
    AdminLoginSerializer,
    AdminSerializer,
    CreateAdminSerializer,
    LogoutSerializer,
)
from users.tokens import issue_tokens, revoke_refresh_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Nom d'utilisateur ou mot de passe incorrect"


# ---------------- THROTTLES (TARGETED) ----------------
class AdminLoginThrottle(AnonRateThrottle):
    """
    Anonymous login throttling.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['anon'].
    """
    scope = "anon"


# ---------------- LOGIN ----------------
class AdminLoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AdminLoginThrottle]

    @extend_schema(
        tags=["Admin auth"],
        request=AdminLoginSerializer,
        responses={200: dict, 401: OpenApiResponse(description="Invalid credentials")},
        description="Authenticate an admin with username (or email) and password",
    )
    def post(self, request):
        serializer = AdminLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request=request,
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
            role=ROLE_ADMIN,
        )

        if not user:
            logger.warning(
                "Admin login failed",
                extra={"username": serializer.validated_data["username"]},
            )
            return Response(
                {"detail": INVALID_CREDENTIALS},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        logger.info("Admin logged in", extra={"admin_id": str(user.id)})

        return Response(
            {
                "success": True,
                **issue_tokens(user),
                "admin": AdminSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


# ---------------- CHECK AUTH ----------------
class AdminCheckAuthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(
        tags=["Admin auth"],
        responses={200: dict},
        description="Tell the dashboard whether the bearer token belongs to an admin",
    )
    def get(self, request):
        user = request.user

        if not user or not user.is_authenticated or user.role != ROLE_ADMIN:
            return Response({"is_authenticated": False})

        return Response(
            {
                "is_authenticated": True,
                "admin": AdminSerializer(user).data,
            }
        )


# ---------------- LOGOUT ----------------
class AdminLogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(
        tags=["Admin auth"],
        request=LogoutSerializer,
        responses={200: dict},
        description="Revoke the refresh token (always succeeds)",
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        revoke_refresh_token(serializer.validated_data.get("refresh"))

        return Response({"success": True})


# ---------------- CREATE ADMIN ----------------
class CreateAdminView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ADMINS_MANAGE

    @extend_schema(
        tags=["Admin auth"],
        request=CreateAdminSerializer,
        responses={201: dict, 400: OpenApiResponse(description="Validation error")},
        description="Create another admin account",
    )
    def post(self, request):
        serializer = CreateAdminSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = serializer.save()

        logger.info(
            "Admin account created",
            extra={"admin_id": str(admin.id), "created_by": str(request.user.id)},
        )

        return Response(
            {
                "success": True,
                "message": "Administrateur créé avec succès",
                "admin": AdminSerializer(admin).data,
            },
            status=status.HTTP_201_CREATED,
        )
