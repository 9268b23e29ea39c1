"""
CUSTOMER AUTH VIEWS (STOREFRONT)

Endpoints:
- POST /api/customers/register/  -> create account (+ optional referral), JWT pair
- POST /api/customers/login/     -> phone + password, JWT pair
- GET  /api/customers/me/        -> {is_authenticated, customer?} (never 401)
- POST /api/customers/logout/    -> blacklist refresh token

Security hardening:
- Register/login are throttled (public_write / anon)
- Same error message for unknown phone and wrong password
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from customers.serializers import (
    CustomerLoginSerializer,
    CustomerLogoutSerializer,
    CustomerRegisterSerializer,
    CustomerSerializer,
)
from customers.services.accounts import authenticate_customer, customer_for, register_customer
from customers.services.exceptions import CustomerServiceError
from customers.views.base import error_status
from users.authentication import OptionalJWTAuthentication
from users.tokens import issue_tokens, revoke_refresh_token

logger = logging.getLogger(__name__)


class CustomerRegisterThrottle(AnonRateThrottle):
    scope = "public_write"


class CustomerLoginThrottle(AnonRateThrottle):
    scope = "anon"


# ---------------- REGISTER ----------------
class CustomerRegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [CustomerRegisterThrottle]

    @extend_schema(
        tags=["Customer auth"],
        request=CustomerRegisterSerializer,
        responses={
            201: dict,
            400: OpenApiResponse(description="Phone already used / not verified / bad referral code"),
        },
    )
    def post(self, request):
        serializer = CustomerRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = register_customer(**serializer.validated_data)
        except CustomerServiceError as exc:
            return Response({"detail": str(exc)}, status=error_status(exc))

        return Response(
            {
                "success": True,
                "customer_id": customer.pk,
                "message": "Compte créé avec succès!",
                **issue_tokens(customer.user),
                "customer": CustomerSerializer(customer).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ---------------- LOGIN ----------------
class CustomerLoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [CustomerLoginThrottle]

    @extend_schema(
        tags=["Customer auth"],
        request=CustomerLoginSerializer,
        responses={200: dict, 401: OpenApiResponse(description="Invalid credentials")},
    )
    def post(self, request):
        serializer = CustomerLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = authenticate_customer(request=request, **serializer.validated_data)
        except CustomerServiceError as exc:
            return Response({"detail": str(exc)}, status=error_status(exc))

        logger.info("Customer logged in", extra={"customer_id": customer.pk})

        return Response(
            {
                "success": True,
                **issue_tokens(customer.user),
                "customer": CustomerSerializer(customer).data,
            }
        )


# ---------------- CHECK AUTH ----------------
class CustomerCheckAuthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(tags=["Customer auth"], responses={200: dict})
    def get(self, request):
        customer = customer_for(request.user)
        if customer is None:
            return Response({"is_authenticated": False})

        return Response({"is_authenticated": True, "customer": CustomerSerializer(customer).data})


# ---------------- LOGOUT ----------------
class CustomerLogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(tags=["Customer auth"], request=CustomerLogoutSerializer, responses={200: dict})
    def post(self, request):
        serializer = CustomerLogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        revoke_refresh_token(serializer.validated_data.get("refresh"))
        return Response({"success": True})
