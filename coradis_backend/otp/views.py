# otp/views.py
"""
PHONE VERIFICATION ENDPOINTS (public)

- POST /api/otp/send/    -> WhatsApp code to a phone that has no account yet
- POST /api/otp/verify/  -> mark the code verified
- POST /api/otp/delete/  -> drop all codes for a phone

Security hardening:
- Every endpoint is throttled with the "otp" scope (SMS-pumping / brute force)
- dev_code is only echoed when OTP["EXPOSE_CODE"] is enabled (development)
"""

from __future__ import annotations

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from otp.serializers import DeleteOtpSerializer, SendOtpSerializer, VerifyOtpSerializer
from otp.services.codes import delete_codes, send_code, verify_code
from otp.services.exceptions import (
    OtpDeliveryFailed,
    OtpError,
    OtpExpired,
    TooManyOtpAttempts,
)


class OtpThrottle(AnonRateThrottle):
    scope = "otp"


def _error_status(exc: OtpError) -> int:
    if isinstance(exc, OtpExpired):
        return status.HTTP_410_GONE
    if isinstance(exc, TooManyOtpAttempts):
        return status.HTTP_429_TOO_MANY_REQUESTS
    if isinstance(exc, OtpDeliveryFailed):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


class _OtpView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [OtpThrottle]


class SendOtpView(_OtpView):
    @extend_schema(
        tags=["OTP"],
        request=SendOtpSerializer,
        responses={
            200: dict,
            400: OpenApiResponse(description="Phone already registered / invalid"),
            502: OpenApiResponse(description="WhatsApp delivery failed"),
        },
        description="Send a verification code over WhatsApp",
    )
    def post(self, request):
        serializer = SendOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            sent = send_code(serializer.validated_data["phone"])
        except OtpError as exc:
            return Response({"detail": str(exc)}, status=_error_status(exc))

        payload = {
            "success": True,
            "message": f"Code de vérification envoyé au {sent.phone} via WhatsApp",
            "phone": sent.phone,
        }
        if settings.OTP.get("EXPOSE_CODE"):
            payload["dev_code"] = sent.code

        return Response(payload, status=status.HTTP_200_OK)


class VerifyOtpView(_OtpView):
    @extend_schema(
        tags=["OTP"],
        request=VerifyOtpSerializer,
        responses={
            200: dict,
            400: OpenApiResponse(description="Invalid code"),
            410: OpenApiResponse(description="Code expired"),
            429: OpenApiResponse(description="Too many attempts"),
        },
    )
    def post(self, request):
        serializer = VerifyOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            phone = verify_code(
                serializer.validated_data["phone"],
                serializer.validated_data["code"],
            )
        except OtpError as exc:
            return Response({"detail": str(exc)}, status=_error_status(exc))

        return Response(
            {"success": True, "message": "Numéro vérifié avec succès !", "phone": phone},
            status=status.HTTP_200_OK,
        )


class DeleteOtpView(_OtpView):
    @extend_schema(tags=["OTP"], request=DeleteOtpSerializer, responses={200: dict})
    def post(self, request):
        serializer = DeleteOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        delete_codes(serializer.validated_data["phone"])
        return Response({"success": True})
