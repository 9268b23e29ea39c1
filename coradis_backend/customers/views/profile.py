"""
CUSTOMER PROFILE + REFERRAL

- GET/PATCH /api/customers/profile/
- POST      /api/customers/referral/  {referral_code}
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response

from customers.serializers import (
    CustomerSerializer,
    ProfileUpdateSerializer,
    ScratchCardSerializer,
    UseReferralSerializer,
)
from customers.services.exceptions import CustomerServiceError
from customers.services.loyalty import REFERRAL_APPLIED_MESSAGE, apply_referral
from customers.views.base import CustomerAPIView, error_status


class CustomerProfileView(CustomerAPIView):
    @extend_schema(tags=["Customer profile"], responses={200: CustomerSerializer})
    def get(self, request):
        return Response(CustomerSerializer(self.get_customer()).data)

    @extend_schema(tags=["Customer profile"], request=ProfileUpdateSerializer, responses={200: dict})
    def patch(self, request):
        customer = self.get_customer()

        serializer = ProfileUpdateSerializer(customer, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        customer = serializer.save()

        return Response(
            {
                "success": True,
                "message": "Profil mis à jour",
                "customer": CustomerSerializer(customer).data,
            }
        )


class UseReferralCodeView(CustomerAPIView):
    @extend_schema(
        tags=["Customer profile"],
        request=UseReferralSerializer,
        responses={200: dict, 400: OpenApiResponse(description="Invalid / own / already used")},
    )
    def post(self, request):
        serializer = UseReferralSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            card = apply_referral(self.get_customer(), serializer.validated_data["referral_code"])
        except CustomerServiceError as exc:
            return Response({"detail": str(exc)}, status=error_status(exc))

        return Response(
            {
                "success": True,
                "message": REFERRAL_APPLIED_MESSAGE,
                "scratch_card": ScratchCardSerializer(card).data,
            }
        )
