"""
LOYALTY ENDPOINTS

- GET  /api/customers/discount/                    -> tier discount for the next order
- GET  /api/customers/scratch-cards/               -> own cards, newest first
- POST /api/customers/scratch-cards/<id>/scratch/  -> reveal the reward (once)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from customers.serializers import ScratchCardSerializer
from customers.services.accounts import customer_for
from customers.services.exceptions import CustomerServiceError
from customers.services.loyalty import available_discount, scratch_card
from customers.views.base import CustomerAPIView, error_status
from users.authentication import OptionalJWTAuthentication


class AvailableDiscountView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(
        tags=["Loyalty"],
        responses={200: dict},
        description="Anonymous callers never have a discount.",
    )
    def get(self, request):
        return Response(available_discount(customer_for(request.user)))


class ScratchCardListView(CustomerAPIView):
    @extend_schema(tags=["Loyalty"], responses={200: ScratchCardSerializer(many=True)})
    def get(self, request):
        cards = self.get_customer().scratch_cards.order_by("-created_at")
        return Response(ScratchCardSerializer(cards, many=True).data)


class ScratchCardScratchView(CustomerAPIView):
    @extend_schema(
        tags=["Loyalty"],
        request=None,
        responses={
            200: dict,
            403: OpenApiResponse(description="Card belongs to someone else"),
            404: OpenApiResponse(description="Card not found"),
            409: OpenApiResponse(description="Card already scratched"),
        },
    )
    def post(self, request, card_id: int):
        try:
            card = scratch_card(self.get_customer(), card_id)
        except CustomerServiceError as exc:
            return Response({"detail": str(exc)}, status=error_status(exc))

        return Response(
            {
                "success": True,
                "reward": card.reward,
                "reward_label": card.reward_label,
                "scratch_card": ScratchCardSerializer(card).data,
            }
        )
