"""
CUSTOMER ORDER HISTORY + FAVORITES

- GET    /api/customers/orders/              -> own orders, newest first
- GET    /api/customers/favorites/           -> saved carts
- POST   /api/customers/favorites/           -> {order_id}: save one of my orders
- DELETE /api/customers/favorites/<id>/
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response

from customers.views.base import CustomerAPIView
from orders.models import FavoriteOrder, Order
from orders.serializers import AddFavoriteSerializer, FavoriteOrderSerializer, OrderSerializer

logger = logging.getLogger(__name__)


class MyOrdersView(CustomerAPIView):
    @extend_schema(tags=["Customer orders"], responses={200: OrderSerializer(many=True)})
    def get(self, request):
        orders = (
            Order.objects.filter(customer=self.get_customer())
            .prefetch_related("items")
            .order_by("-created_at")
        )
        return Response(OrderSerializer(orders, many=True).data)


class FavoriteOrderListView(CustomerAPIView):
    @extend_schema(tags=["Customer orders"], responses={200: FavoriteOrderSerializer(many=True)})
    def get(self, request):
        favorites = FavoriteOrder.objects.filter(customer=self.get_customer()).order_by("-created_at")
        return Response(FavoriteOrderSerializer(favorites, many=True).data)

    @extend_schema(
        tags=["Customer orders"],
        request=AddFavoriteSerializer,
        responses={201: dict, 404: OpenApiResponse(description="Order not found")},
    )
    def post(self, request):
        serializer = AddFavoriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = self.get_customer()
        order = (
            Order.objects.filter(pk=serializer.validated_data["order_id"], customer=customer)
            .prefetch_related("items")
            .first()
        )
        if order is None:
            return Response({"detail": "Commande non trouvée"}, status=status.HTTP_404_NOT_FOUND)

        favorite = FavoriteOrder.objects.create(
            customer=customer,
            items=[
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_unit": item.product_unit,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                }
                for item in order.items.all()
                if not item.is_reward
            ],
            delivery_address=order.delivery_address,
            notes=order.notes,
            source_order_no=order.order_no,
        )

        logger.info("Favorite order saved", extra={"customer_id": customer.pk, "order_no": order.order_no})

        return Response(
            {
                "success": True,
                "message": "Commande ajoutée aux favoris",
                "favorite": FavoriteOrderSerializer(favorite).data,
            },
            status=status.HTTP_201_CREATED,
        )


class FavoriteOrderDetailView(CustomerAPIView):
    @extend_schema(tags=["Customer orders"], responses={204: None, 404: OpenApiResponse(description="Not found")})
    def delete(self, request, favorite_id: int):
        favorite = get_object_or_404(FavoriteOrder, pk=favorite_id, customer=self.get_customer())
        favorite.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
