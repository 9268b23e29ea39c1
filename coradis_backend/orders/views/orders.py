# orders/views/orders.py

"""
ORDER VIEWSET

Public (storefront):
- POST /api/orders/quote/   -> pricing breakdown, nothing saved
- POST /api/orders/         -> place an order (guest or signed-in customer)

Customer (owner) or admin:
- GET /api/orders/<uuid>/

Admin dashboard:
- GET    /api/orders/?status=&is_urgent=&created_from=&created_to=&search=
- PATCH  /api/orders/<uuid>/status/
- DELETE /api/orders/<uuid>/
- GET    /api/orders/stats/

Security hardening:
- Public writes are throttled (public_write)
- Invalid bearer tokens on public endpoints are treated as anonymous
"""

from __future__ import annotations

import logging

import django_filters
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from customers.services.accounts import customer_for
from orders.models import Order
from orders.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    QuoteInputSerializer,
)
from orders.services.checkout import ORDER_CREATED_MESSAGE, create_order
from orders.services.exceptions import InvalidOrderTransition, OrderServiceError
from orders.services.lifecycle import change_status, delete_order
from orders.services.pricing import build_quote, resolve_reward_card
from orders.services.stats import order_stats
from permissions.roles import (
    CAP_ORDERS_MANAGE,
    CAP_ORDERS_VIEW,
    HasCapability,
    user_has_capability,
)
from users.authentication import OptionalJWTAuthentication

logger = logging.getLogger(__name__)


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    is_urgent = django_filters.BooleanFilter()
    delivery_zone = django_filters.ChoiceFilter(choices=Order.ZONE_CHOICES)
    delivery_date = django_filters.DateFilter()
    created_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    created_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = Order
        fields = ["status", "is_urgent", "delivery_zone", "delivery_date"]


def _error_response(exc: OrderServiceError) -> Response:
    code = status.HTTP_409_CONFLICT if isinstance(exc, InvalidOrderTransition) else status.HTTP_400_BAD_REQUEST
    return Response({"detail": str(exc)}, status=code)


@extend_schema_view(
    list=extend_schema(tags=["Orders admin"], description="Newest first, paginated, items included."),
    retrieve=extend_schema(tags=["Orders"], description="Admins see any order; customers only their own."),
    destroy=extend_schema(tags=["Orders admin"]),
)
class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = OrderSerializer
    authentication_classes = [OptionalJWTAuthentication]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_class = OrderFilter
    search_fields = ["customer_name", "customer_phone", "order_no"]

    PUBLIC_ACTIONS = {"create", "quote"}

    CAPABILITY_BY_ACTION = {
        "list": CAP_ORDERS_VIEW,
        "stats": CAP_ORDERS_VIEW,
        "set_status": CAP_ORDERS_MANAGE,
        "destroy": CAP_ORDERS_MANAGE,
    }

    @property
    def required_capability(self):
        return self.CAPABILITY_BY_ACTION.get(self.action)

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [AllowAny()]
        if self.action == "retrieve":
            return [IsAuthenticated()]
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [PublicWriteThrottle()]
        return super().get_throttles()

    def get_queryset(self):
        qs = Order.objects.prefetch_related("items").order_by("-created_at")

        if self.action == "retrieve" and not user_has_capability(self.request.user, CAP_ORDERS_VIEW):
            customer = customer_for(self.request.user)
            return qs.filter(customer=customer) if customer else qs.none()

        return qs

    # -----------------------------
    # Public: quote
    # -----------------------------
    @extend_schema(
        tags=["Orders"],
        request=QuoteInputSerializer,
        responses={200: dict, 400: OpenApiResponse(description="Empty cart / unavailable product / bad card")},
    )
    @action(detail=False, methods=["post"], url_path="quote")
    def quote(self, request):
        serializer = QuoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        customer = customer_for(request.user)
        try:
            quote = build_quote(
                items=data["items"],
                delivery_zone=data["delivery_zone"],
                is_urgent=data["is_urgent"],
                customer=customer,
                redeem_points=data["redeem_points"],
                reward_card=resolve_reward_card(customer, data["reward_card_id"]),
            )
        except OrderServiceError as exc:
            return _error_response(exc)

        return Response(quote.as_dict())

    # -----------------------------
    # Public: place order
    # -----------------------------
    @extend_schema(
        tags=["Orders"],
        request=OrderCreateSerializer,
        responses={201: dict, 400: OpenApiResponse(description="Validation error")},
    )
    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_order(customer=customer_for(request.user), **serializer.validated_data)
        except OrderServiceError as exc:
            return _error_response(exc)

        return Response(
            {
                "success": True,
                "order_id": order.id,
                "order_no": order.order_no,
                "total": order.total_amount,
                "message": ORDER_CREATED_MESSAGE,
            },
            status=status.HTTP_201_CREATED,
        )

    # -----------------------------
    # Admin: status
    # -----------------------------
    @extend_schema(
        tags=["Orders admin"],
        request=OrderStatusSerializer,
        responses={200: OrderSerializer, 409: OpenApiResponse(description="Transition not allowed")},
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        order = self.get_object()

        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = change_status(order=order, target_status=serializer.validated_data["status"], by=request.user)
        except OrderServiceError as exc:
            return _error_response(exc)

        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderSerializer(order).data)

    # -----------------------------
    # Admin: delete
    # -----------------------------
    def perform_destroy(self, instance):
        delete_order(instance)

    # -----------------------------
    # Admin: stats
    # -----------------------------
    @extend_schema(tags=["Orders admin"], responses={200: dict})
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        return Response(order_stats())
