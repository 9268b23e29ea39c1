# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalog browsing for the storefront (AllowAny, read-only)
- Dashboard catalog management (create/update/delete, catalog.edit)

Key rules:
- Public callers only ever see available products; an unavailable product
  is a 404 on the detail endpoint.
- Admins see the whole catalog, including unavailable products.
- Catalog is small, so lists are not paginated.
"""

from __future__ import annotations

import logging

import django_filters
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.throttling import AnonRateThrottle

from permissions.roles import CAP_CATALOG_EDIT, HasCapability, user_has_capability
from products.models import Product
from products.serializers import ProductSerializer, PublicProductSerializer
from users.authentication import OptionalJWTAuthentication

logger = logging.getLogger(__name__)


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class ProductFilter(django_filters.FilterSet):
    brand = django_filters.ChoiceFilter(choices=Product.Brand.choices)
    category = django_filters.ChoiceFilter(choices=Product.Category.choices)

    class Meta:
        model = Product
        fields = ["brand", "category"]


@extend_schema_view(
    list=extend_schema(
        tags=["Catalog"],
        parameters=[
            OpenApiParameter("brand", str, OpenApiParameter.QUERY, required=False, enum=Product.Brand.values),
            OpenApiParameter("category", str, OpenApiParameter.QUERY, required=False, enum=Product.Category.values),
        ],
        description="Public catalog (available products only; admins see everything).",
    ),
    retrieve=extend_schema(
        tags=["Catalog"],
        responses={200: PublicProductSerializer, 404: OpenApiResponse(description="Unknown or unavailable product")},
    ),
    create=extend_schema(tags=["Catalog admin"]),
    update=extend_schema(tags=["Catalog admin"]),
    partial_update=extend_schema(tags=["Catalog admin"]),
    destroy=extend_schema(tags=["Catalog admin"]),
)
class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - GET /api/products/?brand=lanaia&category=tissues
    - GET /api/products/<slug>/

    Admin (catalog.edit):
    - POST/PUT/PATCH/DELETE
    """

    authentication_classes = [OptionalJWTAuthentication]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    pagination_class = None
    required_capability = CAP_CATALOG_EDIT

    def _is_catalog_editor(self) -> bool:
        return user_has_capability(self.request.user, CAP_CATALOG_EDIT)

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action in ("list", "retrieve"):
            return [PublicCatalogThrottle()]
        return super().get_throttles()

    def get_serializer_class(self):
        if self._is_catalog_editor():
            return ProductSerializer
        return PublicProductSerializer

    def get_queryset(self):
        qs = Product.objects.all()
        if not self._is_catalog_editor():
            qs = qs.filter(is_available=True)
        return qs.order_by("sort_order", "name")

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info("Product created", extra={"product_id": product.id, "admin_id": str(self.request.user.id)})

    def perform_update(self, serializer):
        product = serializer.save()
        logger.info("Product updated", extra={"product_id": product.id, "admin_id": str(self.request.user.id)})

    def perform_destroy(self, instance):
        logger.info("Product deleted", extra={"product_id": instance.id, "admin_id": str(self.request.user.id)})
        instance.delete()
