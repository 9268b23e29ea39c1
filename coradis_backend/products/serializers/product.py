# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- PublicProductSerializer: read-only shape used by the storefront catalog.
- ProductSerializer: admin create/update (catalog editing).
"""

from rest_framework import serializers

from products.models import Product


class PublicProductSerializer(serializers.ModelSerializer):
    brand_label = serializers.CharField(source="get_brand_display", read_only=True)
    category_label = serializers.CharField(source="get_category_display", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "brand",
            "brand_label",
            "category",
            "category_label",
            "price",
            "unit",
            "image_url",
            "is_available",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """
    Canonical Product serializer for the dashboard.

    GUARANTEES:
    - id is a lowercase slug and cannot change after creation
    - price is a positive whole FCFA amount
    """

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "brand",
            "category",
            "price",
            "unit",
            "image_url",
            "is_available",
            "sort_order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_id(self, value):
        value = (value or "").strip().lower()
        if self.instance is not None and value != self.instance.id:
            raise serializers.ValidationError("L'identifiant d'un produit ne peut pas être modifié")
        return value

    def validate_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Le prix doit être supérieur à zéro")
        return value

    def validate_unit(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("L'unité est obligatoire")
        return value
