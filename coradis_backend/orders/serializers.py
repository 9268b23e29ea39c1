# orders/serializers.py

"""
ORDER SERIALIZERS

Input:
- OrderItemInputSerializer / QuoteInputSerializer / OrderCreateSerializer:
  the storefront only sends product ids and quantities; prices come from
  the catalog.
- OrderStatusSerializer: dashboard status change.

Output:
- OrderSerializer (with items) for the dashboard and "my orders".
"""

from rest_framework import serializers

from orders.models import FavoriteOrder, Order, OrderItem


# ---------------- INPUT ----------------
class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1, max_value=10000)


class QuoteInputSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=False)
    delivery_zone = serializers.ChoiceField(choices=Order.ZONE_CHOICES, default=Order.ZONE_1)
    is_urgent = serializers.BooleanField(default=False)
    redeem_points = serializers.IntegerField(min_value=0, required=False, default=0)
    reward_card_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class OrderCreateSerializer(QuoteInputSerializer):
    customer_name = serializers.CharField(max_length=120)
    customer_phone = serializers.CharField(max_length=40)
    delivery_address = serializers.CharField(max_length=500)
    delivery_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


# ---------------- OUTPUT ----------------
class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_name",
            "product_unit",
            "quantity",
            "unit_price",
            "total_price",
            "is_reward",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    status_label = serializers.CharField(source="get_status_display", read_only=True)
    delivery_zone_label = serializers.CharField(source="get_delivery_zone_display", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_no",
            "customer",
            "customer_name",
            "customer_phone",
            "delivery_address",
            "delivery_zone",
            "delivery_zone_label",
            "delivery_date",
            "is_urgent",
            "notes",
            "subtotal_amount",
            "loyalty_discount_percent",
            "loyalty_discount_amount",
            "points_redeemed",
            "points_discount_amount",
            "delivery_fee",
            "express_fee",
            "total_amount",
            "loyalty_points_earned",
            "reward_card",
            "status",
            "status_label",
            "items",
            "created_at",
            "updated_at",
            "delivered_at",
            "cancelled_at",
        ]
        read_only_fields = fields


class FavoriteOrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = FavoriteOrder
        fields = [
            "id",
            "items",
            "delivery_address",
            "notes",
            "source_order_no",
            "created_at",
        ]
        read_only_fields = fields


class AddFavoriteSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
