# orders/admin.py
"""
=====================================================
PATH: orders/admin.py
=====================================================

Orders admin.

- Amounts and items are read-only: they come from checkout pricing.
- Status changes should go through the dashboard API so lifecycle rules
  (and loyalty reversal on cancel) apply; the admin only views orders.
"""

from django.contrib import admin

from orders.models import FavoriteOrder, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ("product_name", "product_unit", "quantity", "unit_price", "total_price", "is_reward")
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_no",
        "customer_name",
        "customer_phone",
        "delivery_zone",
        "delivery_date",
        "is_urgent",
        "total_amount",
        "status",
        "created_at",
    )
    list_filter = ("status", "is_urgent", "delivery_zone", "created_at")
    search_fields = ("order_no", "customer_name", "customer_phone")
    ordering = ("-created_at",)
    inlines = [OrderItemInline]

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False


@admin.register(FavoriteOrder)
class FavoriteOrderAdmin(admin.ModelAdmin):
    list_display = ("customer", "source_order_no", "created_at")
    search_fields = ("source_order_no", "customer__user__phone")
    readonly_fields = ("created_at",)
