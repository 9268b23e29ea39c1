# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Catalog admin.

- Slug id is editable on creation only.
- Availability and sort order are editable straight from the list.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "brand",
        "category",
        "price",
        "unit",
        "is_available",
        "sort_order",
    )
    list_editable = ("is_available", "sort_order")
    list_filter = ("brand", "category", "is_available")
    search_fields = ("id", "name")
    ordering = ("sort_order", "name")
    readonly_fields = ("created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ("id",) + self.readonly_fields
        return self.readonly_fields
