# users/admin.py

"""
USERS ADMIN

Admins and customers share one User table; the customer's loyalty
profile is shown inline (read-only, it only moves through checkout).
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from customers.models import Customer

User = get_user_model()


class CustomerInline(admin.StackedInline):
    model = Customer
    can_delete = False
    extra = 0
    fk_name = "user"
    fields = (
        "address",
        "loyalty_points",
        "total_orders",
        "total_spent",
        "referral_code",
        "referred_by",
    )
    readonly_fields = ("loyalty_points", "total_orders", "total_spent", "referral_code", "referred_by")


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("-created_at",)
    list_display = ("username", "name", "phone", "email", "role", "is_active", "created_at")
    list_filter = ("role", "is_active", "is_superuser")
    search_fields = ("username", "phone", "email", "name")
    inlines = [CustomerInline]

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Contact", {"fields": ("name", "phone", "email")}),
        ("Access", {"fields": ("role", "is_active", "is_staff", "is_superuser")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "phone", "email", "role", "password1", "password2"),
            },
        ),
    )

    def get_inlines(self, request, obj):
        if obj is None or not obj.is_customer:
            return []
        return super().get_inlines(request, obj)
