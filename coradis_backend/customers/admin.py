# customers/admin.py

from django.contrib import admin

from customers.models import Customer, ScratchCard


class ScratchCardInline(admin.TabularInline):
    model = ScratchCard
    extra = 0
    can_delete = False
    fields = ("reward_label", "source", "scratched", "scratched_at", "redeemed_at", "created_at")
    readonly_fields = fields


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = (
        "referral_code",
        "customer_name",
        "customer_phone",
        "total_orders",
        "total_spent",
        "loyalty_points",
        "created_at",
    )
    search_fields = ("referral_code", "user__name", "user__phone")
    ordering = ("-created_at",)
    readonly_fields = ("referral_code", "referred_by", "total_orders", "total_spent", "created_at")
    raw_id_fields = ("user",)
    inlines = [ScratchCardInline]

    @admin.display(description="Nom", ordering="user__name")
    def customer_name(self, obj):
        return obj.name

    @admin.display(description="Téléphone", ordering="user__phone")
    def customer_phone(self, obj):
        return obj.phone


@admin.register(ScratchCard)
class ScratchCardAdmin(admin.ModelAdmin):
    list_display = ("customer", "reward", "source", "scratched", "redeemed_at", "created_at")
    list_filter = ("reward", "source", "scratched")
    search_fields = ("customer__referral_code", "customer__user__phone")
    readonly_fields = ("scratched_at", "redeemed_at", "created_at")
