from django.contrib import admin

from otp.models import OneTimePassword


@admin.register(OneTimePassword)
class OneTimePasswordAdmin(admin.ModelAdmin):
    list_display = ("phone", "verified", "attempts", "expires_at", "created_at")
    list_filter = ("verified",)
    search_fields = ("phone",)
    ordering = ("-created_at",)
    # Codes are never shown in the admin
    exclude = ("code",)
    readonly_fields = ("phone", "verified", "attempts", "expires_at", "created_at")

    def has_add_permission(self, request):
        return False
