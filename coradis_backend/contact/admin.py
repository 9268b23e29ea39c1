from django.contrib import admin

from contact.models import ContactMessage


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ("subject", "name", "email", "phone", "status", "created_at")
    list_filter = ("status",)
    list_editable = ("status",)
    search_fields = ("name", "email", "phone", "subject")
    ordering = ("-created_at",)
    readonly_fields = ("name", "email", "phone", "subject", "message", "created_at", "updated_at")
