from rest_framework import serializers

from contact.models import ContactMessage


class ContactMessageCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = ["name", "email", "phone", "subject", "message"]


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "subject",
            "message",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [f for f in fields if f != "status"]


class ContactStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ContactMessage.STATUS_CHOICES)
