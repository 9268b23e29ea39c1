from rest_framework import serializers

from users.serializers import PhoneNumberField


class SendOtpSerializer(serializers.Serializer):
    phone = PhoneNumberField()


class VerifyOtpSerializer(serializers.Serializer):
    phone = PhoneNumberField()
    code = serializers.RegexField(
        r"^\d{6}$",
        error_messages={"invalid": "Le code doit contenir 6 chiffres"},
    )


class DeleteOtpSerializer(serializers.Serializer):
    phone = PhoneNumberField()
