from rest_framework import serializers
from django.contrib.auth import get_user_model

from users.phone import is_valid_phone, looks_like_phone, normalize_phone

User = get_user_model()


# ---------------- PHONE (INPUT) ----------------
class PhoneNumberField(serializers.CharField):
    """
    Accepts local or international formats and returns the normalized
    +225... number, so views and services only ever see stored values.
    """

    default_error_messages = {
        "invalid_phone": "Numéro de téléphone invalide",
    }

    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", 32)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if not looks_like_phone(value):
            self.fail("invalid_phone")

        normalized = normalize_phone(value)
        if not is_valid_phone(normalized):
            self.fail("invalid_phone")
        return normalized


# ---------------- ADMIN LOGIN (INPUT ONLY) ----------------
class AdminLoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """
    username = serializers.CharField(help_text="Username or email")
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- CREATE ADMIN ----------------
class CreateAdminSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    password = serializers.CharField(
        min_length=6,
        write_only=True,
        style={"input_type": "password"},
    )
    email = serializers.EmailField()

    def validate_username(self, value):
        value = value.strip()
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Ce nom d'utilisateur existe déjà")
        return value

    def create(self, validated_data):
        return User.objects.create_admin(
            username=validated_data["username"],
            email=validated_data["email"],
            password=validated_data["password"],
        )


# ---------------- LOGOUT ----------------
class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)


# ---------------- ADMIN OUTPUT ----------------
class AdminSerializer(serializers.ModelSerializer):
    """
    Safe admin representation for the dashboard.
    """
    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
        ]
