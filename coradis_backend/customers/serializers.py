from rest_framework import serializers

from customers.models import Customer, ScratchCard
from users.serializers import PhoneNumberField


# ---------------- AUTH (INPUT ONLY) ----------------
class CustomerRegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=120)
    phone = PhoneNumberField()
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    password = serializers.CharField(min_length=6, write_only=True, style={"input_type": "password"})
    address = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)
    referral_code = serializers.CharField(required=False, allow_blank=True, default="", max_length=12)


class CustomerLoginSerializer(serializers.Serializer):
    phone = PhoneNumberField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class CustomerLogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)


# ---------------- PROFILE ----------------
class CustomerSerializer(serializers.ModelSerializer):
    name = serializers.CharField(read_only=True)
    phone = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    referred = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "phone",
            "email",
            "address",
            "loyalty_points",
            "total_spent",
            "total_orders",
            "referral_code",
            "referred",
            "created_at",
        ]
        read_only_fields = fields

    def get_referred(self, obj) -> bool:
        return obj.referred_by_id is not None


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=120, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)

    def update(self, instance, validated_data):
        user = instance.user
        user_fields = []
        for field in ("name", "email"):
            if field in validated_data:
                setattr(user, field, validated_data[field].strip())
                user_fields.append(field)
        if user_fields:
            user.save(update_fields=user_fields + ["updated_at"])

        if "address" in validated_data:
            instance.address = validated_data["address"].strip()
            instance.save(update_fields=["address"])

        return instance


class UseReferralSerializer(serializers.Serializer):
    referral_code = serializers.CharField(max_length=12)


# ---------------- SCRATCH CARDS ----------------
class ScratchCardSerializer(serializers.ModelSerializer):
    """Reward stays hidden until the card is scratched."""

    class Meta:
        model = ScratchCard
        fields = [
            "id",
            "reward",
            "reward_label",
            "source",
            "scratched",
            "scratched_at",
            "redeemed_at",
            "is_redeemable",
            "created_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not instance.scratched:
            data["reward"] = None
            data["reward_label"] = None
        return data
