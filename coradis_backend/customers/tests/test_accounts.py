# customers/tests/test_accounts.py

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from customers.models import Customer, ScratchCard
from customers.services.accounts import register_customer
from customers.services.exceptions import InvalidPhoneNumber
from otp.models import OneTimePassword

User = get_user_model()

OTP_REQUIRED = {
    "CODE_LENGTH": 6,
    "TTL_MINUTES": 10,
    "MAX_ATTEMPTS": 5,
    "REQUIRED_FOR_REGISTRATION": True,
    "EXPOSE_CODE": False,
}


class CustomerRegisterTests(TestCase):
    """
    GUARANTEES:
    - Phones are normalized and unique
    - Registration returns a JWT pair
    - A bad referral code creates nothing
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("customers:register")
        self.payload = {
            "name": "Awa Koné",
            "phone": "07 07 07 07 07",
            "password": "secret123",
            "address": "Cocody, Riviera 2",
        }

    def test_register_creates_user_and_loyalty_profile(self):
        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["message"], "Compte créé avec succès!")
        self.assertIn("access", res.data)

        customer = Customer.objects.get(pk=res.data["customer_id"])
        self.assertEqual(customer.phone, "+225707070707")
        self.assertEqual(customer.address, "Cocody, Riviera 2")
        self.assertEqual(customer.loyalty_points, 0)
        self.assertRegex(customer.referral_code, r"^[A-Z0-9]{6}$")
        self.assertTrue(customer.user.is_customer)

    def test_duplicate_phone_is_rejected(self):
        self.client.post(self.url, self.payload, format="json")
        self.payload["phone"] = "+225707070707"

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Ce numéro de téléphone est déjà utilisé")

    def test_short_password_is_rejected(self):
        self.payload["password"] = "123"
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, 400)

    def test_phone_must_be_a_real_number(self):
        for phone in ("abcdefgh", "1" * 31):
            self.payload["phone"] = phone

            res = self.client.post(self.url, self.payload, format="json")

            self.assertEqual(res.status_code, 400, phone)
            self.assertEqual(res.data["phone"], ["Numéro de téléphone invalide"])

        self.assertFalse(User.objects.exists())

    def test_service_rejects_invalid_phone(self):
        with self.assertRaises(InvalidPhoneNumber):
            register_customer(name="Awa", phone="abcdefgh", password="secret123")
        self.assertFalse(Customer.objects.exists())

    def test_register_with_referral_code(self):
        sponsor = register_customer(name="Parrain", phone="0101010101", password="secret123")
        self.payload["referral_code"] = sponsor.referral_code.lower()

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 201)
        customer = Customer.objects.get(pk=res.data["customer_id"])
        self.assertEqual(customer.referred_by, sponsor)
        self.assertEqual(customer.scratch_cards.count(), 1)
        self.assertEqual(sponsor.scratch_cards.get().source, ScratchCard.Source.REFERRAL_SPONSOR)

    def test_invalid_referral_code_creates_nothing(self):
        self.payload["referral_code"] = "ZZZZZZ"

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Code de parrainage invalide")
        self.assertFalse(User.objects.filter(phone="+225707070707").exists())

    @override_settings(OTP=OTP_REQUIRED)
    def test_verified_otp_is_required_and_consumed(self):
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, 400)

        OneTimePassword.objects.create(
            phone="+225707070707",
            code="123456",
            verified=True,
            expires_at=timezone.now() + timedelta(minutes=5),
        )

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertFalse(OneTimePassword.objects.exists())


class CustomerLoginTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")

    def test_login_with_any_phone_format(self):
        res = self.client.post(
            reverse("customers:login"),
            {"phone": "07-07-07-07-07", "password": "secret123"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["customer"]["id"], self.customer.pk)
        self.assertIn("refresh", res.data)

    def test_login_rejects_text_phone(self):
        res = self.client.post(
            reverse("customers:login"),
            {"phone": "abcdefgh", "password": "secret123"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("phone", res.data)

    def test_wrong_password(self):
        res = self.client.post(
            reverse("customers:login"),
            {"phone": "0707070707", "password": "nope"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["detail"], "Numéro de téléphone ou mot de passe incorrect")

    def test_admin_cannot_log_in_as_customer(self):
        admin = User.objects.create_admin(username="gerant", email="g@coradis.ci", password="secret123")
        admin.phone = "+225606060606"
        admin.save(update_fields=["phone"])

        res = self.client.post(
            reverse("customers:login"),
            {"phone": "0606060606", "password": "secret123"},
            format="json",
        )
        self.assertEqual(res.status_code, 401)

    def test_check_auth(self):
        res = self.client.get(reverse("customers:me"))
        self.assertFalse(res.data["is_authenticated"])

        access = self.client.post(
            reverse("customers:login"),
            {"phone": "0707070707", "password": "secret123"},
            format="json",
        ).data["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        res = self.client.get(reverse("customers:me"))
        self.assertTrue(res.data["is_authenticated"])
        self.assertEqual(res.data["customer"]["referral_code"], self.customer.referral_code)

    def test_logout(self):
        res = self.client.post(reverse("customers:logout"), {}, format="json")
        self.assertEqual(res.status_code, 200)


class CustomerProfileTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")
        self.client.force_authenticate(self.customer.user)

    def test_profile_requires_authentication(self):
        self.client.force_authenticate(None)
        res = self.client.get(reverse("customers:profile"))
        self.assertEqual(res.status_code, 401)

    def test_admin_has_no_customer_profile(self):
        admin = User.objects.create_admin(username="gerant", email="g@coradis.ci", password="secret123")
        self.client.force_authenticate(admin)

        res = self.client.get(reverse("customers:profile"))
        self.assertEqual(res.status_code, 403)

    def test_get_and_update_profile(self):
        res = self.client.patch(
            reverse("customers:profile"),
            {"name": "Awa Koné", "email": "awa@example.ci", "address": "Marcory"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["message"], "Profil mis à jour")

        res = self.client.get(reverse("customers:profile"))
        self.assertEqual(res.data["name"], "Awa Koné")
        self.assertEqual(res.data["email"], "awa@example.ci")
        self.assertEqual(res.data["address"], "Marcory")
        self.assertEqual(res.data["phone"], "+225707070707")

    def test_name_must_have_two_characters(self):
        res = self.client.patch(reverse("customers:profile"), {"name": "A"}, format="json")
        self.assertEqual(res.status_code, 400)
