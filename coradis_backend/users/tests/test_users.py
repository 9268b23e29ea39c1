# users/tests/test_users.py

from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework import serializers

from users.phone import is_valid_phone, looks_like_phone, normalize_phone
from users.serializers import PhoneNumberField

User = get_user_model()


class PhoneNormalizationTests(TestCase):
    def test_leading_zero_becomes_country_code(self):
        self.assertEqual(normalize_phone("07 07-07 (07) 07"), "+225707070707")

    def test_missing_plus_gets_country_code(self):
        self.assertEqual(normalize_phone("0101010101"), "+225101010101")
        self.assertEqual(normalize_phone("5501020304"), "+2255501020304")

    def test_international_number_is_kept(self):
        self.assertEqual(normalize_phone("+33 6 12 34 56 78"), "+33612345678")

    def test_empty(self):
        self.assertEqual(normalize_phone(None), "")
        self.assertEqual(normalize_phone("  "), "")

    def test_looks_like_phone(self):
        self.assertTrue(looks_like_phone("07 07 07 07 07"))
        self.assertFalse(looks_like_phone("gerant"))
        self.assertFalse(looks_like_phone("a@b.ci"))


class UserManagerTests(TestCase):
    def test_customer_username_is_derived_from_phone(self):
        user = User.objects.create_customer(phone="0707070707", password="secret123")

        self.assertEqual(user.phone, "+225707070707")
        self.assertEqual(user.username, "client225707070707")
        self.assertTrue(user.is_customer)

    def test_customer_phone_is_unique(self):
        User.objects.create_customer(phone="0707070707", password="secret123")

        with self.assertRaises(ValidationError):
            User.objects.create_customer(phone="+225 707070707", password="secret123")

    def test_customer_requires_phone(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(password="x", role=User.ROLE_CUSTOMER)

    def test_backend_authenticates_customer_by_phone(self):
        user = User.objects.create_customer(phone="0707070707", password="secret123")

        found = authenticate(username="07 07 07 07 07", password="secret123", role=User.ROLE_CUSTOMER)
        self.assertEqual(found, user)

    def test_backend_filters_by_role(self):
        User.objects.create_customer(phone="0707070707", password="secret123")

        found = authenticate(username="0707070707", password="secret123", role=User.ROLE_ADMIN)
        self.assertIsNone(found)

    def test_backend_falls_back_to_username_for_digit_identifiers(self):
        admin = User.objects.create_admin(username="123456", email="caisse@coradis.ci", password="secret123")

        found = authenticate(username="123456", password="secret123", role=User.ROLE_ADMIN)
        self.assertEqual(found, admin)


class PhoneInput(serializers.Serializer):
    phone = PhoneNumberField()


class PhoneNumberFieldTests(TestCase):
    def _validate(self, phone):
        serializer = PhoneInput(data={"phone": phone})
        return serializer.is_valid(), serializer

    def test_returns_normalized_number(self):
        ok, serializer = self._validate("07 07 07 07 07")

        self.assertTrue(ok)
        self.assertEqual(serializer.validated_data["phone"], "+225707070707")

    def test_rejects_text_and_overlong_numbers(self):
        for phone in ("abcdefgh", "1" * 31, "+1234", "07-07-ab-07"):
            ok, serializer = self._validate(phone)
            self.assertFalse(ok, phone)
            self.assertEqual(serializer.errors["phone"], ["Numéro de téléphone invalide"])

    def test_is_valid_phone(self):
        self.assertTrue(is_valid_phone("+225707070707"))
        self.assertFalse(is_valid_phone("+225abcdefgh"))
        self.assertFalse(is_valid_phone("+225" + "1" * 31))
