# users/tests/test_admin_auth.py

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

User = get_user_model()


class AdminAuthTests(TestCase):
    """
    Dashboard authentication.

    GUARANTEES:
    - Admins log in with username or email and receive a JWT pair
    - Wrong credentials and customer accounts are rejected with one message
    - Only admins can create other admins
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(
            username="gerant",
            email="gerant@coradis.ci",
            password="secret123",
        )
        self.customer = User.objects.create_customer(
            phone="07 07 07 07 07",
            password="secret123",
            name="Awa",
        )

    def _login(self, username="gerant", password="secret123"):
        return self.client.post(
            reverse("users:admin-login"),
            {"username": username, "password": password},
            format="json",
        )

    def test_login_returns_tokens_and_admin(self):
        res = self._login()

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["admin"]["username"], "gerant")

    def test_login_accepts_email(self):
        res = self._login(username="gerant@coradis.ci")
        self.assertEqual(res.status_code, 200)

    def test_all_digit_username_can_log_in(self):
        User.objects.create_admin(username="123456", email="caisse@coradis.ci", password="secret123")

        res = self._login(username="123456")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["admin"]["username"], "123456")

    def test_wrong_password_is_rejected(self):
        res = self._login(password="nope")

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["detail"], "Nom d'utilisateur ou mot de passe incorrect")

    def test_customer_cannot_use_admin_login(self):
        res = self._login(username=self.customer.username)
        self.assertEqual(res.status_code, 401)

    def test_check_auth_without_token(self):
        res = self.client.get(reverse("users:admin-me"))

        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["is_authenticated"])

    def test_check_auth_with_garbage_token_is_anonymous(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        res = self.client.get(reverse("users:admin-me"))

        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["is_authenticated"])

    def test_check_auth_with_token(self):
        access = self._login().data["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        res = self.client.get(reverse("users:admin-me"))

        self.assertTrue(res.data["is_authenticated"])
        self.assertEqual(res.data["admin"]["email"], "gerant@coradis.ci")

    def test_logout_blacklists_refresh_token(self):
        refresh = self._login().data["refresh"]

        res = self.client.post(reverse("users:admin-logout"), {"refresh": refresh}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])

        res = self.client.post(reverse("users:token-refresh"), {"refresh": refresh}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_logout_without_token_still_succeeds(self):
        res = self.client.post(reverse("users:admin-logout"), {}, format="json")
        self.assertEqual(res.status_code, 200)


class CreateAdminTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(
            username="gerant",
            email="gerant@coradis.ci",
            password="secret123",
        )
        self.url = reverse("users:admin-create")
        self.payload = {"username": "caissier", "email": "caisse@coradis.ci", "password": "secret123"}

    def test_anonymous_cannot_create_admin(self):
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, 401)

    def test_customer_cannot_create_admin(self):
        customer = User.objects.create_customer(phone="0101010101", password="secret123")
        self.client.force_authenticate(customer)

        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, 403)

    def test_admin_creates_admin(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["message"], "Administrateur créé avec succès")
        created = User.objects.get(username="caissier")
        self.assertTrue(created.is_admin)
        self.assertTrue(created.check_password("secret123"))

    def test_duplicate_username_is_rejected(self):
        self.client.force_authenticate(self.admin)
        self.payload["username"] = "GERANT"

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("username", res.data)

    def test_short_password_is_rejected(self):
        self.client.force_authenticate(self.admin)
        self.payload["password"] = "123"

        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, 400)


class CreateAdminCommandTests(TestCase):
    def test_command_is_idempotent(self):
        out = StringIO()
        args = ["--username", "boss", "--email", "boss@coradis.ci", "--password", "secret123"]

        call_command("create_admin", *args, stdout=out)
        call_command("create_admin", "--username", "boss", "--email", "boss@coradis.ci", "--password", "autre123", stdout=out)

        self.assertEqual(User.objects.filter(username="boss").count(), 1)
        boss = User.objects.get(username="boss")
        self.assertTrue(boss.is_admin)
        self.assertTrue(boss.check_password("autre123"))
