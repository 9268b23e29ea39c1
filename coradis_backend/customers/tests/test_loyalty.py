# customers/tests/test_loyalty.py

from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from customers.models import ScratchCard
from customers.services.accounts import register_customer
from customers.services.loyalty import available_discount, loyalty_discount_percent, random_reward


class ReferralTests(TestCase):
    """
    GUARANTEES:
    - The code must exist and must not be the customer's own
    - A customer is referred at most once
    - Both sides get exactly one scratch card
    """

    def setUp(self):
        self.client = APIClient()
        self.sponsor = register_customer(name="Parrain", phone="0101010101", password="secret123")
        self.customer = register_customer(name="Filleul", phone="0707070707", password="secret123")
        self.client.force_authenticate(self.customer.user)
        self.url = reverse("customers:referral")

    def test_invalid_code(self):
        res = self.client.post(self.url, {"referral_code": "NOPE00"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Code de parrainage invalide")

    def test_own_code(self):
        res = self.client.post(self.url, {"referral_code": self.customer.referral_code}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Vous ne pouvez pas utiliser votre propre code")

    def test_referral_issues_one_card_each(self):
        res = self.client.post(self.url, {"referral_code": self.sponsor.referral_code}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.data["scratch_card"]["reward"])

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.referred_by, self.sponsor)

        invitee_card = self.customer.scratch_cards.get()
        sponsor_card = self.sponsor.scratch_cards.get()
        self.assertEqual(invitee_card.source, ScratchCard.Source.REFERRAL_INVITEE)
        self.assertEqual(sponsor_card.source, ScratchCard.Source.REFERRAL_SPONSOR)
        self.assertFalse(invitee_card.scratched)
        self.assertIn(invitee_card.reward, ScratchCard.Reward.values)

    def test_referral_only_once(self):
        self.client.post(self.url, {"referral_code": self.sponsor.referral_code}, format="json")
        other = register_customer(name="Autre", phone="0505050505", password="secret123")

        res = self.client.post(self.url, {"referral_code": other.referral_code}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(ScratchCard.objects.count(), 2)

    def test_random_reward_label_matches(self):
        with mock.patch("customers.services.loyalty.secrets.choice", return_value="livraison_gratuite"):
            self.assertEqual(random_reward(), ("livraison_gratuite", "Livraison Gratuite"))


class ScratchCardTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")
        self.other = register_customer(name="Koffi", phone="0101010101", password="secret123")
        self.card = ScratchCard.objects.create(
            customer=self.customer,
            reward=ScratchCard.Reward.LANAIA_TUBE,
            reward_label="Tube Lanaïa Gratuit",
            source=ScratchCard.Source.REFERRAL_INVITEE,
        )
        self.client.force_authenticate(self.customer.user)

    def _scratch(self, card_id):
        return self.client.post(reverse("customers:scratch-card", args=[card_id]))

    def test_scratch_reveals_reward_once(self):
        res = self._scratch(self.card.pk)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["reward"], "lanaia_tube")
        self.assertEqual(res.data["reward_label"], "Tube Lanaïa Gratuit")
        self.card.refresh_from_db()
        self.assertTrue(self.card.scratched)
        self.assertIsNotNone(self.card.scratched_at)

        res = self._scratch(self.card.pk)
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["detail"], "Ce ticket a déjà été gratté")

    def test_unknown_card(self):
        self.assertEqual(self._scratch(999999).status_code, 404)

    def test_someone_elses_card(self):
        self.client.force_authenticate(self.other.user)

        res = self._scratch(self.card.pk)

        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["detail"], "Ce ticket ne vous appartient pas")

    def test_list_hides_unscratched_rewards(self):
        res = self.client.get(reverse("customers:scratch-cards"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)
        self.assertIsNone(res.data[0]["reward"])


class AvailableDiscountTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")

    def test_anonymous_has_no_discount(self):
        res = self.client.get(reverse("customers:discount"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"has_discount": False, "discount": 0, "reason": None})

    def test_every_tenth_order_unlocks_ten_percent(self):
        for total, expected in [(0, 0), (9, 0), (10, 10), (11, 0), (20, 10)]:
            self.customer.total_orders = total
            self.assertEqual(loyalty_discount_percent(self.customer), expected, total)

        self.customer.total_orders = 10
        self.assertTrue(available_discount(self.customer)["has_discount"])

    def test_endpoint_uses_customer_counters(self):
        self.customer.total_orders = 10
        self.customer.save(update_fields=["total_orders"])
        self.client.force_authenticate(self.customer.user)

        res = self.client.get(reverse("customers:discount"))

        self.assertTrue(res.data["has_discount"])
        self.assertEqual(res.data["discount"], 10)
