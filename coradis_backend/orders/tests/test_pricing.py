# orders/tests/test_pricing.py

from django.test import TestCase
from django.utils import timezone

from customers.models import ScratchCard
from customers.services.accounts import register_customer
from orders.models import Order
from orders.services.exceptions import (
    EmptyCart,
    InvalidDeliveryZone,
    ProductUnavailable,
    RewardCardUnavailable,
)
from orders.services.pricing import build_quote, resolve_reward_card
from products.models import Product


def make_catalog():
    Product.objects.create(
        id="lanaia-tubes", name="Mouchoirs Lanaïa - Tubes", brand="lanaia",
        category="tissues", price=1000, unit="tube",
    )
    Product.objects.create(
        id="lanaia-poches", name="Mouchoirs Lanaïa - Poches", brand="lanaia",
        category="tissues", price=100, unit="poche",
    )
    Product.objects.create(
        id="glace-carbonique", name="Glace carbonique", brand="ok-glacons",
        category="dry_ice", price=7000, unit="kg",
    )


class PricingTests(TestCase):
    """
    GUARANTEES:
    - Prices always come from the catalog
    - Discounts apply in order: tier discount, then points
    - Delivery is free strictly above 15 000 FCFA of merchandise
    - total == subtotal - discounts + delivery + express
    """

    def setUp(self):
        make_catalog()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")

    def test_guest_quote(self):
        quote = build_quote(
            items=[
                {"product_id": "lanaia-tubes", "quantity": 3},
                {"product_id": "lanaia-poches", "quantity": 2},
            ],
            delivery_zone=Order.ZONE_2,
        )

        self.assertEqual(quote.subtotal, 3200)
        self.assertEqual(quote.delivery_fee, 1500)
        self.assertEqual(quote.express_fee, 0)
        self.assertEqual(quote.total, 4700)
        self.assertEqual(quote.points_earned, 0)

    def test_duplicate_lines_are_merged(self):
        quote = build_quote(
            items=[
                {"product_id": "lanaia-tubes", "quantity": 2},
                {"product_id": "lanaia-tubes", "quantity": 1},
            ],
            delivery_zone=Order.ZONE_1,
        )

        self.assertEqual(len(quote.lines), 1)
        self.assertEqual(quote.lines[0].quantity, 3)

    def test_zone_fees_and_express(self):
        for zone, fee in [(Order.ZONE_1, 1000), (Order.ZONE_2, 1500), (Order.ZONE_3, 2000)]:
            quote = build_quote(
                items=[{"product_id": "lanaia-tubes", "quantity": 1}],
                delivery_zone=zone,
                is_urgent=True,
            )
            self.assertEqual(quote.delivery_fee, fee)
            self.assertEqual(quote.express_fee, 500)
            self.assertEqual(quote.total, 1000 + fee + 500)

    def test_free_delivery_threshold_is_strict(self):
        at_threshold = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 15}],
            delivery_zone=Order.ZONE_3,
        )
        above = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 15}, {"product_id": "lanaia-poches", "quantity": 1}],
            delivery_zone=Order.ZONE_3,
            is_urgent=True,
        )

        self.assertEqual(at_threshold.delivery_fee, 2000)
        self.assertFalse(at_threshold.free_delivery)
        self.assertEqual(above.delivery_fee, 0)
        self.assertEqual(above.express_fee, 500)
        self.assertEqual(above.total, 15600)

    def test_tier_discount_every_tenth_order(self):
        self.customer.total_orders = 10

        quote = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 5}],
            delivery_zone=Order.ZONE_1,
            customer=self.customer,
        )

        self.assertEqual(quote.loyalty_discount_percent, 10)
        self.assertEqual(quote.loyalty_discount_amount, 500)
        self.assertEqual(quote.total, 4500 + 1000)
        self.assertEqual(quote.points_earned, 4)

    def test_points_are_capped_by_balance_and_amount(self):
        self.customer.loyalty_points = 50

        by_amount = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 3}],
            delivery_zone=Order.ZONE_1,
            customer=self.customer,
            redeem_points=100,
        )
        self.assertEqual(by_amount.points_redeemed, 30)
        self.assertEqual(by_amount.points_discount_amount, 3000)
        self.assertEqual(by_amount.total, 1000)

        self.customer.loyalty_points = 5
        by_balance = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 3}],
            delivery_zone=Order.ZONE_1,
            customer=self.customer,
            redeem_points=100,
        )
        self.assertEqual(by_balance.points_redeemed, 5)
        self.assertEqual(by_balance.total, 2500 + 1000)

    def test_guests_cannot_redeem_points(self):
        quote = build_quote(
            items=[{"product_id": "lanaia-tubes", "quantity": 3}],
            delivery_zone=Order.ZONE_1,
            redeem_points=10,
        )
        self.assertEqual(quote.points_redeemed, 0)

    def test_free_delivery_uses_amount_after_discounts(self):
        self.customer.loyalty_points = 70

        quote = build_quote(
            items=[{"product_id": "glace-carbonique", "quantity": 3}],
            delivery_zone=Order.ZONE_1,
            customer=self.customer,
            redeem_points=70,
        )

        self.assertEqual(quote.subtotal, 21000)
        self.assertEqual(quote.merchandise_amount, 14000)
        self.assertEqual(quote.delivery_fee, 1000)
        self.assertEqual(quote.points_earned, 14)

    def test_cart_errors(self):
        with self.assertRaises(EmptyCart):
            build_quote(items=[], delivery_zone=Order.ZONE_1)

        Product.objects.filter(pk="lanaia-poches").update(is_available=False)
        with self.assertRaises(ProductUnavailable):
            build_quote(items=[{"product_id": "lanaia-poches", "quantity": 1}], delivery_zone=Order.ZONE_1)

        with self.assertRaises(ProductUnavailable):
            build_quote(items=[{"product_id": "inconnu", "quantity": 1}], delivery_zone=Order.ZONE_1)

        with self.assertRaises(InvalidDeliveryZone):
            build_quote(items=[{"product_id": "lanaia-tubes", "quantity": 1}], delivery_zone="zone_9")


class RewardCardPricingTests(TestCase):
    def setUp(self):
        make_catalog()
        self.customer = register_customer(name="Awa", phone="0707070707", password="secret123")

    def _card(self, reward, **extra):
        data = {
            "customer": self.customer,
            "reward": reward,
            "reward_label": ScratchCard.Reward(reward).label,
            "source": ScratchCard.Source.REFERRAL_INVITEE,
            "scratched": True,
        }
        data.update(extra)
        return ScratchCard.objects.create(**data)

    def test_product_card_adds_free_line(self):
        card = self._card(ScratchCard.Reward.LANAIA_TUBE)

        quote = build_quote(
            items=[{"product_id": "lanaia-poches", "quantity": 2}],
            delivery_zone=Order.ZONE_1,
            customer=self.customer,
            reward_card=card,
        )

        reward = quote.lines[-1]
        self.assertTrue(reward.is_reward)
        self.assertEqual(reward.product_id, "lanaia-tubes")
        self.assertEqual(reward.total_price, 0)
        self.assertEqual(quote.subtotal, 200)
        self.assertEqual(sum(line.total_price for line in quote.lines), quote.subtotal)

    def test_free_delivery_card(self):
        card = self._card(ScratchCard.Reward.FREE_DELIVERY)

        quote = build_quote(
            items=[{"product_id": "lanaia-poches", "quantity": 2}],
            delivery_zone=Order.ZONE_3,
            customer=self.customer,
            is_urgent=True,
            reward_card=card,
        )

        self.assertTrue(quote.free_delivery)
        self.assertEqual(quote.delivery_fee, 0)
        self.assertEqual(quote.express_fee, 500)
        self.assertEqual(len(quote.lines), 1)

    def test_card_must_be_scratched_unused_and_owned(self):
        unscratched = self._card(ScratchCard.Reward.LANAIA_TUBE, scratched=False)
        redeemed = self._card(ScratchCard.Reward.LANAIA_TUBE, redeemed_at=timezone.now())
        other = register_customer(name="Koffi", phone="0101010101", password="secret123")

        for card_id in (unscratched.pk, redeemed.pk):
            with self.assertRaises(RewardCardUnavailable):
                resolve_reward_card(self.customer, card_id)

        usable = self._card(ScratchCard.Reward.LANAIA_TUBE)
        with self.assertRaises(RewardCardUnavailable):
            resolve_reward_card(other, usable.pk)
        with self.assertRaises(RewardCardUnavailable):
            resolve_reward_card(None, usable.pk)

        self.assertEqual(resolve_reward_card(self.customer, usable.pk), usable)
