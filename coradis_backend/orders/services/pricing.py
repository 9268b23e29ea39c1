# orders/services/pricing.py
"""
PATH: orders/services/pricing.py

ORDER PRICING (server authoritative, whole FCFA)

1. subtotal        = sum(catalog price * quantity); client prices are ignored
2. loyalty         = LOYALTY_CYCLE_DISCOUNT_PERCENT of subtotal (floored) when
                     the customer just completed a full cycle of orders
3. points          = min(requested, balance, what is left to pay) points,
                     worth LOYALTY_POINT_VALUE_FCFA each
4. delivery fee    = zone fee, waived when the merchandise amount after
                     discounts is above FREE_DELIVERY_THRESHOLD or a
                     free-delivery scratch card is used
5. express fee     = EXPRESS_DELIVERY_FEE for same-day (urgent) orders
6. total           = subtotal - loyalty - points + delivery + express
7. points earned   = (subtotal - discounts) // LOYALTY_FCFA_PER_POINT_EARNED

This module never writes to the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from django.conf import settings

from customers.models import Customer, ScratchCard
from customers.services.loyalty import loyalty_discount_percent
from orders.models import Order
from orders.services.exceptions import (
    EmptyCart,
    InvalidDeliveryZone,
    ProductUnavailable,
    RewardCardUnavailable,
)
from products.models import Product


def _store_cfg() -> dict:
    return getattr(settings, "STORE", {}) or {}


@dataclass
class QuoteLine:
    product: Product | None
    product_name: str
    product_unit: str
    quantity: int
    unit_price: int
    is_reward: bool = False

    @property
    def product_id(self) -> str | None:
        return self.product.pk if self.product is not None else None

    @property
    def total_price(self) -> int:
        return self.quantity * self.unit_price


@dataclass
class Quote:
    lines: list[QuoteLine] = field(default_factory=list)
    delivery_zone: str = Order.ZONE_1
    is_urgent: bool = False

    subtotal: int = 0
    loyalty_discount_percent: int = 0
    loyalty_discount_amount: int = 0
    points_redeemed: int = 0
    points_discount_amount: int = 0
    delivery_fee: int = 0
    express_fee: int = 0
    free_delivery: bool = False
    total: int = 0
    points_earned: int = 0

    reward_card: ScratchCard | None = None

    @property
    def merchandise_amount(self) -> int:
        return self.subtotal - self.loyalty_discount_amount - self.points_discount_amount

    def as_dict(self) -> dict:
        return {
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "product_unit": line.product_unit,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "total_price": line.total_price,
                    "is_reward": line.is_reward,
                }
                for line in self.lines
            ],
            "delivery_zone": self.delivery_zone,
            "is_urgent": self.is_urgent,
            "subtotal": self.subtotal,
            "loyalty_discount_percent": self.loyalty_discount_percent,
            "loyalty_discount_amount": self.loyalty_discount_amount,
            "points_redeemed": self.points_redeemed,
            "points_discount_amount": self.points_discount_amount,
            "delivery_fee": self.delivery_fee,
            "express_fee": self.express_fee,
            "free_delivery": self.free_delivery,
            "total": self.total,
            "points_earned": self.points_earned,
            "reward_card_id": self.reward_card.pk if self.reward_card else None,
            "currency": _store_cfg().get("CURRENCY", "XOF"),
        }


# ---------------- CART ----------------
def _merge_quantities(items) -> dict[str, int]:
    """Collapse duplicate product ids while keeping first-seen order."""
    merged: dict[str, int] = {}
    for item in items or []:
        product_id = str(item.get("product_id") or "").strip()
        quantity = int(item.get("quantity") or 0)
        if not product_id or quantity <= 0:
            raise ProductUnavailable("Article de panier invalide")
        merged[product_id] = merged.get(product_id, 0) + quantity
    return merged


def build_lines(items) -> list[QuoteLine]:
    quantities = _merge_quantities(items)
    if not quantities:
        raise EmptyCart("Votre panier est vide")

    products = Product.objects.in_bulk(list(quantities.keys()))

    lines = []
    for product_id, quantity in quantities.items():
        product = products.get(product_id)
        if product is None or not product.is_available:
            raise ProductUnavailable(f"Produit indisponible: {product_id}")

        lines.append(
            QuoteLine(
                product=product,
                product_name=product.name,
                product_unit=product.unit,
                quantity=quantity,
                unit_price=int(product.price),
            )
        )
    return lines


def reward_line(card: ScratchCard) -> QuoteLine | None:
    product_id = card.reward_product_id
    if not product_id:
        return None

    product = Product.objects.filter(pk=product_id).first()
    return QuoteLine(
        product=product,
        product_name=product.name if product else card.reward_label,
        product_unit=product.unit if product else "unité",
        quantity=1,
        unit_price=0,
        is_reward=True,
    )


def resolve_reward_card(customer: Customer | None, card_id) -> ScratchCard | None:
    if not card_id:
        return None

    if customer is None:
        raise RewardCardUnavailable("Connectez-vous pour utiliser un ticket")

    card = ScratchCard.objects.filter(pk=card_id, customer=customer).first()
    if card is None or not card.is_redeemable:
        raise RewardCardUnavailable("Ce ticket n'est pas utilisable")
    return card


# ---------------- FEES ----------------
def zone_fee(zone: str) -> int:
    fees = _store_cfg().get("DELIVERY_FEES") or {}
    if zone not in fees:
        raise InvalidDeliveryZone("Zone de livraison invalide")
    return int(fees[zone])


def points_earned_for(amount: int) -> int:
    per_point = int(_store_cfg().get("LOYALTY_FCFA_PER_POINT_EARNED", 1000))
    if per_point <= 0 or amount <= 0:
        return 0
    return amount // per_point


# ---------------- QUOTE ----------------
def build_quote(
    *,
    items,
    delivery_zone: str,
    is_urgent: bool = False,
    customer: Customer | None = None,
    redeem_points: int = 0,
    reward_card: ScratchCard | None = None,
) -> Quote:
    cfg = _store_cfg()

    quote = Quote(delivery_zone=delivery_zone, is_urgent=bool(is_urgent))
    quote.lines = build_lines(items)
    quote.subtotal = sum(line.total_price for line in quote.lines)

    # 2. tier discount
    percent = loyalty_discount_percent(customer)
    quote.loyalty_discount_percent = percent
    quote.loyalty_discount_amount = quote.subtotal * percent // 100

    # 3. points redemption
    if customer is not None and redeem_points:
        point_value = int(cfg.get("LOYALTY_POINT_VALUE_FCFA", 100))
        remaining = quote.subtotal - quote.loyalty_discount_amount
        usable = min(int(redeem_points), int(customer.loyalty_points), remaining // point_value)
        quote.points_redeemed = max(usable, 0)
        quote.points_discount_amount = quote.points_redeemed * point_value

    # Reward card: one free unit, or free delivery
    quote.reward_card = reward_card
    if reward_card is not None:
        line = reward_line(reward_card)
        if line is not None:
            quote.lines.append(line)

    # 4. delivery
    fee = zone_fee(delivery_zone)
    threshold = int(cfg.get("FREE_DELIVERY_THRESHOLD", 15000))
    quote.free_delivery = quote.merchandise_amount > threshold or bool(
        reward_card is not None and reward_card.is_free_delivery
    )
    quote.delivery_fee = 0 if quote.free_delivery else fee

    # 5. express
    quote.express_fee = int(cfg.get("EXPRESS_DELIVERY_FEE", 500)) if quote.is_urgent else 0

    # 6 + 7
    quote.total = quote.merchandise_amount + quote.delivery_fee + quote.express_fee
    quote.points_earned = points_earned_for(quote.merchandise_amount) if customer is not None else 0

    return quote
