# orders/services/checkout.py
"""
PATH: orders/services/checkout.py

CHECKOUT

create_order() in one transaction:
- locks the customer row (if any) so counters and points cannot race
- prices the cart with build_quote() (same code path as the public quote)
- writes Order + OrderItem rows (items re-check their own totals)
- applies loyalty effects: total_orders += 1, total_spent += total,
  loyalty_points += earned - redeemed
- marks the scratch card redeemed

The shop's WhatsApp notification runs after commit; a failed delivery is
logged and never fails the order.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from customers.models import Customer, ScratchCard
from notifications.services.whatsapp import WhatsAppDeliveryError, notify_new_order
from orders.models import Order, OrderItem
from orders.services.exceptions import InvalidDeliveryDate
from orders.services.pricing import build_quote, resolve_reward_card

logger = logging.getLogger(__name__)

ORDER_CREATED_MESSAGE = "Commande enregistrée avec succès!"


def validate_delivery_date(delivery_date) -> None:
    if delivery_date < timezone.localdate():
        raise InvalidDeliveryDate("La date de livraison ne peut pas être dans le passé")


def _notify_shop(order_id) -> None:
    order = Order.objects.prefetch_related("items").filter(pk=order_id).first()
    if order is None:
        return

    try:
        notify_new_order(order)
    except WhatsAppDeliveryError as exc:
        logger.error(
            "Shop notification failed",
            extra={"order_no": order.order_no, "error": str(exc)},
        )


def create_order(
    *,
    customer_name: str,
    customer_phone: str,
    delivery_address: str,
    delivery_date,
    items,
    delivery_zone: str = Order.ZONE_1,
    is_urgent: bool = False,
    notes: str = "",
    redeem_points: int = 0,
    reward_card_id=None,
    customer: Customer | None = None,
) -> Order:
    validate_delivery_date(delivery_date)

    with transaction.atomic():
        if customer is not None:
            customer = Customer.objects.select_for_update().get(pk=customer.pk)

        card = resolve_reward_card(customer, reward_card_id)
        if card is not None:
            card = ScratchCard.objects.select_for_update().get(pk=card.pk)

        quote = build_quote(
            items=items,
            delivery_zone=delivery_zone,
            is_urgent=is_urgent,
            customer=customer,
            redeem_points=redeem_points,
            reward_card=card,
        )

        order = Order.objects.create(
            customer=customer,
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            delivery_address=delivery_address.strip(),
            delivery_zone=delivery_zone,
            delivery_date=delivery_date,
            is_urgent=quote.is_urgent,
            notes=(notes or "").strip(),
            subtotal_amount=quote.subtotal,
            loyalty_discount_percent=quote.loyalty_discount_percent,
            loyalty_discount_amount=quote.loyalty_discount_amount,
            points_redeemed=quote.points_redeemed,
            points_discount_amount=quote.points_discount_amount,
            delivery_fee=quote.delivery_fee,
            express_fee=quote.express_fee,
            total_amount=quote.total,
            loyalty_points_earned=quote.points_earned,
            reward_card=card,
        )

        for line in quote.lines:
            OrderItem.objects.create(
                order=order,
                product=line.product,
                product_name=line.product_name,
                product_unit=line.product_unit,
                quantity=line.quantity,
                unit_price=line.unit_price,
                is_reward=line.is_reward,
            )

        if customer is not None:
            customer.total_orders += 1
            customer.total_spent += quote.total
            customer.loyalty_points = customer.loyalty_points + quote.points_earned - quote.points_redeemed
            customer.save(update_fields=["total_orders", "total_spent", "loyalty_points"])

        if card is not None:
            card.redeemed_at = timezone.now()
            card.save(update_fields=["redeemed_at"])

        transaction.on_commit(lambda: _notify_shop(order.pk))

    logger.info(
        "Order created",
        extra={
            "order_no": order.order_no,
            "total": order.total_amount,
            "customer_id": customer.pk if customer else None,
        },
    )
    return order
