"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for Order.

    pending     -> confirmed | cancelled
    confirmed   -> in_delivery | cancelled
    in_delivery -> delivered | cancelled
    delivered, cancelled: terminal

Cancelling a customer order reverses what checkout applied to the
customer (counters never go below zero) and releases its scratch card.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from customers.models import Customer, ScratchCard
from orders.models import Order
from orders.services.exceptions import InvalidOrderTransition

logger = logging.getLogger(__name__)

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING: {
        Order.STATUS_CONFIRMED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_CONFIRMED: {
        Order.STATUS_IN_DELIVERY,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_IN_DELIVERY: {
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidOrderTransition(
            f"Impossible de passer la commande {order.order_no} "
            f"de '{order.status}' à '{target_status}'"
        )


# ============================================================
# SIDE EFFECTS
# ============================================================


def _reverse_loyalty(order: Order) -> None:
    if order.customer_id is None:
        return

    customer = Customer.objects.select_for_update().get(pk=order.customer_id)
    customer.total_orders = max(customer.total_orders - 1, 0)
    customer.total_spent = max(customer.total_spent - order.total_amount, 0)
    customer.loyalty_points = max(
        customer.loyalty_points - order.loyalty_points_earned + order.points_redeemed,
        0,
    )
    customer.save(update_fields=["total_orders", "total_spent", "loyalty_points"])


def _release_reward_card(order: Order) -> None:
    if order.reward_card_id is None:
        return

    ScratchCard.objects.filter(pk=order.reward_card_id).update(redeemed_at=None)
    order.reward_card = None


def change_status(*, order: Order, target_status: str, by=None) -> Order:
    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)
        validate_transition(order=order, target_status=target_status)

        previous = order.status
        order.status = target_status
        update_fields = ["status", "updated_at"]

        if target_status == Order.STATUS_DELIVERED:
            order.delivered_at = timezone.now()
            update_fields.append("delivered_at")

        if target_status == Order.STATUS_CANCELLED:
            order.cancelled_at = timezone.now()
            _reverse_loyalty(order)
            _release_reward_card(order)
            update_fields += ["cancelled_at", "reward_card"]

        order.save(update_fields=update_fields)

    logger.info(
        "Order status changed",
        extra={
            "order_no": order.order_no,
            "from": previous,
            "to": target_status,
            "by": str(getattr(by, "id", "")) or None,
        },
    )
    return order


def delete_order(order: Order) -> None:
    with transaction.atomic():
        order.items.all().delete()
        order_no = order.order_no
        order.delete()

    logger.info("Order deleted", extra={"order_no": order_no})
