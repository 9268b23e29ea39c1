# customers/services/loyalty.py
"""
PATH: customers/services/loyalty.py

LOYALTY + REFERRAL SERVICE

Rules:
- Every LOYALTY_CYCLE_ORDERS-th completed checkout unlocks
  LOYALTY_CYCLE_DISCOUNT_PERCENT off the next order
  (total_orders > 0 and total_orders % cycle == 0).
- A referral code can be used once per customer, never on oneself.
  Using one gives a random scratch card to both sides.
- Scratching reveals the reward; it can be done once, by the owner only.
"""

from __future__ import annotations

import logging
import secrets
import string

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from customers.models import Customer, ScratchCard
from customers.services.exceptions import (
    AlreadyReferred,
    InvalidReferralCode,
    OwnReferralCode,
    ScratchCardAlreadyScratched,
    ScratchCardNotFound,
    ScratchCardNotOwned,
)

logger = logging.getLogger(__name__)

REFERRAL_CODE_LENGTH = 6
REFERRAL_ALPHABET = string.ascii_uppercase + string.digits

REFERRAL_APPLIED_MESSAGE = "Code de parrainage appliqué ! Grattez votre ticket pour découvrir votre cadeau 🎁"


def _store_cfg() -> dict:
    return getattr(settings, "STORE", {}) or {}


# ---------------- REFERRAL CODES ----------------
def generate_referral_code() -> str:
    while True:
        code = "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH))
        if not Customer.objects.filter(referral_code=code).exists():
            return code


def normalize_referral_code(code: str | None) -> str:
    return (code or "").strip().upper()


# ---------------- REWARDS ----------------
def random_reward() -> tuple[str, str]:
    """Uniform pick among the scratch card rewards: (reward, label)."""
    reward = secrets.choice(ScratchCard.Reward.values)
    return reward, ScratchCard.Reward(reward).label


def _issue_card(customer: Customer, source: str) -> ScratchCard:
    reward, label = random_reward()
    return ScratchCard.objects.create(
        customer=customer,
        reward=reward,
        reward_label=label,
        source=source,
    )


def find_sponsor(code: str) -> Customer:
    code = normalize_referral_code(code)
    sponsor = Customer.objects.filter(referral_code=code).first() if code else None
    if sponsor is None:
        raise InvalidReferralCode("Code de parrainage invalide")
    return sponsor


@transaction.atomic
def apply_referral(customer: Customer, code: str) -> ScratchCard:
    """
    Link customer to the sponsor owning `code` and issue one card each.
    Returns the invitee's card.
    """
    sponsor = find_sponsor(code)

    if sponsor.pk == customer.pk:
        raise OwnReferralCode("Vous ne pouvez pas utiliser votre propre code")

    locked = Customer.objects.select_for_update().get(pk=customer.pk)
    if locked.referred_by_id is not None:
        raise AlreadyReferred("Vous avez déjà utilisé un code de parrainage")

    locked.referred_by = sponsor
    locked.save(update_fields=["referred_by"])
    customer.referred_by = sponsor

    invitee_card = _issue_card(locked, ScratchCard.Source.REFERRAL_INVITEE)
    _issue_card(sponsor, ScratchCard.Source.REFERRAL_SPONSOR)

    logger.info(
        "Referral applied",
        extra={"customer_id": customer.pk, "sponsor_id": sponsor.pk},
    )
    return invitee_card


# ---------------- TIER DISCOUNT ----------------
def loyalty_discount_percent(customer: Customer | None) -> int:
    if customer is None:
        return 0

    cfg = _store_cfg()
    cycle = int(cfg.get("LOYALTY_CYCLE_ORDERS", 10))
    total = int(customer.total_orders or 0)

    if cycle > 0 and total > 0 and total % cycle == 0:
        return int(cfg.get("LOYALTY_CYCLE_DISCOUNT_PERCENT", 10))
    return 0


def available_discount(customer: Customer | None) -> dict:
    percent = loyalty_discount_percent(customer)
    if not percent:
        return {"has_discount": False, "discount": 0, "reason": None}

    cycle = int(_store_cfg().get("LOYALTY_CYCLE_ORDERS", 10))
    return {
        "has_discount": True,
        "discount": percent,
        "reason": (
            f"🎉 Félicitations ! Vous avez atteint {cycle} commandes "
            f"et bénéficiez de -{percent}% sur cette commande !"
        ),
    }


# ---------------- SCRATCH CARDS ----------------
@transaction.atomic
def scratch_card(customer: Customer, card_id) -> ScratchCard:
    card = ScratchCard.objects.select_for_update().filter(pk=card_id).first()

    if card is None:
        raise ScratchCardNotFound("Ticket introuvable")

    if card.customer_id != customer.pk:
        raise ScratchCardNotOwned("Ce ticket ne vous appartient pas")

    if card.scratched:
        raise ScratchCardAlreadyScratched("Ce ticket a déjà été gratté")

    card.scratched = True
    card.scratched_at = timezone.now()
    card.save(update_fields=["scratched", "scratched_at"])

    logger.info("Scratch card scratched", extra={"card_id": card.pk, "reward": card.reward})
    return card
