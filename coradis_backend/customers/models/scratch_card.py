"""
PATH: customers/models/scratch_card.py

SCRATCH CARD (referral reward)

Lifecycle:
- created unscratched when a referral code is used (one for each side)
- scratched once by its owner (reveals the reward)
- redeemed at most once, by attaching it to an order at checkout;
  cancelling that order releases it again
"""

from __future__ import annotations

from django.db import models


class ScratchCard(models.Model):
    class Reward(models.TextChoices):
        LANAIA_TUBE = "lanaia_tube", "Tube Lanaïa Gratuit"
        LANAIA_PAQUET = "lanaia_paquet", "Paquet Lanaïa Gratuit"
        LANAIA_POCHE = "lanaia_poche", "Paquet Lanaïa Poche Gratuit"
        FREE_DELIVERY = "livraison_gratuite", "Livraison Gratuite"

    class Source(models.TextChoices):
        REFERRAL_SPONSOR = "referral_sponsor", "Parrain"
        REFERRAL_INVITEE = "referral_invitee", "Filleul"

    # Product rewards add one free unit of this catalog product
    REWARD_PRODUCTS = {
        Reward.LANAIA_TUBE: "lanaia-tubes",
        Reward.LANAIA_PAQUET: "lanaia-paquets",
        Reward.LANAIA_POCHE: "lanaia-poches",
    }

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="scratch_cards",
    )

    reward = models.CharField(max_length=32, choices=Reward.choices)
    reward_label = models.CharField(max_length=120)
    source = models.CharField(max_length=32, choices=Source.choices)

    scratched = models.BooleanField(default=False)
    scratched_at = models.DateTimeField(null=True, blank=True)
    redeemed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        state = "gratté" if self.scratched else "à gratter"
        return f"{self.reward_label} ({state})"

    @property
    def is_free_delivery(self) -> bool:
        return self.reward == self.Reward.FREE_DELIVERY

    @property
    def reward_product_id(self) -> str | None:
        return self.REWARD_PRODUCTS.get(self.reward)

    @property
    def is_redeemable(self) -> bool:
        return self.scratched and self.redeemed_at is None
