"""
PATH: customers/models/customer.py

CUSTOMER (loyalty profile)

One row per customer account (users.User with role=customer).

Counters (maintained by orders.services, never edited by hand):
- total_orders / total_spent   -> incremented at checkout, reversed on cancel
- loyalty_points               -> + earned, - redeemed; never negative

Referral:
- referral_code is unique, 6 uppercase letters/digits
- referred_by is set once (a customer can only be referred one time)
"""

from __future__ import annotations

from django.conf import settings
from django.db import models


class Customer(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="customer",
    )

    address = models.CharField(max_length=500, blank=True, default="")

    loyalty_points = models.PositiveIntegerField(default=0)
    total_spent = models.PositiveIntegerField(default=0, help_text="FCFA")
    total_orders = models.PositiveIntegerField(default=0)

    referral_code = models.CharField(max_length=6, unique=True)
    referred_by = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="referrals",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name or self.phone} ({self.referral_code})"

    # Identity lives on the user row
    @property
    def name(self) -> str:
        return self.user.name

    @property
    def phone(self) -> str:
        return self.user.phone or ""

    @property
    def email(self) -> str:
        return self.user.email
