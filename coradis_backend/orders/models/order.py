# orders/models/order.py

import uuid

from django.db import models
from django.utils import timezone


class Order(models.Model):
    """
    Storefront delivery order.

    Key rules:
    - Every amount is a whole FCFA integer computed by orders.services.pricing
      (client prices are never trusted).
    - total_amount = subtotal - loyalty discount - points discount
                     + delivery fee + express fee
    - Loyalty effects on the customer (orders, spent, points) are applied at
      creation and reversed if the order is cancelled.
    """

    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_IN_DELIVERY = "in_delivery"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "En attente"),
        (STATUS_CONFIRMED, "Confirmée"),
        (STATUS_IN_DELIVERY, "En livraison"),
        (STATUS_DELIVERED, "Livrée"),
        (STATUS_CANCELLED, "Annulée"),
    ]

    ZONE_1 = "zone_1"
    ZONE_2 = "zone_2"
    ZONE_3 = "zone_3"

    ZONE_CHOICES = [
        (ZONE_1, "Zone 1"),
        (ZONE_2, "Zone 2"),
        (ZONE_3, "Zone 3"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_no = models.CharField(
        max_length=64,
        unique=True,
        blank=True,
        help_text="System-generated public order number",
    )

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    # Contact + delivery (always captured, even for signed-in customers)
    customer_name = models.CharField(max_length=120)
    customer_phone = models.CharField(max_length=40, db_index=True)
    delivery_address = models.CharField(max_length=500)
    delivery_zone = models.CharField(max_length=16, choices=ZONE_CHOICES, default=ZONE_1)
    delivery_date = models.DateField()
    is_urgent = models.BooleanField(default=False, db_index=True)
    notes = models.TextField(blank=True, default="")

    # Money (FCFA, server authoritative)
    subtotal_amount = models.PositiveIntegerField(default=0)
    loyalty_discount_percent = models.PositiveSmallIntegerField(default=0)
    loyalty_discount_amount = models.PositiveIntegerField(default=0)
    points_redeemed = models.PositiveIntegerField(default=0)
    points_discount_amount = models.PositiveIntegerField(default=0)
    delivery_fee = models.PositiveIntegerField(default=0)
    express_fee = models.PositiveIntegerField(default=0)
    total_amount = models.PositiveIntegerField(default=0)

    loyalty_points_earned = models.PositiveIntegerField(default=0)

    reward_card = models.OneToOneField(
        "customers.ScratchCard",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order",
    )

    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self.order_no:
            prefix = timezone.now().strftime("CMD%Y%m%d")
            self.order_no = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.order_no} | {self.total_amount} FCFA | {self.status}"

    @property
    def discount_amount(self) -> int:
        return int(self.loyalty_discount_amount) + int(self.points_discount_amount)
