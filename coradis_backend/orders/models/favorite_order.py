# orders/models/favorite_order.py

from django.db import models


class FavoriteOrder(models.Model):
    """
    A customer's saved cart, copied from one of their past orders so it can
    be re-ordered in one tap. items is a snapshot list of
    {product_id, product_name, product_unit, quantity, unit_price}.
    """

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="favorite_orders",
    )

    items = models.JSONField(default=list)
    delivery_address = models.CharField(max_length=500, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    source_order_no = models.CharField(max_length=64, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Favori {self.source_order_no or self.pk}"
