# orders/models/order_item.py

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class OrderItem(models.Model):
    """
    Line items for Order.

    Name, unit and price are snapshots: editing or deleting a product later
    never changes a past order.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    product_name = models.CharField(max_length=255)
    product_unit = models.CharField(max_length=32)

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.PositiveIntegerField()
    total_price = models.PositiveIntegerField(help_text="quantity * unit_price (server computed)")

    # Free line granted by a scratch card (unit_price is 0)
    is_reward = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")

        if self.unit_price is None or int(self.unit_price) < 0:
            raise ValidationError("unit_price must be >= 0")

        if not self.is_reward and int(self.unit_price) == 0:
            raise ValidationError("unit_price must be > 0 for paid lines")

        self.total_price = int(self.quantity) * int(self.unit_price)

    def save(self, *args, **kwargs):
        if self.quantity is not None and self.unit_price is not None:
            self.total_price = int(self.quantity) * int(self.unit_price)
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_name} x{self.quantity}"
