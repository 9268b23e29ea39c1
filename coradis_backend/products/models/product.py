# products/models/product.py

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Represents a sellable catalog entry.

    PRICING MODEL (IMPORTANT):
    - price is a whole FCFA amount per unit (no decimals in XOF)
    - the price stored here is the ONLY price checkout trusts; order items
      snapshot it at order time
    - stock is not tracked: availability is a manual switch
    """

    class Brand(models.TextChoices):
        LANAIA = "lanaia", "Lanaïa"
        OK_GLACONS = "ok-glacons", "OK Glaçons"

    class Category(models.TextChoices):
        TISSUES = "tissues", "Mouchoirs"
        ICE_CUBES = "ice_cubes", "Glaçons"
        ICE_BLOCK = "ice_block", "Blocs de glace"
        DRY_ICE = "dry_ice", "Glace carbonique"
        ICE_CUPS = "ice_cups", "Verres de glaçons"

    # Slug ids ("lanaia-tubes") are what the storefront cart stores
    id = models.SlugField(primary_key=True, max_length=64)

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    brand = models.CharField(max_length=20, choices=Brand.choices, db_index=True)
    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)

    price = models.PositiveIntegerField(help_text="FCFA per unit")
    unit = models.CharField(max_length=32, help_text="e.g. tube, paquet, sac, kg")

    image_url = models.CharField(max_length=500, blank=True, default="")

    is_available = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "name"]

    def __str__(self):
        return f"{self.name} ({self.price} FCFA/{self.unit})"

    def clean(self):
        if self.price is None or int(self.price) <= 0:
            raise ValidationError({"price": "Le prix doit être supérieur à zéro"})

        if not (self.unit or "").strip():
            raise ValidationError({"unit": "L'unité est obligatoire"})
