# products/management/commands/seed_products.py

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Product

B = Product.Brand
C = Product.Category

# (id, name, brand, category, price, unit, description, image_url)
CATALOG = [
    (
        "lanaia-tubes",
        "Mouchoirs Lanaïa - Tubes",
        B.LANAIA,
        C.TISSUES,
        1000,
        "tube",
        "Mouchoirs doux et résistants en tubes pratiques, disponibles en 5 couleurs élégantes.",
        "/ImageLanaia1.jpg",
    ),
    (
        "lanaia-paquets",
        "Mouchoirs Lanaïa - Paquets",
        B.LANAIA,
        C.TISSUES,
        500,
        "paquet",
        "Paquets familiaux de mouchoirs de qualité premium. Idéal pour la maison.",
        "",
    ),
    (
        "lanaia-poches",
        "Mouchoirs Lanaïa - Poches",
        B.LANAIA,
        C.TISSUES,
        100,
        "poche",
        "Pochettes individuelles pratiques à emporter partout.",
        "",
    ),
    (
        "glacons-verres",
        "Verres de Glaçons",
        B.OK_GLACONS,
        C.ICE_CUPS,
        500,
        "verre",
        "Des verres entièrement en glace pour une expérience unique et mémorable.",
        "/product-cup.jpg",
    ),
    (
        "glacons-5kg",
        "Glaçons (Sac 5kg)",
        B.OK_GLACONS,
        C.ICE_CUBES,
        1000,
        "sac",
        "Glaçons de qualité premium, parfaits pour toutes vos boissons.",
        "",
    ),
    (
        "blocs-ancienne",
        "Blocs à l'ancienne",
        B.OK_GLACONS,
        C.ICE_BLOCK,
        100,
        "unité",
        "Blocs de glace pour conservation longue durée.",
        "",
    ),
    (
        "glace-carbonique",
        "Glace Carbonique",
        B.OK_GLACONS,
        C.DRY_ICE,
        7000,
        "kg",
        "Glace sèche pour transport frigorifique et effets spéciaux.",
        "",
    ),
]


class Command(BaseCommand):
    help = "Seed the storefront catalog (idempotent; prices are reset to catalog values)"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        created_count = 0

        with transaction.atomic():
            for order, (slug, name, brand, category, price, unit, description, image) in enumerate(CATALOG):
                _, created = Product.objects.update_or_create(
                    id=slug,
                    defaults={
                        "name": name,
                        "brand": brand,
                        "category": category,
                        "price": price,
                        "unit": unit,
                        "description": description,
                        "image_url": image,
                        "sort_order": order,
                    },
                )
                created_count += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"✅ Catalog seeded ({created_count} created, {len(CATALOG) - created_count} updated)."
            )
        )
