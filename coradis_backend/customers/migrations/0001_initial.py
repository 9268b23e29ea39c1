import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("address", models.CharField(blank=True, default="", max_length=500)),
                ("loyalty_points", models.PositiveIntegerField(default=0)),
                ("total_spent", models.PositiveIntegerField(default=0, help_text="FCFA")),
                ("total_orders", models.PositiveIntegerField(default=0)),
                ("referral_code", models.CharField(max_length=6, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "referred_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="referrals",
                        to="customers.customer",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="customer",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ScratchCard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "reward",
                    models.CharField(
                        choices=[
                            ("lanaia_tube", "Tube Lanaïa Gratuit"),
                            ("lanaia_paquet", "Paquet Lanaïa Gratuit"),
                            ("lanaia_poche", "Paquet Lanaïa Poche Gratuit"),
                            ("livraison_gratuite", "Livraison Gratuite"),
                        ],
                        max_length=32,
                    ),
                ),
                ("reward_label", models.CharField(max_length=120)),
                (
                    "source",
                    models.CharField(
                        choices=[("referral_sponsor", "Parrain"), ("referral_invitee", "Filleul")],
                        max_length=32,
                    ),
                ),
                ("scratched", models.BooleanField(default=False)),
                ("scratched_at", models.DateTimeField(blank=True, null=True)),
                ("redeemed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="scratch_cards",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
