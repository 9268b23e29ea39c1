from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.SlugField(max_length=64, primary_key=True, serialize=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "brand",
                    models.CharField(
                        choices=[("lanaia", "Lanaïa"), ("ok-glacons", "OK Glaçons")],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("tissues", "Mouchoirs"),
                            ("ice_cubes", "Glaçons"),
                            ("ice_block", "Blocs de glace"),
                            ("dry_ice", "Glace carbonique"),
                            ("ice_cups", "Verres de glaçons"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("price", models.PositiveIntegerField(help_text="FCFA per unit")),
                ("unit", models.CharField(help_text="e.g. tube, paquet, sac, kg", max_length=32)),
                ("image_url", models.CharField(blank=True, default="", max_length=500)),
                ("is_available", models.BooleanField(default=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sort_order", "name"],
            },
        ),
    ]
