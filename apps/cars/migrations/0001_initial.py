from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies: list = []

    operations = [
        migrations.CreateModel(
            name="Car",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("make", models.CharField(max_length=100)),
                ("model", models.CharField(blank=True, max_length=100)),
                ("year", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("registration_number", models.CharField(blank=True, max_length=32)),
                ("daily_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("seats", models.PositiveSmallIntegerField(default=4)),
                (
                    "transmission",
                    models.CharField(
                        blank=True,
                        choices=[("automatic", "Automatic"), ("manual", "Manual")],
                        max_length=20,
                    ),
                ),
                (
                    "fuel_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("petrol", "Petrol"),
                            ("diesel", "Diesel"),
                            ("electric", "Electric"),
                            ("hybrid", "Hybrid"),
                            ("cng", "CNG"),
                        ],
                        max_length=20,
                    ),
                ),
                ("mileage", models.PositiveIntegerField(default=0)),
                (
                    "image",
                    models.CharField(blank=True, help_text="Public path or URL of the car photo.", max_length=255),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Car",
                "verbose_name_plural": "Cars",
                "ordering": ["-created_at"],
            },
        ),
    ]
