import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EmployerCostSetting",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                ("name", models.CharField(max_length=120, verbose_name="namn")),
                ("description", models.TextField(blank=True, default="", verbose_name="beskrivning")),
                (
                    "percentage",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                        verbose_name="procentsats",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="aktiv")),
            ],
            options={
                "verbose_name": "arbetsgivaravgift",
                "verbose_name_plural": "arbetsgivaravgifter",
                "ordering": ["-is_active", "name"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("is_active",),
                        name="billing_single_active_employer_cost",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CommissionStatement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                ("period", models.CharField(max_length=7, unique=True, verbose_name="period")),
                (
                    "total_opener_commission",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14,
                        verbose_name="openerprovision totalt",
                    ),
                ),
                (
                    "total_closer_commission",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14,
                        verbose_name="closerprovision totalt",
                    ),
                ),
                (
                    "employer_cost_percentage",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=5,
                        verbose_name="arbetsgivaravgift (%)",
                    ),
                ),
                (
                    "employer_cost_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14,
                        verbose_name="arbetsgivaravgift",
                    ),
                ),
                (
                    "total_with_employer_cost",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14,
                        verbose_name="total kostnad",
                    ),
                ),
                ("payload", models.JSONField(default=dict, verbose_name="underlag")),
                ("is_final", models.BooleanField(default=False, verbose_name="slutgiltig")),
                ("computed_at", models.DateTimeField(blank=True, null=True, verbose_name="beräknad")),
            ],
            options={
                "verbose_name": "provisionsunderlag",
                "verbose_name_plural": "provisionsunderlag",
                "ordering": ["-period"],
            },
        ),
    ]
