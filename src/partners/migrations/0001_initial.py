import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import partners.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                ("name", models.CharField(max_length=200, verbose_name="namn")),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Aktiv"), ("archived", "Arkiverad")],
                        db_index=True,
                        default="active",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                (
                    "price_per_solar_deal",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="pris per solcellslead",
                    ),
                ),
                (
                    "price_per_battery_deal",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="pris per batterilead",
                    ),
                ),
                (
                    "price_per_site_visit",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="pris per platsbesök",
                    ),
                ),
                ("can_request_credits", models.BooleanField(default=True, verbose_name="får kreditera leads")),
                (
                    "credit_deadline_days",
                    models.PositiveIntegerField(
                        default=partners.models._default_credit_deadline_days,
                        help_text="Antal dagar efter att leadet skickats då partnern kan begära kredit.",
                        verbose_name="kreditfrist (dagar)",
                    ),
                ),
                ("contact_person_name", models.CharField(blank=True, default="", max_length=200, verbose_name="kontaktperson")),
                ("contact_phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telefon")),
            ],
            options={
                "verbose_name": "partnerorganisation",
                "verbose_name_plural": "partnerorganisationer",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="OrganizationCommissionSettings",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                (
                    "base_cost",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("23000.00"), max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="baskostnad",
                    ),
                ),
                (
                    "eur_to_sek_rate",
                    models.DecimalField(
                        decimal_places=4, default=Decimal("11.0000"), max_digits=8,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="växelkurs EUR/SEK",
                    ),
                ),
                (
                    "lf_finans_percent",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("3.00"), max_digits=5,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="LF Finans-avgift (%)",
                    ),
                ),
                (
                    "organization",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="commission_settings",
                        to="partners.organization",
                        verbose_name="organisation",
                    ),
                ),
            ],
            options={
                "verbose_name": "provisionsinställning",
                "verbose_name_plural": "provisionsinställningar",
            },
        ),
    ]
