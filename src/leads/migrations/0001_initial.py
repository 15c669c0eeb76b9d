import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("partners", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Contact",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                ("email", models.EmailField(max_length=254, verbose_name="e-post")),
                ("name", models.CharField(blank=True, default="", max_length=200, verbose_name="namn")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="telefon")),
                ("address", models.CharField(blank=True, default="", max_length=255, verbose_name="adress")),
                ("postal_code", models.CharField(blank=True, default="", max_length=10, verbose_name="postnummer")),
                (
                    "interest",
                    models.CharField(
                        choices=[("sun", "Sol"), ("battery", "Batteri"), ("sun_battery", "Sol + batteri")],
                        max_length=20,
                        verbose_name="intresse",
                    ),
                ),
                (
                    "date_sent",
                    models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name="skickad"),
                ),
                (
                    "opener",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="opened_contacts",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="opener",
                    ),
                ),
                (
                    "organizations",
                    models.ManyToManyField(
                        blank=True,
                        related_name="contacts",
                        to="partners.organization",
                        verbose_name="organisationer",
                    ),
                ),
            ],
            options={
                "verbose_name": "kontakt",
                "verbose_name_plural": "kontakter",
                "ordering": ["-date_sent", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CreditRequest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Väntande"), ("approved", "Godkänd"), ("denied", "Nekad")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("reason", models.TextField(blank=True, default="", verbose_name="anledning")),
                ("handled_at", models.DateTimeField(blank=True, null=True, verbose_name="hanterad")),
                (
                    "contact",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="credit_requests",
                        to="leads.contact",
                        verbose_name="kontakt",
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="credit_requests",
                        to="partners.organization",
                        verbose_name="organisation",
                    ),
                ),
                (
                    "requested_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="credit_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="begärd av",
                    ),
                ),
                (
                    "handled_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="handled_credit_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="hanterad av",
                    ),
                ),
            ],
            options={
                "verbose_name": "kreditförfrågan",
                "verbose_name_plural": "kreditförfrågningar",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                ("name", models.CharField(max_length=200, verbose_name="namn")),
                (
                    "type",
                    models.CharField(
                        choices=[("battery", "Batteri"), ("solar", "Solceller"), ("other", "Övrigt")],
                        default="battery",
                        max_length=20,
                        verbose_name="typ",
                    ),
                ),
                (
                    "capacity_kwh",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=8, null=True, verbose_name="kapacitet (kWh)",
                    ),
                ),
                (
                    "base_price_incl_moms",
                    models.DecimalField(decimal_places=2, max_digits=12, verbose_name="grundpris inkl. moms"),
                ),
                (
                    "material_cost_eur",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12,
                        verbose_name="materialkostnad (EUR)",
                    ),
                ),
                (
                    "green_tech_deduction_percent",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("48.50"), max_digits=5,
                        verbose_name="grön teknik-avdrag (%)",
                    ),
                ),
            ],
            options={
                "verbose_name": "produkt",
                "verbose_name_plural": "produkter",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Sale",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="skapad")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="uppdaterad")),
                (
                    "pipeline_status",
                    models.CharField(
                        choices=[
                            ("new", "Ny"),
                            ("contacted", "Kontaktad"),
                            ("meeting_booked", "Möte bokat"),
                            ("offer_sent", "Offert skickad"),
                            ("negotiation", "Förhandling"),
                            ("closed_won", "Vunnen"),
                            ("closed_lost", "Förlorad"),
                        ],
                        db_index=True,
                        default="new",
                        max_length=20,
                        verbose_name="pipelinestatus",
                    ),
                ),
                (
                    "price_to_customer_incl_moms",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True,
                        verbose_name="pris till kund inkl. moms",
                    ),
                ),
                (
                    "discount_amount",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="rabatt"),
                ),
                (
                    "num_property_owners",
                    models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="antal fastighetsägare"),
                ),
                ("full_green_deduction", models.BooleanField(blank=True, null=True, verbose_name="fullt grönt avdrag")),
                (
                    "total_order_value",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="totalt ordervärde",
                    ),
                ),
                (
                    "invoiceable_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="fakturerbart belopp",
                    ),
                ),
                (
                    "closer_commission",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="closerprovision",
                    ),
                ),
                (
                    "opener_commission",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="openerprovision",
                    ),
                ),
                ("closed_at", models.DateTimeField(blank=True, db_index=True, null=True, verbose_name="stängd")),
                ("closer_notes", models.TextField(blank=True, default="", verbose_name="closeranteckningar")),
                ("partner_notes", models.TextField(blank=True, default="", verbose_name="partneranteckningar")),
                (
                    "contact",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales",
                        to="leads.contact",
                        verbose_name="kontakt",
                    ),
                ),
                (
                    "closer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="closed_sales",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="closer",
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales",
                        to="partners.organization",
                        verbose_name="organisation",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sales",
                        to="leads.product",
                        verbose_name="produkt",
                    ),
                ),
            ],
            options={
                "verbose_name": "affär",
                "verbose_name_plural": "affärer",
                "ordering": ["-created_at"],
            },
        ),
    ]
