"""Models for the leads app."""
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class InterestType(models.TextChoices):
    SOLAR = "sun", "Sol"
    BATTERY = "battery", "Batteri"
    SOLAR_BATTERY = "sun_battery", "Sol + batteri"


# ---------------------------------------------------------------------------
# Contact (lead)
# ---------------------------------------------------------------------------

class Contact(TimeStampedModel):
    """A lead generated by an opener and offered to partner organizations.

    ``date_sent`` anchors the lead to its billing period and is the
    reference date for credit deadlines.
    """

    email = models.EmailField("e-post")
    name = models.CharField("namn", max_length=200, blank=True, default="")
    phone = models.CharField("telefon", max_length=30, blank=True, default="")
    address = models.CharField("adress", max_length=255, blank=True, default="")
    postal_code = models.CharField("postnummer", max_length=10, blank=True, default="")
    interest = models.CharField(
        "intresse",
        max_length=20,
        choices=InterestType.choices,
    )
    date_sent = models.DateField("skickad", default=timezone.localdate, db_index=True)
    opener = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="opened_contacts",
        verbose_name="opener",
    )
    organizations = models.ManyToManyField(
        "partners.Organization",
        related_name="contacts",
        blank=True,
        verbose_name="organisationer",
    )

    class Meta:
        verbose_name = "kontakt"
        verbose_name_plural = "kontakter"
        ordering = ["-date_sent", "-created_at"]

    def __str__(self):
        return self.name or self.email


# ---------------------------------------------------------------------------
# CreditRequest
# ---------------------------------------------------------------------------

class CreditRequest(TimeStampedModel):
    """A partner's request to reverse billing for a lead it received."""

    class Status(models.TextChoices):
        PENDING = "pending", "Väntande"
        APPROVED = "approved", "Godkänd"
        DENIED = "denied", "Nekad"

    TERMINAL_STATUSES = (Status.APPROVED, Status.DENIED)

    contact = models.ForeignKey(
        Contact,
        on_delete=models.CASCADE,
        related_name="credit_requests",
        verbose_name="kontakt",
    )
    organization = models.ForeignKey(
        "partners.Organization",
        on_delete=models.CASCADE,
        related_name="credit_requests",
        verbose_name="organisation",
    )
    status = models.CharField(
        "status",
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    reason = models.TextField("anledning", blank=True, default="")
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="credit_requests",
        verbose_name="begärd av",
    )
    handled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="handled_credit_requests",
        verbose_name="hanterad av",
    )
    handled_at = models.DateTimeField("hanterad", null=True, blank=True)

    class Meta:
        verbose_name = "kreditförfrågan"
        verbose_name_plural = "kreditförfrågningar"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Kredit {self.contact} / {self.organization} ({self.get_status_display()})"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class Product(TimeStampedModel):
    """An offered product; supplies material cost and green deduction to pricing."""

    class ProductType(models.TextChoices):
        BATTERY = "battery", "Batteri"
        SOLAR = "solar", "Solceller"
        OTHER = "other", "Övrigt"

    name = models.CharField("namn", max_length=200)
    type = models.CharField(
        "typ",
        max_length=20,
        choices=ProductType.choices,
        default=ProductType.BATTERY,
    )
    capacity_kwh = models.DecimalField(
        "kapacitet (kWh)", max_digits=8, decimal_places=2, null=True, blank=True,
    )
    base_price_incl_moms = models.DecimalField(
        "grundpris inkl. moms", max_digits=12, decimal_places=2,
    )
    material_cost_eur = models.DecimalField(
        "materialkostnad (EUR)", max_digits=12, decimal_places=2, default=Decimal("0.00"),
    )
    green_tech_deduction_percent = models.DecimalField(
        "grön teknik-avdrag (%)", max_digits=5, decimal_places=2, default=Decimal("48.50"),
    )

    class Meta:
        verbose_name = "produkt"
        verbose_name_plural = "produkter"
        ordering = ["name"]

    def __str__(self):
        return self.name


# ---------------------------------------------------------------------------
# Sale
# ---------------------------------------------------------------------------

class Sale(TimeStampedModel):
    """A deal a closer works on for a lead and a partner organization."""

    class PipelineStatus(models.TextChoices):
        NEW = "new", "Ny"
        CONTACTED = "contacted", "Kontaktad"
        MEETING_BOOKED = "meeting_booked", "Möte bokat"
        OFFER_SENT = "offer_sent", "Offert skickad"
        NEGOTIATION = "negotiation", "Förhandling"
        CLOSED_WON = "closed_won", "Vunnen"
        CLOSED_LOST = "closed_lost", "Förlorad"

    TERMINAL_STATUSES = (PipelineStatus.CLOSED_WON, PipelineStatus.CLOSED_LOST)

    contact = models.ForeignKey(
        Contact,
        on_delete=models.PROTECT,
        related_name="sales",
        verbose_name="kontakt",
    )
    closer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="closed_sales",
        verbose_name="closer",
    )
    organization = models.ForeignKey(
        "partners.Organization",
        on_delete=models.PROTECT,
        related_name="sales",
        verbose_name="organisation",
    )
    pipeline_status = models.CharField(
        "pipelinestatus",
        max_length=20,
        choices=PipelineStatus.choices,
        default=PipelineStatus.NEW,
        db_index=True,
    )

    # Pricing inputs
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
        verbose_name="produkt",
    )
    price_to_customer_incl_moms = models.DecimalField(
        "pris till kund inkl. moms",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    discount_amount = models.DecimalField(
        "rabatt",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    num_property_owners = models.PositiveSmallIntegerField("antal fastighetsägare", null=True, blank=True)
    full_green_deduction = models.BooleanField("fullt grönt avdrag", null=True, blank=True)

    # Derived amounts
    total_order_value = models.DecimalField(
        "totalt ordervärde",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    invoiceable_amount = models.DecimalField(
        "fakturerbart belopp",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    closer_commission = models.DecimalField(
        "closerprovision",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    opener_commission = models.DecimalField(
        "openerprovision",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )

    closed_at = models.DateTimeField("stängd", null=True, blank=True, db_index=True)
    closer_notes = models.TextField("closeranteckningar", blank=True, default="")
    partner_notes = models.TextField("partneranteckningar", blank=True, default="")

    class Meta:
        verbose_name = "affär"
        verbose_name_plural = "affärer"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Affär {self.contact} ({self.get_pipeline_status_display()})"

    @property
    def is_closed(self):
        return self.pipeline_status in self.TERMINAL_STATUSES
