"""Models for the partners app."""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


def _default_credit_deadline_days():
    return settings.CREDIT_DEADLINE_DAYS_DEFAULT


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

class Organization(TimeStampedModel):
    """A partner organization that buys leads and may request credits."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Aktiv"
        ARCHIVED = "archived", "Arkiverad"

    name = models.CharField("namn", max_length=200)
    status = models.CharField(
        "status",
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    price_per_solar_deal = models.DecimalField(
        "pris per solcellslead",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    price_per_battery_deal = models.DecimalField(
        "pris per batterilead",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    price_per_site_visit = models.DecimalField(
        "pris per platsbesök",
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    can_request_credits = models.BooleanField("får kreditera leads", default=True)
    credit_deadline_days = models.PositiveIntegerField(
        "kreditfrist (dagar)",
        default=_default_credit_deadline_days,
        help_text="Antal dagar efter att leadet skickats då partnern kan begära kredit.",
    )
    contact_person_name = models.CharField("kontaktperson", max_length=200, blank=True, default="")
    contact_phone = models.CharField("telefon", max_length=30, blank=True, default="")

    class Meta:
        verbose_name = "partnerorganisation"
        verbose_name_plural = "partnerorganisationer"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE


# ---------------------------------------------------------------------------
# OrganizationCommissionSettings
# ---------------------------------------------------------------------------

class OrganizationCommissionSettings(TimeStampedModel):
    """Cost parameters used when pricing a closed deal for an organization."""

    organization = models.OneToOneField(
        Organization,
        on_delete=models.CASCADE,
        related_name="commission_settings",
        verbose_name="organisation",
    )
    base_cost = models.DecimalField(
        "baskostnad",
        max_digits=12,
        decimal_places=2,
        default=Decimal("23000.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    eur_to_sek_rate = models.DecimalField(
        "växelkurs EUR/SEK",
        max_digits=8,
        decimal_places=4,
        default=Decimal("11.0000"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    lf_finans_percent = models.DecimalField(
        "LF Finans-avgift (%)",
        max_digits=5,
        decimal_places=2,
        default=Decimal("3.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )

    class Meta:
        verbose_name = "provisionsinställning"
        verbose_name_plural = "provisionsinställningar"

    def __str__(self):
        return f"Provisionsinställningar - {self.organization}"
