"""Models for the billing app."""
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# EmployerCostSetting
# ---------------------------------------------------------------------------

class EmployerCostSetting(TimeStampedModel):
    """Percentage surcharge applied on top of the commission pool.

    Business rule: at most one setting is active at a time. Activating a
    setting deactivates the others.
    """

    name = models.CharField("namn", max_length=120)
    description = models.TextField("beskrivning", blank=True, default="")
    percentage = models.DecimalField(
        "procentsats",
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    is_active = models.BooleanField("aktiv", default=True)

    class Meta:
        verbose_name = "arbetsgivaravgift"
        verbose_name_plural = "arbetsgivaravgifter"
        ordering = ["-is_active", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_active"],
                condition=models.Q(is_active=True),
                name="billing_single_active_employer_cost",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.percentage}%)"

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self.is_active:
                (
                    EmployerCostSetting.objects
                    .filter(is_active=True)
                    .exclude(pk=self.pk)
                    .update(is_active=False)
                )
            super().save(*args, **kwargs)

    @classmethod
    def get_active(cls):
        return cls.objects.filter(is_active=True).first()


# ---------------------------------------------------------------------------
# CommissionStatement
# ---------------------------------------------------------------------------

class CommissionStatement(TimeStampedModel):
    """Frozen commission summary for one reporting month.

    ``payload`` keeps the full per-staff breakdown as it was computed so
    later edits to leads or rates do not rewrite a closed month.
    """

    period = models.CharField("period", max_length=7, unique=True)  # "YYYY-MM"
    total_opener_commission = models.DecimalField(
        "openerprovision totalt", max_digits=14, decimal_places=2, default=Decimal("0.00"),
    )
    total_closer_commission = models.DecimalField(
        "closerprovision totalt", max_digits=14, decimal_places=2, default=Decimal("0.00"),
    )
    employer_cost_percentage = models.DecimalField(
        "arbetsgivaravgift (%)", max_digits=5, decimal_places=2, default=Decimal("0.00"),
    )
    employer_cost_amount = models.DecimalField(
        "arbetsgivaravgift", max_digits=14, decimal_places=2, default=Decimal("0.00"),
    )
    total_with_employer_cost = models.DecimalField(
        "total kostnad", max_digits=14, decimal_places=2, default=Decimal("0.00"),
    )
    payload = models.JSONField("underlag", default=dict)
    is_final = models.BooleanField("slutgiltig", default=False)
    computed_at = models.DateTimeField("beräknad", null=True, blank=True)

    class Meta:
        verbose_name = "provisionsunderlag"
        verbose_name_plural = "provisionsunderlag"
        ordering = ["-period"]

    def __str__(self):
        return f"Provisionsunderlag {self.period}"
