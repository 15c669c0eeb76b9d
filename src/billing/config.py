"""Explicit configuration for the commission engine."""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from django.conf import settings


@dataclass(frozen=True)
class CommissionConfig:
    """Defaults used when a staff profile or sale lacks a rate.

    Built once per request and passed to every compute function, so a
    result depends only on its arguments.
    """

    opener_commission_per_lead: Decimal = Decimal("200")
    opener_commission_per_deal: Decimal = Decimal("1000")
    closer_base_commission: Decimal = Decimal("8000")
    employer_cost_percentage: Decimal = Decimal("0")
    employer_cost_name: str = ""
    qualifying_organization_threshold: int = 2

    @classmethod
    def from_settings(cls) -> "CommissionConfig":
        return cls(
            opener_commission_per_lead=Decimal(str(settings.OPENER_COMMISSION_PER_LEAD_DEFAULT)),
            opener_commission_per_deal=Decimal(str(settings.OPENER_COMMISSION_PER_DEAL_DEFAULT)),
            closer_base_commission=Decimal(str(settings.CLOSER_BASE_COMMISSION_DEFAULT)),
            employer_cost_percentage=Decimal(str(settings.EMPLOYER_COST_PERCENTAGE_DEFAULT)),
        )

    @classmethod
    def load(cls) -> "CommissionConfig":
        """Settings defaults overlaid with the active employer-cost row."""
        from billing.models import EmployerCostSetting

        config = cls.from_settings()
        active = EmployerCostSetting.get_active()
        if active is None:
            return config
        return replace(
            config,
            employer_cost_percentage=active.percentage,
            employer_cost_name=active.name,
        )
