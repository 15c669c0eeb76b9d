"""Commission accrual for openers, team leaders and closers.

Openers (and team leaders, who carry opener parameters) earn a flat rate
per *qualifying* lead generated in the leads window, plus a bonus per
deal closed in the reporting month on one of their leads. Closers earn
the commission recorded on each deal they closed in the reporting month.

Every function here is pure over a ``Snapshot``: the same snapshot and
config always give the same result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from billing.config import CommissionConfig
from billing.periods import BillingPeriods, compute_billing_periods
from billing.snapshot import LeadRecord, Snapshot
from billing.staff import CloserRole, OpenerRole, StaffProfile, TeamLeaderRole

logger = logging.getLogger("crm")

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class OpenerCommissionResult:
    staff_id: str
    name: str
    email: str
    role: str  # "opener" or "teamleader"
    lead_count: int
    qualifying_lead_count: int
    commission_per_lead: Decimal
    lead_commission: Decimal
    closed_deal_count: int
    deal_bonus: Decimal
    total: Decimal
    defaulted_rates: tuple[str, ...] = ()


@dataclass(frozen=True)
class CloserCommissionResult:
    staff_id: str
    name: str
    email: str
    closed_deal_count: int
    total_commission: Decimal
    base_commission: Decimal
    # won deals without a recorded commission, counted as zero
    unpriced_deal_count: int = 0
    defaulted_rates: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommissionSummary:
    billing_month: str
    openers: tuple[OpenerCommissionResult, ...]
    closers: tuple[CloserCommissionResult, ...]
    total_opener_commission: Decimal
    total_closer_commission: Decimal
    employer_cost_name: str
    employer_cost_percentage: Decimal
    employer_cost_amount: Decimal
    total_with_employer_cost: Decimal

    @property
    def total_commission(self) -> Decimal:
        return self.total_opener_commission + self.total_closer_commission


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def qualifying_organization_count(lead: LeadRecord, snapshot: Snapshot) -> int:
    """Linked organizations minus those holding an approved credit."""
    return len(lead.organization_ids - snapshot.approved_credit_organizations(lead.id))


def _rate(value, default: Decimal, field_name: str, profile: StaffProfile, defaulted: list):
    if value is not None:
        return Decimal(value)
    logger.info(
        "Commission rate %s missing for staff=%s; using default %s",
        field_name,
        profile.id,
        default,
        extra={"staff_id": profile.id, "rate_field": field_name},
    )
    defaulted.append(field_name)
    return default


def _sort_key(result):
    return (result.name.lower(), result.email.lower(), result.staff_id)


def _opener_result(
    profile: StaffProfile,
    role_name: str,
    params,
    snapshot: Snapshot,
    periods: BillingPeriods,
    config: CommissionConfig,
) -> OpenerCommissionResult:
    defaulted: list[str] = []
    rate = _rate(
        params.commission_per_lead,
        config.opener_commission_per_lead,
        "opener_commission_per_lead",
        profile,
        defaulted,
    )

    leads = [
        lead
        for lead in snapshot.leads
        if lead.opener_id == profile.id and lead.date_sent in periods.leads_window
    ]
    qualifying = sum(
        1
        for lead in leads
        if qualifying_organization_count(lead, snapshot)
        >= config.qualifying_organization_threshold
    )

    deals = [
        sale
        for sale in snapshot.sales
        if sale.is_won
        and sale.opener_id == profile.id
        and sale.closed_at is not None
        and sale.closed_at in periods.reporting_window
    ]
    deal_bonus = ZERO
    deal_rate = None
    for sale in deals:
        if sale.opener_commission is not None:
            deal_bonus += sale.opener_commission
            continue
        if deal_rate is None:
            deal_rate = _rate(
                params.commission_per_deal,
                config.opener_commission_per_deal,
                "opener_commission_per_deal",
                profile,
                defaulted,
            )
        deal_bonus += deal_rate

    lead_commission = _money(rate * qualifying)
    deal_bonus = _money(deal_bonus)
    return OpenerCommissionResult(
        staff_id=profile.id,
        name=profile.display_name,
        email=profile.email,
        role=role_name,
        lead_count=len(leads),
        qualifying_lead_count=qualifying,
        commission_per_lead=_money(rate),
        lead_commission=lead_commission,
        closed_deal_count=len(deals),
        deal_bonus=deal_bonus,
        total=lead_commission + deal_bonus,
        defaulted_rates=tuple(defaulted),
    )


def _closer_result(
    profile: StaffProfile,
    params,
    snapshot: Snapshot,
    periods: BillingPeriods,
    config: CommissionConfig,
) -> CloserCommissionResult:
    defaulted: list[str] = []
    base = _rate(
        params.base_commission,
        config.closer_base_commission,
        "closer_base_commission",
        profile,
        defaulted,
    )
    deals = [
        sale
        for sale in snapshot.sales
        if sale.is_won
        and sale.closer_id == profile.id
        and sale.closed_at is not None
        and sale.closed_at in periods.reporting_window
    ]
    total = sum((sale.closer_commission or ZERO for sale in deals), ZERO)
    return CloserCommissionResult(
        staff_id=profile.id,
        name=profile.display_name,
        email=profile.email,
        closed_deal_count=len(deals),
        total_commission=_money(total),
        base_commission=_money(base),
        unpriced_deal_count=sum(1 for sale in deals if sale.closer_commission is None),
        defaulted_rates=tuple(defaulted),
    )


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------


def compute_opener_commissions(
    snapshot: Snapshot, selected_month, config: CommissionConfig
) -> list[OpenerCommissionResult]:
    """Opener and team leader commission for a billing month.

    Parameters
    ----------
    snapshot : Snapshot
        Point-in-time records; only leads in the month's leads window and
        deals closed in the month itself are counted.
    selected_month : str | date | BillingMonth
    config : CommissionConfig
        Default rates used where a staff profile has none.

    Returns
    -------
    list[OpenerCommissionResult]
        One row per opener/team leader, zero rows included, sorted by name.
    """
    periods = compute_billing_periods(selected_month)
    results = []
    for profile in snapshot.staff:
        match profile.role:
            case OpenerRole(params=params):
                results.append(
                    _opener_result(profile, "opener", params, snapshot, periods, config)
                )
            case TeamLeaderRole(params=params):
                results.append(
                    _opener_result(profile, "teamleader", params, snapshot, periods, config)
                )
            case _:
                continue
    results.sort(key=_sort_key)
    return results


def compute_closer_commissions(
    snapshot: Snapshot, selected_month, config: CommissionConfig
) -> list[CloserCommissionResult]:
    """Closer commission recognised in the month the deals closed."""
    periods = compute_billing_periods(selected_month)
    results = []
    for profile in snapshot.staff:
        match profile.role:
            case CloserRole(params=params):
                results.append(_closer_result(profile, params, snapshot, periods, config))
            case _:
                continue
    results.sort(key=_sort_key)
    return results


def compute_commission_summary(
    snapshot: Snapshot, selected_month, config: CommissionConfig
) -> CommissionSummary:
    """Totals for the month plus the employer-cost surcharge on the pool."""
    periods = compute_billing_periods(selected_month)
    openers = compute_opener_commissions(snapshot, periods.billing_month, config)
    closers = compute_closer_commissions(snapshot, periods.billing_month, config)

    total_opener = sum((r.total for r in openers), ZERO)
    total_closer = sum((r.total_commission for r in closers), ZERO)
    percentage = Decimal(config.employer_cost_percentage)
    surcharge = _money((total_opener + total_closer) * percentage / Decimal("100"))

    return CommissionSummary(
        billing_month=str(periods.billing_month),
        openers=tuple(openers),
        closers=tuple(closers),
        total_opener_commission=_money(total_opener),
        total_closer_commission=_money(total_closer),
        employer_cost_name=config.employer_cost_name,
        employer_cost_percentage=percentage,
        employer_cost_amount=surcharge,
        total_with_employer_cost=_money(total_opener + total_closer + surcharge),
    )
