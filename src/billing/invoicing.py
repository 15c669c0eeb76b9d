"""Invoiceable value per partner organization.

For billing month ``M`` an organization is invoiced for every lead linked
to it that was sent during the leads window (the month before ``M``),
priced by interest type. Approved credits reconciled against ``M`` are
reported alongside as the amount to deduct.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from billing.credit_filter import filter_credits_for_month
from billing.exceptions import UnknownOrganization
from billing.periods import BillingPeriods, compute_billing_periods
from billing.snapshot import (
    INTEREST_BATTERY,
    INTEREST_SOLAR,
    INTEREST_SOLAR_BATTERY,
    INTEREST_TYPES,
    OrganizationRecord,
    Snapshot,
)

ZERO = Decimal("0")


@dataclass(frozen=True)
class InterestLine:
    count: int
    unit_price: Decimal
    value: Decimal


@dataclass(frozen=True)
class InvoiceableValue:
    organization_id: str
    organization_name: str
    organization_status: str
    billing_month: str
    lead_count: int
    breakdown_by_interest_type: dict[str, InterestLine]
    total_value: Decimal
    credited_count: int = 0
    credited_value: Decimal = ZERO

    @property
    def net_value(self) -> Decimal:
        return self.total_value - self.credited_value


@dataclass(frozen=True)
class PartnerOverview:
    organization_id: str
    organization_name: str
    organization_status: str
    lead_count: int
    solar_count: int
    battery_count: int
    solar_battery_count: int
    total_value: Decimal
    credit_requests: int
    approved_credits: int
    sale_count: int
    won_count: int
    # percent of sales on the window's leads that were won
    close_rate: Decimal = field(default=ZERO)


def _invoiceable_value(
    snapshot: Snapshot, organization: OrganizationRecord, periods: BillingPeriods
) -> InvoiceableValue:
    counts = dict.fromkeys(INTEREST_TYPES, 0)
    for lead in snapshot.leads:
        if organization.id in lead.organization_ids and lead.date_sent in periods.leads_window:
            if lead.interest in counts:
                counts[lead.interest] += 1

    breakdown = {}
    for interest in INTEREST_TYPES:
        unit_price = organization.price_for(interest)
        breakdown[interest] = InterestLine(
            count=counts[interest],
            unit_price=unit_price,
            value=unit_price * counts[interest],
        )
    total = sum((line.value for line in breakdown.values()), ZERO)

    organization_credits = [c for c in snapshot.credits if c.organization_id == organization.id]
    leads_by_id = {lead.id: lead for lead in snapshot.leads}
    credited = [
        c for c in filter_credits_for_month(organization_credits, periods.billing_month)
        if c.is_approved
    ]
    credited_value = ZERO
    for credit in credited:
        lead = leads_by_id.get(credit.lead_id)
        if lead is not None:
            credited_value += organization.price_for(lead.interest)

    return InvoiceableValue(
        organization_id=organization.id,
        organization_name=organization.name,
        organization_status=organization.status,
        billing_month=str(periods.billing_month),
        lead_count=sum(counts.values()),
        breakdown_by_interest_type=breakdown,
        total_value=total,
        credited_count=len(credited),
        credited_value=credited_value,
    )


def compute_invoiceable_value(
    snapshot: Snapshot, organization_id: str, selected_month
) -> InvoiceableValue:
    """Value of one organization's invoice for ``selected_month``.

    ``total_value`` is::

        solar × price_per_solar_deal
        + battery × price_per_battery_deal
        + solar_battery × (price_per_solar_deal + price_per_battery_deal)

    with missing prices counted as 0. Archived organizations are computed
    as well when asked for by id.
    """
    organization = snapshot.organization(str(organization_id))
    if organization is None:
        raise UnknownOrganization(organization_id)
    return _invoiceable_value(snapshot, organization, compute_billing_periods(selected_month))


def compute_invoicing_overview(
    snapshot: Snapshot, selected_month, status: str | None = "active"
) -> list[InvoiceableValue]:
    """Invoices for every organization with ``status`` that has leads in the window.

    Sorted by total value, highest first. ``status=None`` includes all
    organizations.
    """
    periods = compute_billing_periods(selected_month)
    rows = [
        _invoiceable_value(snapshot, org, periods)
        for org in snapshot.organizations
        if status is None or org.status == status
    ]
    rows = [row for row in rows if row.lead_count > 0]
    rows.sort(key=lambda r: (-r.total_value, r.organization_name.lower(), r.organization_id))
    return rows


def compute_partner_overview(
    snapshot: Snapshot, selected_month, status: str | None = "active"
) -> list[PartnerOverview]:
    """Per-partner activity for the month: leads, value, credits and close rate."""
    periods = compute_billing_periods(selected_month)
    rows = []
    for org in snapshot.organizations:
        if status is not None and org.status != status:
            continue
        invoice = _invoiceable_value(snapshot, org, periods)
        window_lead_ids = {
            lead.id
            for lead in snapshot.leads
            if org.id in lead.organization_ids and lead.date_sent in periods.leads_window
        }
        org_credits = [
            c for c in snapshot.credits
            if c.organization_id == org.id and c.lead_id in window_lead_ids
        ]
        org_sales = [
            s for s in snapshot.sales
            if s.organization_id == org.id and s.lead_id in window_lead_ids
        ]
        won = sum(1 for s in org_sales if s.is_won)
        close_rate = ZERO
        if org_sales:
            close_rate = (Decimal(won) * 100 / len(org_sales)).quantize(Decimal("0.1"))

        breakdown = invoice.breakdown_by_interest_type
        rows.append(
            PartnerOverview(
                organization_id=org.id,
                organization_name=org.name,
                organization_status=org.status,
                lead_count=invoice.lead_count,
                solar_count=breakdown[INTEREST_SOLAR].count,
                battery_count=breakdown[INTEREST_BATTERY].count,
                solar_battery_count=breakdown[INTEREST_SOLAR_BATTERY].count,
                total_value=invoice.total_value,
                credit_requests=len(org_credits),
                approved_credits=sum(1 for c in org_credits if c.is_approved),
                sale_count=len(org_sales),
                won_count=won,
                close_rate=close_rate,
            )
        )
    rows.sort(key=lambda r: (-r.total_value, r.organization_name.lower(), r.organization_id))
    return rows
