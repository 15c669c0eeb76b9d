"""Immutable records the billing engine computes over.

A ``Snapshot`` is assembled once per reporting request (see
``billing.repository.load_snapshot``) so that every figure in a report is
derived from the same point-in-time view of leads, credits and sales.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from billing.staff import StaffProfile

CREDIT_PENDING = "pending"
CREDIT_APPROVED = "approved"
CREDIT_DENIED = "denied"

INTEREST_SOLAR = "sun"
INTEREST_BATTERY = "battery"
INTEREST_SOLAR_BATTERY = "sun_battery"
INTEREST_TYPES = (INTEREST_SOLAR, INTEREST_BATTERY, INTEREST_SOLAR_BATTERY)

PIPELINE_CLOSED_WON = "closed_won"
PIPELINE_CLOSED_LOST = "closed_lost"


@dataclass(frozen=True)
class LeadRecord:
    id: str
    email: str
    interest: str
    date_sent: date
    opener_id: str | None
    organization_ids: frozenset[str] = frozenset()
    name: str = ""


@dataclass(frozen=True)
class OrganizationRecord:
    id: str
    name: str
    status: str = "active"
    price_per_solar_deal: Decimal | None = None
    price_per_battery_deal: Decimal | None = None
    can_request_credits: bool = True
    credit_deadline_days: int = 14

    @property
    def solar_price(self) -> Decimal:
        return self.price_per_solar_deal or Decimal("0")

    @property
    def battery_price(self) -> Decimal:
        return self.price_per_battery_deal or Decimal("0")

    def price_for(self, interest: str) -> Decimal:
        if interest == INTEREST_SOLAR:
            return self.solar_price
        if interest == INTEREST_BATTERY:
            return self.battery_price
        if interest == INTEREST_SOLAR_BATTERY:
            return self.solar_price + self.battery_price
        return Decimal("0")


@dataclass(frozen=True)
class CreditRecord:
    id: str
    lead_id: str
    organization_id: str
    status: str
    created_at: datetime
    lead_date_sent: date
    reason: str = ""
    requested_by_id: str | None = None

    @property
    def is_approved(self) -> bool:
        return self.status == CREDIT_APPROVED


@dataclass(frozen=True)
class SaleRecord:
    id: str
    lead_id: str
    closer_id: str
    organization_id: str
    pipeline_status: str
    opener_id: str | None = None
    closer_commission: Decimal | None = None
    opener_commission: Decimal | None = None
    invoiceable_amount: Decimal | None = None
    closed_at: datetime | None = None

    @property
    def is_won(self) -> bool:
        return self.pipeline_status == PIPELINE_CLOSED_WON


@dataclass(frozen=True)
class Snapshot:
    leads: tuple[LeadRecord, ...] = ()
    credits: tuple[CreditRecord, ...] = ()
    sales: tuple[SaleRecord, ...] = ()
    organizations: tuple[OrganizationRecord, ...] = ()
    staff: tuple[StaffProfile, ...] = ()
    taken_at: datetime | None = None
    _organizations_by_id: dict = field(default=None, init=False, repr=False, compare=False)
    _approved_orgs_by_lead: dict = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_organizations_by_id", {org.id: org for org in self.organizations}
        )
        approved: dict[str, set[str]] = {}
        for credit in self.credits:
            if credit.is_approved:
                approved.setdefault(credit.lead_id, set()).add(credit.organization_id)
        object.__setattr__(
            self,
            "_approved_orgs_by_lead",
            {lead_id: frozenset(org_ids) for lead_id, org_ids in approved.items()},
        )

    def organization(self, organization_id: str) -> OrganizationRecord | None:
        return self._organizations_by_id.get(organization_id)

    def approved_credit_organizations(self, lead_id: str) -> frozenset[str]:
        """Organizations holding an approved credit for the lead."""
        return self._approved_orgs_by_lead.get(lead_id, frozenset())
