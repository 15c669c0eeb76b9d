"""Record builders for the pure billing engine tests."""
from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest
from django.utils import timezone

from billing.snapshot import (
    CreditRecord,
    LeadRecord,
    OrganizationRecord,
    SaleRecord,
    Snapshot,
)
from billing.staff import (
    CloserParams,
    CloserRole,
    OpenerParams,
    OpenerRole,
    StaffProfile,
)

_ids = count(1)


@pytest.fixture
def local_dt():
    """Timezone-aware datetime in the project time zone."""
    def _make(year, month, day, hour=12, minute=0):
        return timezone.make_aware(datetime(year, month, day, hour, minute))
    return _make


@pytest.fixture
def make_org():
    def _make(name="SunBro", solar="1000", battery="1500", **kwargs):
        return OrganizationRecord(
            id=kwargs.pop("id", f"org-{next(_ids)}"),
            name=name,
            price_per_solar_deal=Decimal(solar) if solar is not None else None,
            price_per_battery_deal=Decimal(battery) if battery is not None else None,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_lead():
    def _make(date_sent, organizations=(), opener_id="opener-1", interest="sun", **kwargs):
        return LeadRecord(
            id=kwargs.pop("id", f"lead-{next(_ids)}"),
            email=kwargs.pop("email", "kund@example.se"),
            interest=interest,
            date_sent=date_sent,
            opener_id=opener_id,
            organization_ids=frozenset(org.id for org in organizations),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_credit():
    def _make(lead, organization, created_at, status="approved", **kwargs):
        return CreditRecord(
            id=kwargs.pop("id", f"credit-{next(_ids)}"),
            lead_id=lead.id,
            organization_id=organization.id,
            status=status,
            created_at=created_at,
            lead_date_sent=lead.date_sent,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_sale():
    def _make(lead, organization, closer_id="closer-1", status="closed_won", closed_at=None, **kwargs):
        return SaleRecord(
            id=kwargs.pop("id", f"sale-{next(_ids)}"),
            lead_id=lead.id,
            closer_id=closer_id,
            organization_id=organization.id,
            pipeline_status=status,
            opener_id=lead.opener_id,
            closed_at=closed_at,
            **kwargs,
        )
    return _make


@pytest.fixture
def opener_profile():
    def _make(id="opener-1", name="Olle Opener", per_lead=None, per_deal=None, role_cls=OpenerRole):
        params = OpenerParams(
            commission_per_lead=Decimal(per_lead) if per_lead is not None else None,
            commission_per_deal=Decimal(per_deal) if per_deal is not None else None,
        )
        return StaffProfile(id=id, email=f"{id}@test.se", name=name, role=role_cls(params))
    return _make


@pytest.fixture
def closer_profile():
    def _make(id="closer-1", name="Clara Closer", base=None):
        params = CloserParams(base_commission=Decimal(base) if base is not None else None)
        return StaffProfile(id=id, email=f"{id}@test.se", name=name, role=CloserRole(params))
    return _make


@pytest.fixture
def snapshot():
    def _make(leads=(), credits=(), sales=(), organizations=(), staff=()):
        return Snapshot(
            leads=tuple(leads),
            credits=tuple(credits),
            sales=tuple(sales),
            organizations=tuple(organizations),
            staff=tuple(staff),
        )
    return _make

