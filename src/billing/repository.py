"""Read side of the billing engine: ORM rows to immutable records."""
from __future__ import annotations

import logging
from datetime import datetime, time, timedelta

from django.db.models import Q
from django.utils import timezone

from billing.periods import DateWindow, compute_billing_periods
from billing.snapshot import (
    CreditRecord,
    LeadRecord,
    OrganizationRecord,
    SaleRecord,
    Snapshot,
)
from billing.staff import StaffProfile, staff_profile_for

logger = logging.getLogger("crm")

COMMISSION_ROLES = ("opener", "teamleader", "closer")


def _id(value) -> str | None:
    return str(value) if value is not None else None


def _datetime_range(window: DateWindow):
    """Aware [start, end) instants covering the window's local dates."""
    tz = timezone.get_default_timezone()
    start = timezone.make_aware(datetime.combine(window.start, time.min), tz)
    end = timezone.make_aware(datetime.combine(window.end + timedelta(days=1), time.min), tz)
    return start, end


# ---------------------------------------------------------------------------
# Row converters
# ---------------------------------------------------------------------------

def lead_record(contact) -> LeadRecord:
    return LeadRecord(
        id=str(contact.pk),
        email=contact.email,
        interest=contact.interest,
        date_sent=contact.date_sent,
        opener_id=_id(contact.opener_id),
        organization_ids=frozenset(str(org.pk) for org in contact.organizations.all()),
        name=contact.name,
    )


def organization_record(org) -> OrganizationRecord:
    return OrganizationRecord(
        id=str(org.pk),
        name=org.name,
        status=org.status,
        price_per_solar_deal=org.price_per_solar_deal,
        price_per_battery_deal=org.price_per_battery_deal,
        can_request_credits=org.can_request_credits,
        credit_deadline_days=org.credit_deadline_days,
    )


def credit_record(credit) -> CreditRecord:
    return CreditRecord(
        id=str(credit.pk),
        lead_id=str(credit.contact_id),
        organization_id=str(credit.organization_id),
        status=credit.status,
        created_at=credit.created_at,
        lead_date_sent=credit.contact.date_sent,
        reason=credit.reason,
        requested_by_id=_id(credit.requested_by_id),
    )


def sale_record(sale) -> SaleRecord:
    return SaleRecord(
        id=str(sale.pk),
        lead_id=str(sale.contact_id),
        closer_id=str(sale.closer_id),
        organization_id=str(sale.organization_id),
        pipeline_status=sale.pipeline_status,
        opener_id=_id(sale.contact.opener_id),
        closer_commission=sale.closer_commission,
        opener_commission=sale.opener_commission,
        invoiceable_amount=sale.invoiceable_amount,
        closed_at=sale.closed_at,
    )


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def list_leads(*, date_range: DateWindow | None = None, opener_id=None, organization_id=None):
    from leads.models import Contact

    qs = Contact.objects.prefetch_related("organizations")
    if date_range is not None:
        qs = qs.filter(date_sent__gte=date_range.start, date_sent__lte=date_range.end)
    if opener_id is not None:
        qs = qs.filter(opener_id=opener_id)
    if organization_id is not None:
        qs = qs.filter(organizations__id=organization_id)
    return [lead_record(c) for c in qs.distinct().order_by("date_sent", "id")]


def list_credit_requests(*, organization_id=None, status=None, lead_date_range=None):
    from leads.models import CreditRequest

    qs = CreditRequest.objects.select_related("contact")
    if organization_id is not None:
        qs = qs.filter(organization_id=organization_id)
    if status is not None:
        qs = qs.filter(status=status)
    if lead_date_range is not None:
        qs = qs.filter(
            contact__date_sent__gte=lead_date_range.start,
            contact__date_sent__lte=lead_date_range.end,
        )
    return [credit_record(c) for c in qs.order_by("created_at", "id")]


def list_sales(
    *,
    closer_id=None,
    organization_id=None,
    pipeline_status=None,
    closed_date_range: DateWindow | None = None,
):
    from leads.models import Sale

    qs = Sale.objects.select_related("contact")
    if closer_id is not None:
        qs = qs.filter(closer_id=closer_id)
    if organization_id is not None:
        qs = qs.filter(organization_id=organization_id)
    if pipeline_status is not None:
        qs = qs.filter(pipeline_status=pipeline_status)
    if closed_date_range is not None:
        start, end = _datetime_range(closed_date_range)
        qs = qs.filter(closed_at__gte=start, closed_at__lt=end)
    return [sale_record(s) for s in qs.order_by("created_at", "id")]


def list_organizations(*, status=None):
    from partners.models import Organization

    qs = Organization.objects.all()
    if status is not None:
        qs = qs.filter(status=status)
    return [organization_record(o) for o in qs.order_by("name", "id")]


def list_staff_profiles(*, role=None, include_inactive=False) -> list[StaffProfile]:
    from accounts.models import User

    qs = User.objects.prefetch_related("commission_types")
    if role is not None:
        roles = role if isinstance(role, (list, tuple, set, frozenset)) else [role]
        qs = qs.filter(role__in=roles)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return [staff_profile_for(u) for u in qs.order_by("last_name", "first_name", "email")]


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

def load_snapshot(selected_month) -> Snapshot:
    """Everything the compute functions need for ``selected_month``.

    Covers leads of the leads window and the previous leads window (for
    carried-over credits), every credit on those leads, deals closed in
    the billing month or made on those leads, all organizations and the
    commission-earning staff. Deactivated staff are included only when
    they have activity in the snapshot.
    """
    from leads.models import Sale

    periods = compute_billing_periods(selected_month)
    lead_range = DateWindow(periods.previous_leads_window.start, periods.leads_window.end)

    leads = list_leads(date_range=lead_range)
    credits = list_credit_requests(lead_date_range=lead_range)

    closed_start, closed_end = _datetime_range(periods.reporting_window)
    sale_qs = (
        Sale.objects.select_related("contact")
        .filter(
            Q(closed_at__gte=closed_start, closed_at__lt=closed_end)
            | Q(contact__date_sent__gte=lead_range.start, contact__date_sent__lte=lead_range.end)
        )
        .distinct()
        .order_by("created_at", "id")
    )
    sales = [sale_record(s) for s in sale_qs]

    staff = list_staff_profiles(role=COMMISSION_ROLES, include_inactive=True)
    active_ids = {p.id for p in list_staff_profiles(role=COMMISSION_ROLES)}
    involved = {lead.opener_id for lead in leads}
    involved |= {s.closer_id for s in sales} | {s.opener_id for s in sales}
    staff = [p for p in staff if p.id in active_ids or p.id in involved]

    snapshot = Snapshot(
        leads=tuple(leads),
        credits=tuple(credits),
        sales=tuple(sales),
        organizations=tuple(list_organizations()),
        staff=tuple(staff),
        taken_at=timezone.now(),
    )
    logger.debug(
        "Loaded billing snapshot month=%s leads=%d credits=%d sales=%d",
        periods.billing_month,
        len(snapshot.leads),
        len(snapshot.credits),
        len(snapshot.sales),
    )
    return snapshot
