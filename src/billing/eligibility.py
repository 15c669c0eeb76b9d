"""Credit request eligibility.

Two independent thresholds apply to a credit request:

* the organization's ``credit_deadline_days``; partner users are hard
  rejected past it, admins and team leaders may override it;
* a 60-day soft limit past which every submission needs an explicit
  confirmation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from django.conf import settings
from django.utils import timezone

from billing.exceptions import (
    BillingError,
    ConfirmationRequired,
    CreditsNotAllowed,
    DeadlinePassed,
)
from billing.periods import BillingMonth, compute_billing_periods
from billing.snapshot import CreditRecord, LeadRecord, OrganizationRecord
from billing.staff import AdminRole, PartnerUserRole, StaffRole, TeamLeaderRole

logger = logging.getLogger("crm")


@dataclass(frozen=True)
class CreditEligibility:
    eligible: bool
    is_deferred: bool
    days_since_sent: int
    deadline_days: int
    requires_confirmation: bool = False
    reason: str | None = None

    @property
    def days_remaining(self) -> int:
        return max(0, self.deadline_days - self.days_since_sent)


def _local_date(value) -> date:
    if value is None:
        return timezone.localdate()
    if isinstance(value, datetime):
        return timezone.localdate(value) if timezone.is_aware(value) else value.date()
    return value


def _confirmation_threshold(threshold_days: int | None) -> int:
    if threshold_days is not None:
        return threshold_days
    return settings.CREDIT_CONFIRMATION_THRESHOLD_DAYS


def days_since_sent(date_sent: date, now=None) -> int:
    """Whole days elapsed between ``date_sent`` and ``now`` (local dates)."""
    return (_local_date(now) - date_sent).days


def is_deferred_for_month(lead: LeadRecord, selected_month) -> bool:
    """True when the lead predates the leads window billed in ``selected_month``."""
    periods = compute_billing_periods(selected_month)
    return lead.date_sent < periods.leads_window.start


def is_deferred_credit(credit: CreditRecord) -> bool:
    """True when the credit missed the cutoff of its lead's natural invoice."""
    natural_billing_month = BillingMonth.parse(credit.lead_date_sent).shift(1)
    return credit.created_at >= natural_billing_month.start_instant()


def evaluate_credit_eligibility(
    lead: LeadRecord,
    credit: CreditRecord | None,
    organization: OrganizationRecord,
    *,
    selected_month=None,
    now=None,
    confirmation_threshold_days: int | None = None,
) -> CreditEligibility:
    """Assess a credit request against the organization's deadline.

    With an existing ``credit`` the elapsed days are measured at its
    ``created_at``; otherwise at ``now``. ``selected_month`` switches the
    deferral test to the one used when reconciling that billing month.
    """
    measured_at = credit.created_at if credit is not None else now
    elapsed = days_since_sent(lead.date_sent, measured_at)
    deadline = organization.credit_deadline_days
    threshold = _confirmation_threshold(confirmation_threshold_days)

    if selected_month is not None:
        deferred = is_deferred_for_month(lead, selected_month)
    elif credit is not None:
        deferred = is_deferred_credit(credit)
    else:
        deferred = False

    reason = None
    eligible = elapsed <= deadline
    if not eligible:
        reason = (
            f"Fristen på {deadline} dagar har passerats "
            f"({elapsed} dagar sedan leadet skickades)."
        )

    return CreditEligibility(
        eligible=eligible,
        is_deferred=deferred,
        days_since_sent=elapsed,
        deadline_days=deadline,
        requires_confirmation=elapsed > threshold,
        reason=reason,
    )


def check_new_credit_request(
    lead: LeadRecord,
    organization: OrganizationRecord,
    *,
    requester_role: StaffRole,
    now=None,
    confirmed: bool = False,
    confirmation_threshold_days: int | None = None,
) -> CreditEligibility:
    """Validate a new credit request before it is stored.

    Raises
    ------
    CreditsNotAllowed
        The partner's organization may not request credits.
    DeadlinePassed
        The lead is older than the organization's deadline. Overridable
        (``can_override``) for admins and team leaders.
    ConfirmationRequired
        The lead is older than the confirmation threshold and the caller
        has not confirmed.
    """
    if organization.id not in lead.organization_ids:
        raise BillingError(f"Leadet är inte kopplat till {organization.name}.")

    result = evaluate_credit_eligibility(
        lead,
        None,
        organization,
        now=now,
        confirmation_threshold_days=confirmation_threshold_days,
    )

    match requester_role:
        case PartnerUserRole(organization_id=org_id):
            if org_id != organization.id:
                raise BillingError("Du kan bara kreditera leads för din egen organisation.")
            if not organization.can_request_credits:
                raise CreditsNotAllowed(organization.name)
            if not result.eligible:
                raise DeadlinePassed(
                    days_since_sent=result.days_since_sent,
                    deadline_days=result.deadline_days,
                    can_override=False,
                )
        case AdminRole() | TeamLeaderRole():
            if not result.eligible:
                if not confirmed:
                    raise DeadlinePassed(
                        days_since_sent=result.days_since_sent,
                        deadline_days=result.deadline_days,
                        can_override=True,
                    )
                logger.info(
                    "Credit deadline overridden for lead=%s organization=%s (%d days)",
                    lead.id,
                    organization.id,
                    result.days_since_sent,
                )
        case _:
            raise BillingError("Din roll har inte behörighet att skicka kreditförfrågningar.")

    if result.requires_confirmation and not confirmed:
        raise ConfirmationRequired(
            days_since_sent=result.days_since_sent,
            threshold_days=_confirmation_threshold(confirmation_threshold_days),
        )
    return result
