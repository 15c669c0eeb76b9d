"""Select the credit requests that reconcile against a billing month."""
from __future__ import annotations

from collections.abc import Iterable

from billing.periods import BillingPeriods, compute_billing_periods
from billing.snapshot import CreditRecord

IN_PERIOD = "in_period"
CARRIED_OVER = "carried_over"


def classify_credit(credit: CreditRecord, periods: BillingPeriods) -> str | None:
    """Return which branch selects ``credit`` for the month, if any.

    * in-period: the lead belongs to the leads window and the credit was
      raised before the billing cutoff, whatever its status;
    * carried over: the lead belongs to the previous leads window, the
      credit missed that invoice's cutoff and is already approved.

    The two date windows are disjoint, so at most one branch matches.
    """
    if credit.lead_date_sent in periods.leads_window:
        if credit.created_at < periods.billing_cutoff:
            return IN_PERIOD
        return None
    if credit.lead_date_sent in periods.previous_leads_window:
        if credit.created_at >= periods.previous_billing_cutoff and credit.is_approved:
            return CARRIED_OVER
    return None


def filter_credits_for_month(
    credits: Iterable[CreditRecord], selected_month
) -> list[CreditRecord]:
    periods = compute_billing_periods(selected_month)
    selected = [c for c in credits if classify_credit(c, periods) is not None]
    selected.sort(key=lambda c: (c.created_at, c.id))
    return selected
