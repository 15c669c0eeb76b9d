"""Celery tasks for the billing module."""
from __future__ import annotations

import logging

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger(__name__)


def store_commission_statement(period: str, *, final: bool = False):
    """Compute the commission summary for ``period`` and persist it.

    A statement already marked final is left untouched.
    """
    from billing.billing_serializers import CommissionSummarySerializer
    from billing.commissions import compute_commission_summary
    from billing.config import CommissionConfig
    from billing.models import CommissionStatement
    from billing.periods import BillingMonth
    from billing.repository import load_snapshot

    month = BillingMonth.parse(period)
    existing = CommissionStatement.objects.filter(period=str(month)).first()
    if existing is not None and existing.is_final:
        logger.info("Commission statement %s is final; not recomputing", month)
        return existing

    summary = compute_commission_summary(load_snapshot(month), month, CommissionConfig.load())
    statement, _ = CommissionStatement.objects.update_or_create(
        period=str(month),
        defaults={
            "total_opener_commission": summary.total_opener_commission,
            "total_closer_commission": summary.total_closer_commission,
            "employer_cost_percentage": summary.employer_cost_percentage,
            "employer_cost_amount": summary.employer_cost_amount,
            "total_with_employer_cost": summary.total_with_employer_cost,
            "payload": CommissionSummarySerializer(summary).data,
            "is_final": final,
            "computed_at": timezone.now(),
        },
    )
    return statement


@shared_task
def recompute_commission_statement(*, period: str):
    """Recompute the (non-final) commission statement for one month."""
    statement = store_commission_statement(period)
    logger.info(
        "Recomputed commission statement period=%s total=%s",
        statement.period,
        statement.total_with_employer_cost,
    )
    return str(statement.pk)


@shared_task
def close_commission_month():
    """
    Scheduled daily (Celery Beat). Only runs logic on the 1st of each month.
    Freezes the commission statement of the month that just ended.
    """
    from billing.periods import BillingMonth

    today = timezone.localdate()
    # Guard: only run on day 1 of month
    if today.day != 1:
        logger.debug("close_commission_month: skipping (today is day %d)", today.day)
        return None

    period = str(BillingMonth.parse(today).shift(-1))
    statement = store_commission_statement(period, final=True)
    logger.info(
        "Closed commission month period=%s openers=%s closers=%s total=%s",
        period,
        statement.total_opener_commission,
        statement.total_closer_commission,
        statement.total_with_employer_cost,
    )
    return str(statement.pk)


@shared_task
def refresh_open_commission_statement():
    """Nightly draft of the running month, so admins see accruals build up."""
    from billing.periods import BillingMonth

    period = str(BillingMonth.parse(timezone.localdate()))
    statement = store_commission_statement(period)
    logger.info(
        "Refreshed draft commission statement period=%s total=%s",
        period,
        statement.total_with_employer_cost,
    )
    return str(statement.pk)
