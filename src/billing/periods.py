"""Billing period arithmetic.

A billing month ``M`` invoices the leads generated during the calendar
month before it. Credits for those leads must be requested before the
first instant of ``M`` (the billing cutoff); later ones roll into ``M+1``.
"""
from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time

from django.utils import timezone

from billing.exceptions import InvalidPeriod

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True, order=True)
class BillingMonth:
    year: int
    month: int

    def __post_init__(self):
        if not (1 <= self.month <= 12) or not (1 <= self.year <= 9999):
            raise InvalidPeriod(f"{self.year}-{self.month}")

    @classmethod
    def parse(cls, value) -> "BillingMonth":
        """Accept ``"YYYY-MM"``, a date/datetime or an existing BillingMonth.

        Aware datetimes are placed in the month of their local date.
        """
        if isinstance(value, BillingMonth):
            return value
        if isinstance(value, datetime) and timezone.is_aware(value):
            value = timezone.localdate(value)
        if isinstance(value, (date, datetime)):
            return cls(value.year, value.month)
        if isinstance(value, str):
            match = _MONTH_RE.match(value.strip())
            if match:
                return cls(int(match.group(1)), int(match.group(2)))
        raise InvalidPeriod(value)

    @classmethod
    def current(cls) -> "BillingMonth":
        return cls.parse(timezone.localdate())

    def shift(self, months: int) -> "BillingMonth":
        index = self.year * 12 + (self.month - 1) + months
        return BillingMonth(index // 12, index % 12 + 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def window(self) -> "DateWindow":
        return DateWindow(self.first_day, self.last_day)

    def start_instant(self) -> datetime:
        """Local midnight on the first day, timezone-aware."""
        return timezone.make_aware(
            datetime.combine(self.first_day, time.min),
            timezone.get_default_timezone(),
        )

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of calendar dates."""

    start: date
    end: date

    def __contains__(self, value: date) -> bool:
        if isinstance(value, datetime):
            value = timezone.localdate(value) if timezone.is_aware(value) else value.date()
        return self.start <= value <= self.end

    def overlaps(self, other: "DateWindow") -> bool:
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class BillingPeriods:
    billing_month: BillingMonth
    leads_window: DateWindow
    billing_cutoff: datetime
    previous_leads_window: DateWindow
    previous_billing_cutoff: datetime
    # The billing month itself; closed deals are recognised here.
    reporting_window: DateWindow


def compute_billing_periods(selected_month) -> BillingPeriods:
    month = BillingMonth.parse(selected_month)
    leads_month = month.shift(-1)
    previous_leads_month = month.shift(-2)

    return BillingPeriods(
        billing_month=month,
        leads_window=leads_month.window,
        billing_cutoff=month.start_instant(),
        previous_leads_window=previous_leads_month.window,
        previous_billing_cutoff=leads_month.start_instant(),
        reporting_window=month.window,
    )
