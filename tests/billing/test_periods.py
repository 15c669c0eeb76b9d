from datetime import date, datetime, timezone as dt_timezone

import pytest
from django.utils import timezone

from billing.exceptions import InvalidPeriod
from billing.periods import BillingMonth, DateWindow, compute_billing_periods


class TestBillingMonth:
    def test_parse_accepts_string_date_and_month(self):
        assert BillingMonth.parse("2024-04") == BillingMonth(2024, 4)
        assert BillingMonth.parse("2024-4") == BillingMonth(2024, 4)
        assert BillingMonth.parse(date(2024, 4, 17)) == BillingMonth(2024, 4)
        assert BillingMonth.parse(BillingMonth(2024, 4)) == BillingMonth(2024, 4)

    @pytest.mark.parametrize("value", ["2024-13", "2024-00", "april", "2024/04", "", None, 202404])
    def test_parse_rejects_malformed_months(self, value):
        with pytest.raises(InvalidPeriod):
            BillingMonth.parse(value)

    def test_parse_aware_datetime_uses_local_month(self):
        # 22:30 UTC on 31 March is 00:30 on 1 April in Stockholm (CEST)
        late_utc = datetime(2024, 3, 31, 22, 30, tzinfo=dt_timezone.utc)
        assert BillingMonth.parse(late_utc) == BillingMonth(2024, 4)

        early_utc = datetime(2024, 3, 31, 21, 30, tzinfo=dt_timezone.utc)
        assert BillingMonth.parse(early_utc) == BillingMonth(2024, 3)

    def test_parse_naive_datetime_keeps_its_month(self):
        assert BillingMonth.parse(datetime(2024, 3, 31, 23, 59)) == BillingMonth(2024, 3)

    def test_invalid_period_is_a_value_error(self):
        with pytest.raises(ValueError):
            BillingMonth.parse("2024-99")

    def test_str_is_zero_padded(self):
        assert str(BillingMonth(2024, 4)) == "2024-04"

    def test_shift_crosses_year_boundaries(self):
        assert BillingMonth(2024, 3).shift(-4) == BillingMonth(2023, 11)
        assert BillingMonth(2024, 12).shift(1) == BillingMonth(2025, 1)
        assert BillingMonth(2024, 1).shift(-1) == BillingMonth(2023, 12)


class TestComputeBillingPeriods:
    def test_april_bills_march_leads(self):
        periods = compute_billing_periods("2024-04")

        assert periods.leads_window == DateWindow(date(2024, 3, 1), date(2024, 3, 31))
        assert periods.previous_leads_window == DateWindow(date(2024, 2, 1), date(2024, 2, 29))
        assert periods.reporting_window == DateWindow(date(2024, 4, 1), date(2024, 4, 30))
        assert periods.billing_cutoff == timezone.make_aware(datetime(2024, 4, 1))
        assert periods.previous_billing_cutoff == timezone.make_aware(datetime(2024, 3, 1))

    def test_january_rolls_into_previous_december(self):
        periods = compute_billing_periods("2025-01")

        assert periods.leads_window == DateWindow(date(2024, 12, 1), date(2024, 12, 31))
        assert periods.previous_leads_window == DateWindow(date(2024, 11, 1), date(2024, 11, 30))

    def test_leap_and_common_february(self):
        assert compute_billing_periods("2024-03").leads_window.end == date(2024, 2, 29)
        assert compute_billing_periods("2023-03").leads_window.end == date(2023, 2, 28)

    def test_cutoffs_are_timezone_aware(self):
        periods = compute_billing_periods("2024-04")
        assert timezone.is_aware(periods.billing_cutoff)
        assert timezone.is_aware(periods.previous_billing_cutoff)

    def test_leads_window_is_always_the_prior_calendar_month(self):
        month = BillingMonth(2022, 1)
        for _ in range(60):
            periods = compute_billing_periods(month)
            prior = month.shift(-1)
            assert periods.leads_window.start == date(prior.year, prior.month, 1)
            assert periods.leads_window.end == prior.last_day
            assert not periods.leads_window.overlaps(periods.previous_leads_window)
            assert periods.previous_leads_window.end < periods.leads_window.start
            month = month.shift(1)

    def test_month_of_an_instant_right_after_local_midnight(self):
        instant = datetime(2024, 4, 30, 22, 15, tzinfo=dt_timezone.utc)  # 1 May locally
        periods = compute_billing_periods(instant)

        assert str(periods.billing_month) == "2024-05"
        assert periods.leads_window == DateWindow(date(2024, 4, 1), date(2024, 4, 30))

    def test_malformed_month_is_surfaced(self):
        with pytest.raises(InvalidPeriod):
            compute_billing_periods("2024-15")


class TestDateWindow:
    def test_inclusive_bounds(self):
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 31))
        assert date(2024, 3, 1) in window
        assert date(2024, 3, 31) in window
        assert date(2024, 4, 1) not in window

    def test_aware_datetimes_use_local_date(self):
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 31))
        # 22:30 UTC on 31 March is 00:30 on 1 April in Stockholm (CEST).
        late_utc = datetime(2024, 3, 31, 22, 30, tzinfo=dt_timezone.utc)
        assert late_utc not in window
        assert timezone.make_aware(datetime(2024, 3, 31, 23, 30)) in window
