from datetime import date
from decimal import Decimal

import pytest

from billing.exceptions import UnknownOrganization
from billing.invoicing import (
    compute_invoiceable_value,
    compute_invoicing_overview,
    compute_partner_overview,
)


class TestInvoiceableValue:
    def test_solar_and_dual_interest_leads(self, make_org, make_lead, snapshot):
        org = make_org(solar="1000", battery="1500")
        leads = [
            make_lead(date(2024, 3, 4), organizations=[org], interest="sun"),
            make_lead(date(2024, 3, 20), organizations=[org], interest="sun_battery"),
        ]
        snap = snapshot(leads=leads, organizations=[org])

        value = compute_invoiceable_value(snap, org.id, "2024-04")

        assert value.total_value == Decimal("3500")
        assert value.lead_count == 2
        breakdown = value.breakdown_by_interest_type
        assert breakdown["sun"].count == 1
        assert breakdown["battery"].count == 0
        assert breakdown["sun_battery"].count == 1
        assert breakdown["sun_battery"].unit_price == Decimal("2500")

    def test_missing_prices_count_as_zero(self, make_org, make_lead, snapshot):
        org = make_org(solar="900", battery=None)
        leads = [
            make_lead(date(2024, 3, 4), organizations=[org], interest="battery"),
            make_lead(date(2024, 3, 5), organizations=[org], interest="sun_battery"),
        ]
        snap = snapshot(leads=leads, organizations=[org])

        value = compute_invoiceable_value(snap, org.id, "2024-04")

        assert value.total_value == Decimal("900")

    def test_only_leads_in_window_linked_to_the_organization(self, make_org, make_lead, snapshot):
        org = make_org()
        other = make_org(name="Annan AB")
        leads = [
            make_lead(date(2024, 2, 29), organizations=[org]),
            make_lead(date(2024, 3, 10), organizations=[other]),
            make_lead(date(2024, 4, 1), organizations=[org]),
            make_lead(date(2024, 3, 31), organizations=[org, other]),
        ]
        snap = snapshot(leads=leads, organizations=[org, other])

        assert compute_invoiceable_value(snap, org.id, "2024-04").lead_count == 1
        assert compute_invoiceable_value(snap, other.id, "2024-04").lead_count == 2

    def test_approved_credits_of_the_month_are_deducted(
        self, make_org, make_lead, make_credit, snapshot, local_dt,
    ):
        org = make_org(solar="1000", battery="1500")
        dual = make_lead(date(2024, 3, 20), organizations=[org], interest="sun_battery")
        solar = make_lead(date(2024, 3, 4), organizations=[org], interest="sun")
        credits = [
            make_credit(dual, org, created_at=local_dt(2024, 3, 25), status="approved"),
            make_credit(solar, org, created_at=local_dt(2024, 3, 10), status="pending"),
        ]
        snap = snapshot(leads=[dual, solar], credits=credits, organizations=[org])

        value = compute_invoiceable_value(snap, org.id, "2024-04")

        assert value.total_value == Decimal("3500")
        assert value.credited_count == 1
        assert value.credited_value == Decimal("2500")
        assert value.net_value == Decimal("1000")

    def test_archived_organization_on_request(self, make_org, make_lead, snapshot):
        org = make_org(status="archived", solar="700")
        lead = make_lead(date(2024, 3, 4), organizations=[org])
        snap = snapshot(leads=[lead], organizations=[org])

        value = compute_invoiceable_value(snap, org.id, "2024-04")

        assert value.organization_status == "archived"
        assert value.total_value == Decimal("700")

    def test_unknown_organization(self, snapshot):
        with pytest.raises(UnknownOrganization):
            compute_invoiceable_value(snapshot(), "missing", "2024-04")


class TestInvoicingOverview:
    def test_active_organizations_sorted_by_value(self, make_org, make_lead, snapshot):
        cheap = make_org(name="Billig", solar="100")
        dear = make_org(name="Dyr", solar="2000")
        idle = make_org(name="Tyst", solar="5000")
        archived = make_org(name="Arkiv", status="archived", solar="9000")
        leads = [
            make_lead(date(2024, 3, 4), organizations=[cheap, dear, archived]),
        ]
        snap = snapshot(leads=leads, organizations=[cheap, dear, idle, archived])

        rows = compute_invoicing_overview(snap, "2024-04")

        assert [r.organization_name for r in rows] == ["Dyr", "Billig"]

    def test_archived_filter(self, make_org, make_lead, snapshot):
        active = make_org(name="Aktiv")
        archived = make_org(name="Arkiv", status="archived")
        leads = [make_lead(date(2024, 3, 4), organizations=[active, archived])]
        snap = snapshot(leads=leads, organizations=[active, archived])

        assert [r.organization_name for r in compute_invoicing_overview(snap, "2024-04", "archived")] == ["Arkiv"]
        assert len(compute_invoicing_overview(snap, "2024-04", None)) == 2


class TestPartnerOverview:
    def test_counts_credits_and_close_rate(
        self, make_org, make_lead, make_credit, make_sale, snapshot, local_dt,
    ):
        org = make_org(solar="1000", battery="1500")
        leads = [
            make_lead(date(2024, 3, 2), organizations=[org], interest="sun"),
            make_lead(date(2024, 3, 3), organizations=[org], interest="battery"),
            make_lead(date(2024, 3, 4), organizations=[org], interest="sun_battery"),
        ]
        credits = [
            make_credit(leads[0], org, created_at=local_dt(2024, 3, 5), status="approved"),
            make_credit(leads[1], org, created_at=local_dt(2024, 3, 6), status="pending"),
        ]
        sales = [
            make_sale(leads[1], org, status="closed_won", closed_at=local_dt(2024, 4, 2)),
            make_sale(leads[2], org, status="closed_lost", closed_at=local_dt(2024, 4, 3)),
            make_sale(leads[2], org, status="negotiation"),
        ]
        snap = snapshot(leads=leads, credits=credits, sales=sales, organizations=[org])

        [row] = compute_partner_overview(snap, "2024-04")

        assert row.lead_count == 3
        assert (row.solar_count, row.battery_count, row.solar_battery_count) == (1, 1, 1)
        assert row.total_value == Decimal("5000")
        assert row.credit_requests == 2
        assert row.approved_credits == 1
        assert row.sale_count == 3
        assert row.won_count == 1
        assert row.close_rate == Decimal("33.3")

    def test_organizations_without_sales_have_zero_close_rate(self, make_org, snapshot):
        org = make_org()

        [row] = compute_partner_overview(snapshot(organizations=[org]), "2024-04")

        assert row.lead_count == 0
        assert row.close_rate == Decimal("0")
