from datetime import date, datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import CloserCommissionType, User
from billing.commissions import compute_closer_commissions, compute_opener_commissions
from billing.config import CommissionConfig
from billing.models import EmployerCostSetting
from billing.repository import (
    list_credit_requests,
    list_leads,
    list_organizations,
    list_sales,
    list_staff_profiles,
    load_snapshot,
)
from billing.periods import DateWindow
from billing.staff import CloserRole, OpenerRole, PartnerUserRole
from leads.models import Contact, CreditRequest, Sale


def _lead(opener, organizations, date_sent, interest="sun"):
    contact = Contact.objects.create(
        email=f"kund{Contact.objects.count()}@example.se",
        interest=interest,
        opener=opener,
        date_sent=date_sent,
    )
    contact.organizations.set(organizations)
    return contact


def _aware(*args):
    return timezone.make_aware(datetime(*args))


@pytest.mark.django_db
class TestLoadSnapshot:
    def test_snapshot_covers_both_leads_windows(self, opener_user, organization):
        _lead(opener_user, [organization], date(2024, 1, 31))
        feb = _lead(opener_user, [organization], date(2024, 2, 1))
        mar = _lead(opener_user, [organization], date(2024, 3, 31))
        _lead(opener_user, [organization], date(2024, 4, 1))

        snapshot = load_snapshot("2024-04")

        assert {lead.id for lead in snapshot.leads} == {str(feb.pk), str(mar.pk)}
        assert snapshot.taken_at is not None

    def test_opener_commission_from_orm_rows(
        self, opener_user, admin_user, organization, second_organization,
    ):
        qualifying = _lead(opener_user, [organization, second_organization], date(2024, 3, 15))
        credited = _lead(opener_user, [organization, second_organization], date(2024, 3, 16))
        credit = CreditRequest.objects.create(
            contact=credited,
            organization=organization,
            requested_by=admin_user,
            status=CreditRequest.Status.APPROVED,
        )
        CreditRequest.objects.filter(pk=credit.pk).update(created_at=_aware(2024, 3, 20, 10))

        snapshot = load_snapshot("2024-04")
        [result] = compute_opener_commissions(snapshot, "2024-04", CommissionConfig.from_settings())

        assert result.staff_id == str(opener_user.pk)
        assert result.lead_count == 2
        assert result.qualifying_lead_count == 1
        assert result.lead_commission == Decimal("200.00")
        assert snapshot.approved_credit_organizations(str(credited.pk)) == frozenset({str(organization.pk)})
        assert str(qualifying.pk) in {lead.id for lead in snapshot.leads}

    def test_deals_closed_in_month_are_loaded_with_their_opener(
        self, opener_user, closer_user, organization,
    ):
        old_lead = _lead(opener_user, [organization], date(2023, 11, 5))
        sale = Sale.objects.create(
            contact=old_lead,
            closer=closer_user,
            organization=organization,
            pipeline_status=Sale.PipelineStatus.CLOSED_WON,
            closer_commission=Decimal("8000.00"),
            opener_commission=Decimal("1000.00"),
            closed_at=_aware(2024, 4, 12, 14),
        )

        snapshot = load_snapshot("2024-04")

        [record] = snapshot.sales
        assert record.id == str(sale.pk)
        assert record.opener_id == str(opener_user.pk)
        [closer] = compute_closer_commissions(snapshot, "2024-04", CommissionConfig())
        assert closer.total_commission == Decimal("8000.00")
        [opener] = compute_opener_commissions(snapshot, "2024-04", CommissionConfig())
        assert opener.deal_bonus == Decimal("1000.00")

    def test_staff_roles(self, admin_user, opener_user, teamleader_user, closer_user, partner_user):
        idle = User.objects.create_user(
            email="slutat@test.se", password="x", role=User.Role.OPENER, is_active=False,
        )

        snapshot = load_snapshot("2024-04")

        ids = {profile.id for profile in snapshot.staff}
        assert ids == {str(opener_user.pk), str(teamleader_user.pk), str(closer_user.pk)}
        assert str(idle.pk) not in ids

    def test_inactive_staff_with_activity_is_kept(self, organization):
        former = User.objects.create_user(
            email="slutat@test.se", password="x", role=User.Role.OPENER, is_active=False,
        )
        _lead(former, [organization], date(2024, 3, 3))

        snapshot = load_snapshot("2024-04")

        assert [p.id for p in snapshot.staff] == [str(former.pk)]


@pytest.mark.django_db
class TestListings:
    def test_list_leads_filters(self, opener_user, teamleader_user, organization, second_organization):
        a = _lead(opener_user, [organization], date(2024, 3, 1))
        _lead(teamleader_user, [second_organization], date(2024, 3, 2))
        _lead(opener_user, [organization, second_organization], date(2024, 5, 1))

        march = DateWindow(date(2024, 3, 1), date(2024, 3, 31))
        assert [lead.id for lead in list_leads(date_range=march, opener_id=opener_user.pk)] == [str(a.pk)]
        assert len(list_leads(organization_id=organization.pk)) == 2

    def test_list_credit_requests_and_sales(self, opener_user, closer_user, partner_user, organization):
        lead = _lead(opener_user, [organization], date(2024, 3, 1))
        CreditRequest.objects.create(contact=lead, organization=organization, requested_by=partner_user)
        Sale.objects.create(
            contact=lead,
            closer=closer_user,
            organization=organization,
            pipeline_status=Sale.PipelineStatus.CLOSED_WON,
            closed_at=_aware(2024, 4, 30, 23, 30),
        )

        assert len(list_credit_requests(organization_id=organization.pk, status="pending")) == 1
        assert list_credit_requests(status="approved") == []
        april = DateWindow(date(2024, 4, 1), date(2024, 4, 30))
        assert len(list_sales(closed_date_range=april, pipeline_status="closed_won")) == 1
        assert list_sales(closer_id=opener_user.pk) == []

    def test_list_organizations_by_status(self, organization, archived_organization):
        assert [o.name for o in list_organizations(status="active")] == ["SunBro"]
        assert [o.status for o in list_organizations(status="archived")] == ["archived"]

    def test_staff_profiles_carry_role_parameters(self, closer_user, partner_user, organization):
        closer_user.closer_base_commission = Decimal("9000")
        closer_user.save()
        CloserCommissionType.objects.create(
            closer=closer_user, name="Batteri", commission_amount=Decimal("8000"),
        )

        [closer] = list_staff_profiles(role="closer")
        [partner] = list_staff_profiles(role="organization")

        assert isinstance(closer.role, CloserRole)
        assert closer.role.params.base_commission == Decimal("9000")
        assert closer.role.params.commission_types == (("Batteri", Decimal("8000.00")),)
        assert partner.role == PartnerUserRole(organization_id=str(organization.pk))

    def test_opener_profile(self, opener_user):
        [profile] = list_staff_profiles(role="opener")
        assert isinstance(profile.role, OpenerRole)
        assert profile.display_name == "Olle Opener"


@pytest.mark.django_db
class TestCommissionConfig:
    def test_defaults_from_settings(self):
        config = CommissionConfig.load()

        assert config.opener_commission_per_lead == Decimal("200")
        assert config.opener_commission_per_deal == Decimal("1000")
        assert config.closer_base_commission == Decimal("8000")
        assert config.employer_cost_percentage == Decimal("0")

    def test_active_employer_cost_setting_overrides(self):
        EmployerCostSetting.objects.create(name="Gammal", percentage=Decimal("25.00"))
        EmployerCostSetting.objects.create(name="Arbetsgivaravgift", percentage=Decimal("31.42"))

        config = CommissionConfig.load()

        assert config.employer_cost_percentage == Decimal("31.42")
        assert config.employer_cost_name == "Arbetsgivaravgift"
        assert EmployerCostSetting.objects.filter(is_active=True).count() == 1
