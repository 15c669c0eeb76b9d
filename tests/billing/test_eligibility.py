from datetime import date

import pytest

from billing.eligibility import (
    check_new_credit_request,
    days_since_sent,
    evaluate_credit_eligibility,
)
from billing.exceptions import (
    BillingError,
    ConfirmationRequired,
    CreditsNotAllowed,
    DeadlinePassed,
)
from billing.staff import (
    AdminRole,
    OpenerParams,
    OpenerRole,
    PartnerUserRole,
    TeamLeaderRole,
)

TODAY = date(2024, 3, 21)


def test_days_since_sent_counts_whole_local_days(local_dt):
    assert days_since_sent(date(2024, 3, 1), date(2024, 3, 15)) == 14
    assert days_since_sent(date(2024, 3, 1), local_dt(2024, 3, 15, 23, 59)) == 14
    assert days_since_sent(date(2024, 3, 1), local_dt(2024, 3, 1, 0, 1)) == 0


class TestCheckNewCreditRequest:
    def test_partner_past_deadline_is_rejected(self, make_org, make_lead):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 1), organizations=[org])

        with pytest.raises(DeadlinePassed) as exc:
            check_new_credit_request(
                lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
            )

        assert exc.value.days_since_sent == 20
        assert exc.value.deadline_days == 14
        assert exc.value.days_overdue == 6
        assert exc.value.can_override is False
        assert exc.value.code == "deadline_passed"

    def test_partner_cannot_override_even_when_confirmed(self, make_org, make_lead):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 1), organizations=[org])

        with pytest.raises(DeadlinePassed):
            check_new_credit_request(
                lead, org, requester_role=PartnerUserRole(org.id), now=TODAY, confirmed=True,
            )

    def test_partner_within_deadline_is_eligible(self, make_org, make_lead):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 11), organizations=[org])

        result = check_new_credit_request(
            lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
        )

        assert result.eligible is True
        assert result.days_since_sent == 10
        assert result.days_remaining == 4

    def test_deadline_day_itself_is_still_allowed(self, make_org, make_lead):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 7), organizations=[org])

        result = check_new_credit_request(
            lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
        )
        assert result.eligible is True

    def test_organization_without_credit_right(self, make_org, make_lead):
        org = make_org(can_request_credits=False)
        lead = make_lead(date(2024, 3, 20), organizations=[org])

        with pytest.raises(CreditsNotAllowed):
            check_new_credit_request(
                lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
            )

    def test_partner_of_another_organization(self, make_org, make_lead):
        org = make_org()
        other = make_org(name="Annan AB")
        lead = make_lead(date(2024, 3, 20), organizations=[org, other])

        with pytest.raises(BillingError):
            check_new_credit_request(
                lead, org, requester_role=PartnerUserRole(other.id), now=TODAY,
            )

    def test_lead_not_linked_to_organization(self, make_org, make_lead):
        org = make_org()
        lead = make_lead(date(2024, 3, 20), organizations=[])

        with pytest.raises(BillingError):
            check_new_credit_request(lead, org, requester_role=AdminRole(), now=TODAY)

    @pytest.mark.parametrize("role", [AdminRole(), TeamLeaderRole(OpenerParams())])
    def test_staff_may_override_deadline_after_confirming(self, make_org, make_lead, role):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 1), organizations=[org])

        with pytest.raises(DeadlinePassed) as exc:
            check_new_credit_request(lead, org, requester_role=role, now=TODAY)
        assert exc.value.can_override is True

        result = check_new_credit_request(lead, org, requester_role=role, now=TODAY, confirmed=True)
        assert result.eligible is False

    def test_openers_cannot_request_credits(self, make_org, make_lead):
        org = make_org()
        lead = make_lead(date(2024, 3, 20), organizations=[org])

        with pytest.raises(BillingError):
            check_new_credit_request(
                lead, org, requester_role=OpenerRole(OpenerParams()), now=TODAY,
            )

    def test_old_leads_need_confirmation(self, make_org, make_lead):
        org = make_org(credit_deadline_days=90)
        lead = make_lead(date(2024, 1, 20), organizations=[org])  # 61 days before TODAY

        with pytest.raises(ConfirmationRequired) as exc:
            check_new_credit_request(
                lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
            )
        assert exc.value.days_since_sent == 61
        assert exc.value.threshold_days == 60

        result = check_new_credit_request(
            lead, org, requester_role=PartnerUserRole(org.id), now=TODAY, confirmed=True,
        )
        assert result.requires_confirmation is True

    def test_sixty_days_exactly_needs_no_confirmation(self, make_org, make_lead):
        org = make_org(credit_deadline_days=90)
        lead = make_lead(date(2024, 1, 21), organizations=[org])

        result = check_new_credit_request(
            lead, org, requester_role=PartnerUserRole(org.id), now=TODAY,
        )
        assert result.requires_confirmation is False


class TestEvaluateCreditEligibility:
    def test_existing_credit_is_measured_at_its_creation(self, make_org, make_lead, make_credit, local_dt):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 1), organizations=[org])
        credit = make_credit(lead, org, created_at=local_dt(2024, 3, 10))

        result = evaluate_credit_eligibility(lead, credit, org, now=date(2024, 6, 1))

        assert result.eligible is True
        assert result.days_since_sent == 9

    def test_deadline_reason_is_reported(self, make_org, make_lead):
        org = make_org(credit_deadline_days=14)
        lead = make_lead(date(2024, 3, 1), organizations=[org])

        result = evaluate_credit_eligibility(lead, None, org, now=TODAY)

        assert result.eligible is False
        assert "14 dagar" in result.reason

    def test_deferred_relative_to_selected_month(self, make_org, make_lead):
        org = make_org()
        lead = make_lead(date(2024, 2, 10), organizations=[org])

        assert evaluate_credit_eligibility(lead, None, org, selected_month="2024-04", now=TODAY).is_deferred
        assert not evaluate_credit_eligibility(lead, None, org, selected_month="2024-03", now=TODAY).is_deferred

    def test_credit_after_natural_cutoff_is_deferred(self, make_org, make_lead, make_credit, local_dt):
        org = make_org(credit_deadline_days=30)
        lead = make_lead(date(2024, 2, 10), organizations=[org])

        late = make_credit(lead, org, created_at=local_dt(2024, 3, 5))
        on_time = make_credit(lead, org, created_at=local_dt(2024, 2, 20))

        assert evaluate_credit_eligibility(lead, late, org).is_deferred is True
        assert evaluate_credit_eligibility(lead, on_time, org).is_deferred is False
