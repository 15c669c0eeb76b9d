"""API views for the billing reports."""
from __future__ import annotations

import logging
import uuid

from rest_framework import permissions, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.permissions import CanPriceDeals, IsAdmin
from billing.billing_serializers import (
    BillingPeriodsSerializer,
    CommissionSummarySerializer,
    CloserCommissionResultSerializer,
    CreditRecordSerializer,
    DealPricingRequestSerializer,
    DealPricingSerializer,
    InvoiceableValueSerializer,
    OpenerCommissionResultSerializer,
    PartnerOverviewSerializer,
)
from billing.commissions import (
    compute_closer_commissions,
    compute_commission_summary,
    compute_opener_commissions,
)
from billing.config import CommissionConfig
from billing.credit_filter import filter_credits_for_month
from billing.deal_pricing import compute_deal_pricing
from billing.exceptions import BillingError, UnknownOrganization
from billing.invoicing import (
    compute_invoiceable_value,
    compute_invoicing_overview,
    compute_partner_overview,
)
from billing.periods import BillingMonth, compute_billing_periods
from billing.repository import load_snapshot

logger = logging.getLogger(__name__)

_STATUS_FILTERS = ("active", "archived", "all")


def billing_error_response(exc: BillingError) -> Response:
    """Render a domain error; deadline cases carry their numbers."""
    body = {"detail": str(exc), "code": exc.code}
    http_status = status.HTTP_400_BAD_REQUEST
    if exc.code == "deadline_passed":
        body.update(
            days_since_sent=exc.days_since_sent,
            deadline_days=exc.deadline_days,
            days_overdue=exc.days_overdue,
            can_override=exc.can_override,
        )
    elif exc.code == "confirmation_required":
        body.update(days_since_sent=exc.days_since_sent, threshold_days=exc.threshold_days)
        http_status = status.HTTP_409_CONFLICT
    return Response(body, status=http_status)


class BillingReportView(APIView):
    """Base for month-scoped reports. ``?month=YYYY-MM`` defaults to the current month."""

    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def selected_month(self, request) -> BillingMonth:
        value = request.query_params.get("month")
        if not value:
            return BillingMonth.current()
        return BillingMonth.parse(value)

    def status_filter(self, request) -> str | None:
        value = request.query_params.get("status", "active")
        if value not in _STATUS_FILTERS:
            raise BillingError(f"Ogiltig status: {value!r}.")
        return None if value == "all" else value

    def organization_filter(self, request) -> str | None:
        """Canonical form of ``?organization=<uuid>``, or None when absent."""
        value = request.query_params.get("organization")
        if not value:
            return None
        try:
            return str(uuid.UUID(value))
        except ValueError:
            raise BillingError(f"Ogiltigt organisations-id: {value!r}.")

    def get(self, request, *args, **kwargs):
        try:
            month = self.selected_month(request)
            data = self.build(request, month, *args, **kwargs)
        except BillingError as e:
            return billing_error_response(e)
        return Response(data)

    def build(self, request, month, *args, **kwargs):
        raise NotImplementedError


# ────────────────────────────────────────────────────────────
# Periods & credits
# ────────────────────────────────────────────────────────────

class BillingPeriodsView(BillingReportView):
    def build(self, request, month):
        return BillingPeriodsSerializer(compute_billing_periods(month)).data


class MonthCreditsView(BillingReportView):
    """Credit requests reconciled against the month's invoices."""

    def build(self, request, month):
        organization_id = self.organization_filter(request)
        credits = load_snapshot(month).credits
        if organization_id is not None:
            credits = [c for c in credits if c.organization_id == organization_id]
        selected = filter_credits_for_month(credits, month)
        serializer = CreditRecordSerializer(
            selected, many=True, context={"periods": compute_billing_periods(month)},
        )
        return {"billing_month": str(month), "count": len(selected), "results": serializer.data}


# ────────────────────────────────────────────────────────────
# Commissions
# ────────────────────────────────────────────────────────────

class OpenerCommissionsView(BillingReportView):
    def build(self, request, month):
        results = compute_opener_commissions(load_snapshot(month), month, CommissionConfig.load())
        return OpenerCommissionResultSerializer(results, many=True).data


class CloserCommissionsView(BillingReportView):
    def build(self, request, month):
        results = compute_closer_commissions(load_snapshot(month), month, CommissionConfig.load())
        return CloserCommissionResultSerializer(results, many=True).data


class CommissionSummaryView(BillingReportView):
    def build(self, request, month):
        summary = compute_commission_summary(load_snapshot(month), month, CommissionConfig.load())
        return CommissionSummarySerializer(summary).data


# ────────────────────────────────────────────────────────────
# Invoicing
# ────────────────────────────────────────────────────────────

class InvoicingOverviewView(BillingReportView):
    def build(self, request, month):
        rows = compute_invoicing_overview(load_snapshot(month), month, self.status_filter(request))
        return InvoiceableValueSerializer(rows, many=True).data


class OrganizationInvoiceView(BillingReportView):
    def build(self, request, month, organization_id):
        try:
            value = compute_invoiceable_value(load_snapshot(month), str(organization_id), month)
        except UnknownOrganization as e:
            raise NotFound(str(e))
        return InvoiceableValueSerializer(value).data


class PartnerOverviewView(BillingReportView):
    def build(self, request, month):
        rows = compute_partner_overview(load_snapshot(month), month, self.status_filter(request))
        return PartnerOverviewSerializer(rows, many=True).data


# ────────────────────────────────────────────────────────────
# Deal pricing calculator
# ────────────────────────────────────────────────────────────

class DealPricingView(APIView):
    permission_classes = [permissions.IsAuthenticated, CanPriceDeals]

    def post(self, request):
        from accounts.models import User
        from leads.services import build_pricing_input
        from partners.models import Organization

        serializer = DealPricingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        organization = None
        if data.get("organization"):
            organization = (
                Organization.objects.select_related("commission_settings")
                .filter(pk=data["organization"])
                .first()
            )
            if organization is None:
                raise NotFound("Organisationen finns inte.")

        config = CommissionConfig.from_settings()
        closer_base = config.closer_base_commission
        if data.get("closer"):
            closer = User.objects.filter(pk=data["closer"], role=User.Role.CLOSER).first()
            if closer is None:
                raise NotFound("Closern finns inte.")
            if closer.closer_base_commission is not None:
                closer_base = closer.closer_base_commission
        elif request.user.role == User.Role.CLOSER and request.user.closer_base_commission is not None:
            closer_base = request.user.closer_base_commission

        try:
            params = build_pricing_input(
                data["price_to_customer_incl_moms"],
                organization=organization,
                material_cost_eur=data.get("material_cost_eur"),
                green_deduction_percent=data.get("green_deduction_percent"),
                discount_amount=data.get("discount_amount"),
            )
            pricing = compute_deal_pricing(
                params,
                closer_base_commission=closer_base,
                opener_commission_per_deal=config.opener_commission_per_deal,
            )
        except BillingError as e:
            return billing_error_response(e)
        return Response(DealPricingSerializer(pricing).data)
