"""DRF serializers for the billing reports.

The engine returns frozen dataclasses; these serializers only read
attributes from them.
"""
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from billing.credit_filter import classify_credit
from billing.models import CommissionStatement, EmployerCostSetting


def _money_field(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, **kwargs)


# ────────────────────────────────────────────────────────────
# Periods & credits
# ────────────────────────────────────────────────────────────

class DateWindowSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()


class BillingPeriodsSerializer(serializers.Serializer):
    billing_month = serializers.CharField()
    leads_window = DateWindowSerializer()
    billing_cutoff = serializers.DateTimeField()
    previous_leads_window = DateWindowSerializer()
    previous_billing_cutoff = serializers.DateTimeField()
    reporting_window = DateWindowSerializer()


class CreditRecordSerializer(serializers.Serializer):
    id = serializers.CharField()
    lead_id = serializers.CharField()
    organization_id = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    lead_date_sent = serializers.DateField()
    reason = serializers.CharField()
    classification = serializers.SerializerMethodField()

    def get_classification(self, obj):
        periods = self.context.get("periods")
        if periods is None:
            return None
        return classify_credit(obj, periods)


# ────────────────────────────────────────────────────────────
# Commissions
# ────────────────────────────────────────────────────────────

class OpenerCommissionResultSerializer(serializers.Serializer):
    staff_id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.CharField()
    role = serializers.CharField()
    lead_count = serializers.IntegerField()
    qualifying_lead_count = serializers.IntegerField()
    commission_per_lead = _money_field()
    lead_commission = _money_field()
    closed_deal_count = serializers.IntegerField()
    deal_bonus = _money_field()
    total = _money_field()
    defaulted_rates = serializers.ListField(child=serializers.CharField())


class CloserCommissionResultSerializer(serializers.Serializer):
    staff_id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.CharField()
    closed_deal_count = serializers.IntegerField()
    total_commission = _money_field()
    base_commission = _money_field()
    unpriced_deal_count = serializers.IntegerField()
    defaulted_rates = serializers.ListField(child=serializers.CharField())


class CommissionSummarySerializer(serializers.Serializer):
    billing_month = serializers.CharField()
    openers = OpenerCommissionResultSerializer(many=True)
    closers = CloserCommissionResultSerializer(many=True)
    total_opener_commission = _money_field()
    total_closer_commission = _money_field()
    total_commission = _money_field()
    employer_cost_name = serializers.CharField(allow_blank=True)
    employer_cost_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    employer_cost_amount = _money_field()
    total_with_employer_cost = _money_field()


# ────────────────────────────────────────────────────────────
# Invoicing
# ────────────────────────────────────────────────────────────

class InvoiceableValueSerializer(serializers.Serializer):
    organization_id = serializers.CharField()
    organization_name = serializers.CharField()
    organization_status = serializers.CharField()
    billing_month = serializers.CharField()
    lead_count = serializers.IntegerField()
    breakdown_by_interest_type = serializers.SerializerMethodField()
    total_value = _money_field()
    credited_count = serializers.IntegerField()
    credited_value = _money_field()
    net_value = _money_field()

    def get_breakdown_by_interest_type(self, obj):
        return {
            interest: {
                "count": line.count,
                "unit_price": str(line.unit_price),
                "value": str(line.value),
            }
            for interest, line in obj.breakdown_by_interest_type.items()
        }


class PartnerOverviewSerializer(serializers.Serializer):
    organization_id = serializers.CharField()
    organization_name = serializers.CharField()
    organization_status = serializers.CharField()
    lead_count = serializers.IntegerField()
    solar_count = serializers.IntegerField()
    battery_count = serializers.IntegerField()
    solar_battery_count = serializers.IntegerField()
    total_value = _money_field()
    credit_requests = serializers.IntegerField()
    approved_credits = serializers.IntegerField()
    sale_count = serializers.IntegerField()
    won_count = serializers.IntegerField()
    close_rate = serializers.DecimalField(max_digits=5, decimal_places=1)


# ────────────────────────────────────────────────────────────
# Deal pricing
# ────────────────────────────────────────────────────────────

class DealPricingRequestSerializer(serializers.Serializer):
    """Calculator input. Organization cost parameters are used when given."""

    price_to_customer_incl_moms = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"),
    )
    material_cost_eur = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"),
    )
    green_deduction_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("99.99"),
        required=False,
    )
    discount_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"),
    )
    organization = serializers.UUIDField(required=False)
    closer = serializers.UUIDField(required=False)


class DealPricingSerializer(serializers.Serializer):
    total_order_value = _money_field()
    ex_moms_value = _money_field()
    after_base_cost = _money_field()
    material_cost_sek = _money_field()
    after_material_cost = _money_field()
    lf_finans_fee = _money_field()
    invoiceable_amount = _money_field()
    closer_commission = _money_field()
    opener_commission = _money_field()


# ────────────────────────────────────────────────────────────
# Stored models
# ────────────────────────────────────────────────────────────

class EmployerCostSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmployerCostSetting
        fields = ["id", "name", "description", "percentage", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]


class CommissionStatementSerializer(serializers.ModelSerializer):
    class Meta:
        model = CommissionStatement
        fields = [
            "id", "period", "total_opener_commission", "total_closer_commission",
            "employer_cost_percentage", "employer_cost_amount",
            "total_with_employer_cost", "payload", "is_final", "computed_at",
        ]
        read_only_fields = fields
