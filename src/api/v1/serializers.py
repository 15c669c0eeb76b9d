"""DRF serializers for the lead CRM API v1."""
from rest_framework import serializers

from accounts.models import User
from leads.models import Contact, CreditRequest, InterestType, Product, Sale
from partners.models import Organization


# ---------------------------------------------------------------------------
# Users & organizations
# ---------------------------------------------------------------------------

class UserSummarySerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'role']
        read_only_fields = fields


class OrganizationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Organization
        fields = [
            'id', 'name', 'status', 'price_per_solar_deal', 'price_per_battery_deal',
            'price_per_site_visit', 'can_request_credits', 'credit_deadline_days',
            'contact_person_name', 'contact_phone', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

class ContactSerializer(serializers.ModelSerializer):
    opener = UserSummarySerializer(read_only=True)
    organizations = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Contact
        fields = [
            'id', 'email', 'name', 'phone', 'address', 'postal_code',
            'interest', 'date_sent', 'opener', 'organizations', 'created_at',
        ]
        read_only_fields = fields


class LeadIntakeSerializer(serializers.Serializer):
    """Input of the lead intake endpoint; the opener is identified by email."""

    email = serializers.EmailField()
    name = serializers.CharField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    postal_code = serializers.CharField(required=False, allow_blank=True, default='')
    interest = serializers.ChoiceField(choices=InterestType.choices)
    date_sent = serializers.DateField(required=False)
    opener_email = serializers.EmailField()
    organizations = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Organization.objects.all(), required=False,
    )

    def validate_opener_email(self, value):
        opener = User.objects.filter(
            email__iexact=value,
            role__in=(User.Role.OPENER, User.Role.TEAMLEADER),
            is_active=True,
        ).first()
        if opener is None:
            raise serializers.ValidationError('Ingen aktiv opener med denna e-postadress.')
        return opener


# ---------------------------------------------------------------------------
# Credit requests
# ---------------------------------------------------------------------------

class CreditRequestSerializer(serializers.ModelSerializer):
    contact_email = serializers.CharField(source='contact.email', read_only=True)
    contact_date_sent = serializers.DateField(source='contact.date_sent', read_only=True)
    organization_name = serializers.CharField(source='organization.name', read_only=True)
    requested_by = UserSummarySerializer(read_only=True)
    handled_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = CreditRequest
        fields = [
            'id', 'contact', 'contact_email', 'contact_date_sent',
            'organization', 'organization_name', 'status', 'reason',
            'requested_by', 'handled_by', 'handled_at', 'created_at',
        ]
        read_only_fields = fields


class CreditRequestCreateSerializer(serializers.Serializer):
    contact = serializers.PrimaryKeyRelatedField(queryset=Contact.objects.all())
    organization = serializers.PrimaryKeyRelatedField(
        queryset=Organization.objects.all(), required=False,
    )
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    confirmed = serializers.BooleanField(required=False, default=False)


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------

class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'type', 'capacity_kwh', 'base_price_incl_moms',
            'material_cost_eur', 'green_tech_deduction_percent',
        ]


class SaleSerializer(serializers.ModelSerializer):
    closer = UserSummarySerializer(read_only=True)
    contact_email = serializers.CharField(source='contact.email', read_only=True)
    organization_name = serializers.CharField(source='organization.name', read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id', 'contact', 'contact_email', 'closer', 'organization', 'organization_name',
            'product', 'pipeline_status', 'price_to_customer_incl_moms', 'discount_amount',
            'num_property_owners', 'full_green_deduction', 'total_order_value',
            'invoiceable_amount', 'closer_commission', 'opener_commission',
            'closed_at', 'closer_notes', 'partner_notes', 'created_at',
        ]
        read_only_fields = [
            'id', 'pipeline_status', 'total_order_value', 'invoiceable_amount',
            'closer_commission', 'opener_commission', 'closed_at', 'created_at',
        ]


class PipelineStatusSerializer(serializers.Serializer):
    pipeline_status = serializers.ChoiceField(choices=Sale.PipelineStatus.choices)
