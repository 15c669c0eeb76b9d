"""API views for leads, credit requests, sales and commission statements."""
import logging

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import User
from api.v1.pagination import ReportRowsPagination
from api.v1.permissions import CanPriceDeals, CanRequestCredits, IsAdmin, IsAdminOrTeamleader
from api.v1.serializers import (
    ContactSerializer,
    CreditRequestCreateSerializer,
    CreditRequestSerializer,
    LeadIntakeSerializer,
    OrganizationSerializer,
    PipelineStatusSerializer,
    ProductSerializer,
    SaleSerializer,
)
from billing.billing_serializers import (
    CommissionStatementSerializer,
    EmployerCostSettingSerializer,
)
from billing.billing_views import billing_error_response
from billing.exceptions import BillingError
from billing.models import CommissionStatement, EmployerCostSetting
from billing.periods import BillingMonth
from leads.models import CreditRequest, Product, Sale
from leads.services import (
    approve_credit_request,
    create_lead,
    deny_credit_request,
    price_sale,
    set_pipeline_status,
    submit_credit_request,
)
from partners.models import Organization

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Organizations & products
# ---------------------------------------------------------------------------

class OrganizationViewSet(viewsets.ModelViewSet):
    """Partner organizations. Admin only."""

    serializer_class = OrganizationSerializer
    queryset = Organization.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    filterset_fields = ['status', 'can_request_credits']
    ordering_fields = ['name', 'created_at']


class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    queryset = Product.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    filterset_fields = ['type']

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [permissions.IsAuthenticated(), CanPriceDeals()]
        return super().get_permissions()


# ---------------------------------------------------------------------------
# Lead intake
# ---------------------------------------------------------------------------

class LeadIntakeView(APIView):
    """Create a lead for an opener and offer it to organizations."""

    permission_classes = [permissions.IsAuthenticated, IsAdminOrTeamleader]

    def post(self, request):
        serializer = LeadIntakeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            contact = create_lead(
                email=data['email'],
                interest=data['interest'],
                opener=data['opener_email'],
                organizations=data.get('organizations', []),
                name=data['name'],
                phone=data['phone'],
                address=data['address'],
                postal_code=data['postal_code'],
                date_sent=data.get('date_sent'),
                actor=request.user,
            )
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ContactSerializer(contact).data, status=status.HTTP_201_CREATED)


# ---------------------------------------------------------------------------
# Credit requests
# ---------------------------------------------------------------------------

class CreditRequestViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Credit requests.

    Partner users only see and create requests for their own
    organization. Approving and denying is reserved for admins.
    """

    serializer_class = CreditRequestSerializer
    queryset = CreditRequest.objects.select_related(
        'contact', 'organization', 'requested_by', 'handled_by',
    )
    permission_classes = [permissions.IsAuthenticated, CanRequestCredits]
    filterset_fields = ['status', 'organization']
    ordering_fields = ['created_at', 'handled_at']

    def get_permissions(self):
        if self.action in ('approve', 'deny'):
            return [permissions.IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        qs = super().get_queryset()
        user = self.request.user
        if user.role == User.Role.ORGANIZATION:
            return qs.filter(organization_id=user.organization_id)
        return qs

    def create(self, request, *args, **kwargs):
        serializer = CreditRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = request.user
        organization = data.get('organization')
        if user.role == User.Role.ORGANIZATION:
            if organization is not None and organization.pk != user.organization_id:
                raise PermissionDenied('Du kan bara kreditera leads för din egen organisation.')
            organization = user.organization
        elif organization is None:
            raise ValidationError({'organization': 'Organisation måste anges.'})

        try:
            credit = submit_credit_request(
                data['contact'],
                organization,
                requested_by=user,
                reason=data['reason'],
                confirmed=data['confirmed'],
            )
        except BillingError as e:
            return billing_error_response(e)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CreditRequestSerializer(credit).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='approve')
    def approve(self, request, pk=None):
        credit = self.get_object()
        try:
            credit = approve_credit_request(credit, actor=request.user)
        except BillingError as e:
            return billing_error_response(e)
        return Response(CreditRequestSerializer(credit).data)

    @action(detail=True, methods=['post'], url_path='deny')
    def deny(self, request, pk=None):
        credit = self.get_object()
        try:
            credit = deny_credit_request(credit, actor=request.user)
        except BillingError as e:
            return billing_error_response(e)
        return Response(CreditRequestSerializer(credit).data)


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------

class SaleViewSet(viewsets.ReadOnlyModelViewSet):
    """Deals. Closers only see their own."""

    serializer_class = SaleSerializer
    queryset = Sale.objects.select_related('contact', 'closer', 'organization', 'product')
    permission_classes = [permissions.IsAuthenticated, CanPriceDeals]
    filterset_fields = ['pipeline_status', 'organization', 'closer']
    ordering_fields = ['created_at', 'closed_at']

    def get_queryset(self):
        qs = super().get_queryset()
        user = self.request.user
        if user.role == User.Role.CLOSER:
            return qs.filter(closer=user)
        return qs

    @action(detail=True, methods=['post'], url_path='set-status')
    def set_status(self, request, pk=None):
        sale = self.get_object()
        serializer = PipelineStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            sale = set_pipeline_status(
                sale, serializer.validated_data['pipeline_status'], actor=request.user,
            )
        except BillingError as e:
            return billing_error_response(e)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(SaleSerializer(sale).data)

    @action(detail=True, methods=['post'], url_path='price')
    def price(self, request, pk=None):
        sale = self.get_object()
        try:
            sale = price_sale(sale)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(SaleSerializer(sale).data)


# ---------------------------------------------------------------------------
# Employer cost & commission statements
# ---------------------------------------------------------------------------

class EmployerCostSettingViewSet(viewsets.ModelViewSet):
    serializer_class = EmployerCostSettingSerializer
    queryset = EmployerCostSetting.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsAdmin]


class CommissionStatementViewSet(viewsets.ReadOnlyModelViewSet):
    """Stored monthly commission statements; ``recompute`` refreshes one month."""

    serializer_class = CommissionStatementSerializer
    queryset = CommissionStatement.objects.all()
    pagination_class = ReportRowsPagination
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    filterset_fields = ['period', 'is_final']

    @action(detail=False, methods=['post'], url_path='recompute')
    def recompute(self, request):
        from billing.tasks import recompute_commission_statement

        try:
            month = BillingMonth.parse(request.data.get('month') or BillingMonth.current())
        except BillingError as e:
            return billing_error_response(e)
        recompute_commission_statement.delay(period=str(month))
        return Response({'period': str(month)}, status=status.HTTP_202_ACCEPTED)
