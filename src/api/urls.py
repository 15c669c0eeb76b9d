"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1 import views as v1_views
from billing import billing_views

router = DefaultRouter()
router.register(r'organizations', v1_views.OrganizationViewSet)
router.register(r'products', v1_views.ProductViewSet)
router.register(r'credit-requests', v1_views.CreditRequestViewSet, basename='credit-request')
router.register(r'sales', v1_views.SaleViewSet, basename='sale')
router.register(r'employer-costs', v1_views.EmployerCostSettingViewSet, basename='employer-cost')
router.register(r'commission-statements', v1_views.CommissionStatementViewSet, basename='commission-statement')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('leads/intake/', v1_views.LeadIntakeView.as_view(), name='lead-intake'),
    path('billing/periods/', billing_views.BillingPeriodsView.as_view(), name='billing-periods'),
    path('billing/credits/', billing_views.MonthCreditsView.as_view(), name='billing-credits'),
    path(
        'billing/commissions/openers/',
        billing_views.OpenerCommissionsView.as_view(),
        name='billing-opener-commissions',
    ),
    path(
        'billing/commissions/closers/',
        billing_views.CloserCommissionsView.as_view(),
        name='billing-closer-commissions',
    ),
    path(
        'billing/commissions/summary/',
        billing_views.CommissionSummaryView.as_view(),
        name='billing-commission-summary',
    ),
    path('billing/invoicing/', billing_views.InvoicingOverviewView.as_view(), name='billing-invoicing'),
    path(
        'billing/invoicing/<uuid:organization_id>/',
        billing_views.OrganizationInvoiceView.as_view(),
        name='billing-organization-invoice',
    ),
    path(
        'billing/partners/overview/',
        billing_views.PartnerOverviewView.as_view(),
        name='billing-partner-overview',
    ),
    path('billing/deal-pricing/', billing_views.DealPricingView.as_view(), name='billing-deal-pricing'),
]
