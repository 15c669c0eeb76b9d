from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CloserCommissionType, User

COMMISSION_FIELDS = (
    "opener_commission_per_lead",
    "opener_commission_per_deal",
    "closer_base_commission",
    "closer_markup_percentage",
    "closer_company_markup_share",
)


class CloserCommissionTypeInline(admin.TabularInline):
    model = CloserCommissionType
    extra = 0
    fields = ("name", "commission_amount")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Staff and partner users with their commission parameters.

    Blank rates fall back to the defaults in settings when commissions
    are computed.
    """

    list_display = (
        "email",
        "get_full_name",
        "role",
        "organization",
        "opener_commission_per_lead",
        "closer_base_commission",
        "is_active",
    )
    list_filter = ("role", "is_active", "organization")
    list_select_related = ("organization",)
    search_fields = ("email", "first_name", "last_name")
    ordering = ("role", "last_name", "first_name")
    autocomplete_fields = ("organization",)
    inlines = [CloserCommissionTypeInline]
    actions = ("reset_commission_rates", "deactivate_users")
    readonly_fields = ("date_joined", "last_login")

    fieldsets = (
        (None, {"fields": ("email", "password", "role", "organization")}),
        (_("Personuppgifter"), {"fields": ("first_name", "last_name", "phone")}),
        (_("Provision"), {"fields": COMMISSION_FIELDS}),
        (_("Behörigheter"), {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        (_("Datum"), {"fields": ("date_joined", "last_login")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "role", "organization", "password1", "password2"),
            },
        ),
    )

    @admin.display(description=_("Namn"))
    def get_full_name(self, obj):
        return obj.get_full_name()

    def get_inlines(self, request, obj):
        if obj is None or obj.role != User.Role.CLOSER:
            return []
        return super().get_inlines(request, obj)

    @admin.action(description="Återställ provisionssatser till standard")
    def reset_commission_rates(self, request, queryset):
        updated = queryset.update(**dict.fromkeys(COMMISSION_FIELDS))
        self.message_user(request, f"{updated} användare använder nu standardsatserna.")

    @admin.action(description="Inaktivera valda användare")
    def deactivate_users(self, request, queryset):
        queryset.update(is_active=False)
