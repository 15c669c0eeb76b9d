"""Admin configuration for the partners app."""
from django.contrib import admin

from .models import Organization, OrganizationCommissionSettings


class OrganizationCommissionSettingsInline(admin.StackedInline):
    model = OrganizationCommissionSettings
    extra = 0
    can_delete = False


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "status",
        "price_per_solar_deal",
        "price_per_battery_deal",
        "can_request_credits",
        "credit_deadline_days",
        "created_at",
    )
    list_filter = ("status", "can_request_credits")
    search_fields = ("name", "contact_person_name")
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [OrganizationCommissionSettingsInline]
