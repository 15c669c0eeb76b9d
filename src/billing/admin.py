"""Admin configuration for the billing app."""
from django.contrib import admin

from .models import CommissionStatement, EmployerCostSetting


@admin.register(EmployerCostSetting)
class EmployerCostSettingAdmin(admin.ModelAdmin):
    list_display = ("name", "percentage", "is_active", "updated_at")
    list_filter = ("is_active",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(CommissionStatement)
class CommissionStatementAdmin(admin.ModelAdmin):
    list_display = (
        "period",
        "total_opener_commission",
        "total_closer_commission",
        "employer_cost_amount",
        "total_with_employer_cost",
        "is_final",
        "computed_at",
    )
    list_filter = ("is_final",)
    readonly_fields = (
        "id",
        "period",
        "total_opener_commission",
        "total_closer_commission",
        "employer_cost_percentage",
        "employer_cost_amount",
        "total_with_employer_cost",
        "payload",
        "computed_at",
        "created_at",
        "updated_at",
    )
