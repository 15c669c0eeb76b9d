"""Admin configuration for the leads app."""
from django.contrib import admin

from .models import Contact, CreditRequest, Product, Sale


class CreditRequestInline(admin.TabularInline):
    model = CreditRequest
    extra = 0
    fields = ("organization", "status", "reason", "requested_by", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ("email", "name", "interest", "date_sent", "opener", "created_at")
    list_filter = ("interest", "date_sent")
    search_fields = ("email", "name", "phone")
    filter_horizontal = ("organizations",)
    date_hierarchy = "date_sent"
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [CreditRequestInline]


@admin.register(CreditRequest)
class CreditRequestAdmin(admin.ModelAdmin):
    list_display = ("contact", "organization", "status", "requested_by", "created_at", "handled_at")
    list_filter = ("status", "organization")
    search_fields = ("contact__email", "contact__name", "reason")
    readonly_fields = ("id", "status", "handled_by", "handled_at", "created_at", "updated_at")


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = (
        "contact",
        "organization",
        "closer",
        "pipeline_status",
        "invoiceable_amount",
        "closer_commission",
        "closed_at",
    )
    list_filter = ("pipeline_status", "organization", "product")
    search_fields = ("contact__email", "contact__name")
    readonly_fields = ("id", "closed_at", "created_at", "updated_at")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "capacity_kwh", "base_price_incl_moms", "material_cost_eur")
    list_filter = ("type",)
    search_fields = ("name",)
