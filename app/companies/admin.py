"""
Admin configuration for companies app.
"""
from django.contrib import admin
from .models import Company, CompanyBillingCycle, TaxRate


class CompanyBillingCycleInline(admin.StackedInline):
    model = CompanyBillingCycle
    extra = 0
    fields = ['organization', 'billing_cycle', 'effective_date']


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['company_name', 'organization', 'billing_cycle', 'tax_region', 'is_tax_exempt', 'is_inactive']
    list_filter = ['is_tax_exempt', 'is_inactive', 'billing_cycle', 'organization']
    search_fields = ['company_name', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [CompanyBillingCycleInline]

    fieldsets = (
        (None, {
            'fields': ('organization', 'company_name', 'client_type', 'is_inactive')
        }),
        ('Contact', {
            'fields': ('email', 'phone_no', 'url', 'address')
        }),
        ('Billing', {
            'fields': ('billing_cycle', 'payment_terms', 'credit_limit')
        }),
        ('Tax', {
            'fields': ('tax_region', 'is_tax_exempt', 'tax_exemption_certificate')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


@admin.register(TaxRate)
class TaxRateAdmin(admin.ModelAdmin):
    list_display = ['region', 'tax_percentage', 'start_date', 'end_date', 'organization']
    list_filter = ['region', 'organization']
    search_fields = ['region', 'description']
