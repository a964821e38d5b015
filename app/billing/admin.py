"""
Admin configuration for billing app.
"""
from django.contrib import admin
from .models import (
    ServiceCategory, ServiceCatalog, BillingPlan, PlanService, CompanyBillingPlan,
    BucketPlan, BucketUsage, UsageTracking, Discount, PlanDiscount
)


class PlanServiceInline(admin.TabularInline):
    model = PlanService
    extra = 0
    fields = ['organization', 'service', 'quantity', 'custom_rate']


class BucketPlanInline(admin.StackedInline):
    model = BucketPlan
    extra = 0
    fields = ['organization', 'total_hours', 'billing_period', 'overage_rate']


class ServiceCategoryAdmin(admin.ModelAdmin):
    list_display = ['category_name', 'organization']
    list_filter = ['organization']
    search_fields = ['category_name', 'description']


class ServiceCatalogAdmin(admin.ModelAdmin):
    list_display = ['service_name', 'service_type', 'category', 'default_rate', 'is_taxable', 'tax_rate', 'organization']
    list_filter = ['service_type', 'is_taxable', 'category', 'organization']
    search_fields = ['service_name']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('organization', 'service_name', 'service_type', 'category')
        }),
        ('Pricing', {
            'fields': ('default_rate', 'unit_of_measure')
        }),
        ('Tax', {
            'fields': ('is_taxable', 'tax_rate', 'tax_region')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


class BillingPlanAdmin(admin.ModelAdmin):
    list_display = ['plan_name', 'plan_type', 'billing_frequency', 'is_custom', 'organization']
    list_filter = ['plan_type', 'billing_frequency', 'is_custom', 'organization']
    search_fields = ['plan_name', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [PlanServiceInline, BucketPlanInline]


class CompanyBillingPlanAdmin(admin.ModelAdmin):
    list_display = ['company', 'plan', 'service_category', 'start_date', 'end_date', 'is_active']
    list_filter = ['is_active', 'plan', 'organization']
    search_fields = ['company__company_name', 'plan__plan_name']
    date_hierarchy = 'start_date'


class BucketUsageAdmin(admin.ModelAdmin):
    list_display = ['company', 'bucket_plan', 'period_start', 'period_end', 'hours_used', 'overage_hours']
    list_filter = ['organization']
    search_fields = ['company__company_name']
    date_hierarchy = 'period_start'


class UsageTrackingAdmin(admin.ModelAdmin):
    list_display = ['company', 'service', 'usage_date', 'quantity', 'tax_region']
    list_filter = ['service', 'organization']
    search_fields = ['company__company_name', 'service__service_name']
    date_hierarchy = 'usage_date'


class DiscountAdmin(admin.ModelAdmin):
    list_display = ['discount_name', 'discount_type', 'value', 'is_active', 'start_date', 'end_date']
    list_filter = ['discount_type', 'is_active', 'organization']
    search_fields = ['discount_name', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']


class PlanDiscountAdmin(admin.ModelAdmin):
    list_display = ['discount', 'plan', 'company']
    list_filter = ['organization']
    search_fields = ['discount__discount_name', 'company__company_name']


# Register models
admin.site.register(ServiceCategory, ServiceCategoryAdmin)
admin.site.register(ServiceCatalog, ServiceCatalogAdmin)
admin.site.register(BillingPlan, BillingPlanAdmin)
admin.site.register(CompanyBillingPlan, CompanyBillingPlanAdmin)
admin.site.register(BucketUsage, BucketUsageAdmin)
admin.site.register(UsageTracking, UsageTrackingAdmin)
admin.site.register(Discount, DiscountAdmin)
admin.site.register(PlanDiscount, PlanDiscountAdmin)
