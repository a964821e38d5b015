"""
Billing models: service catalog, plans, plan assignments, buckets, usage
and discounts.
"""
from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from core.db import BaseTenantModel, TenantQuerySet


class ServiceCategory(BaseTenantModel):
    """
    Grouping of catalog services. A company billing plan bills the services
    of one category.
    """

    category_name = models.CharField(_('category name'), max_length=200)
    description = models.TextField(_('description'), blank=True)

    class Meta:
        verbose_name = _('Service Category')
        verbose_name_plural = _('Service Categories')
        ordering = ['category_name']

    def __str__(self):
        return self.category_name


class ServiceCatalog(BaseTenantModel):
    """
    A billable service with its default rate and tax treatment.
    """

    SERVICE_TYPES = [
        ('Fixed', _('Fixed Price')),
        ('Time', _('Time Based')),
        ('Usage', _('Usage Based')),
    ]

    service_name = models.CharField(_('service name'), max_length=200)
    service_type = models.CharField(_('service type'), max_length=10, choices=SERVICE_TYPES)
    category = models.ForeignKey(
        ServiceCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name='services'
    )
    default_rate = models.DecimalField(_('default rate'), max_digits=12, decimal_places=2, default=0)
    unit_of_measure = models.CharField(_('unit of measure'), max_length=50, blank=True)

    # Tax
    is_taxable = models.BooleanField(_('taxable'), default=True)
    tax_rate = models.DecimalField(
        _('tax rate (%)'), max_digits=6, decimal_places=3, default=0,
        help_text=_('Percentage applied to fixed, time and usage charges.')
    )
    tax_region = models.CharField(_('tax region'), max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Service')
        verbose_name_plural = _('Service Catalog')
        ordering = ['service_name']

    def __str__(self):
        return f"{self.service_name} ({self.service_type})"


class BillingPlan(BaseTenantModel):
    """
    A named set of services with quantities and optional custom rates.
    """

    PLAN_TYPES = [
        ('Fixed', _('Fixed Price')),
        ('Hourly', _('Hourly')),
        ('Usage', _('Usage Based')),
        ('Bucket', _('Bucket')),
    ]

    plan_name = models.CharField(_('plan name'), max_length=200)
    description = models.TextField(_('description'), blank=True)
    billing_frequency = models.CharField(_('billing frequency'), max_length=20, default='monthly')
    plan_type = models.CharField(_('plan type'), max_length=10, choices=PLAN_TYPES, default='Fixed')
    is_custom = models.BooleanField(_('custom plan'), default=False)

    services = models.ManyToManyField(ServiceCatalog, through='PlanService', related_name='plans')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Billing Plan')
        verbose_name_plural = _('Billing Plans')
        ordering = ['plan_name']

    def __str__(self):
        return self.plan_name


class PlanService(BaseTenantModel):
    plan = models.ForeignKey(BillingPlan, on_delete=models.CASCADE, related_name='plan_services')
    service = models.ForeignKey(ServiceCatalog, on_delete=models.CASCADE, related_name='plan_services')
    quantity = models.DecimalField(_('quantity'), max_digits=10, decimal_places=2, default=1)
    custom_rate = models.DecimalField(_('custom rate'), max_digits=12, decimal_places=2, null=True, blank=True)

    class Meta:
        verbose_name = _('Plan Service')
        verbose_name_plural = _('Plan Services')
        unique_together = ['plan', 'service']

    def __str__(self):
        return f"{self.plan.plan_name} - {self.service.service_name} x{self.quantity}"

    @property
    def rate(self) -> Decimal:
        return self.custom_rate if self.custom_rate is not None else self.service.default_rate


class CompanyBillingPlanQuerySet(TenantQuerySet):

    def active_between(self, start, end):
        """Active assignments overlapping ``[start, end]``."""
        return self.filter(
            models.Q(end_date__isnull=True) | models.Q(end_date__gte=start),
            is_active=True,
            start_date__lte=end,
        )


class CompanyBillingPlan(BaseTenantModel):
    """
    Assignment of a billing plan to a company for a date range.
    """

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='billing_plans')
    plan = models.ForeignKey(BillingPlan, on_delete=models.PROTECT, related_name='company_assignments')
    service_category = models.ForeignKey(
        ServiceCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name='company_billing_plans'
    )
    start_date = models.DateTimeField(_('start date'))
    end_date = models.DateTimeField(_('end date'), null=True, blank=True)
    is_active = models.BooleanField(_('active'), default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = CompanyBillingPlanQuerySet.as_manager()

    class Meta:
        verbose_name = _('Company Billing Plan')
        verbose_name_plural = _('Company Billing Plans')
        ordering = ['-start_date']

    def __str__(self):
        return f"{self.company.company_name} - {self.plan.plan_name}"

    def clean(self):
        super().clean()
        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValidationError({'end_date': _('End date must not precede start date.')})


class BucketPlan(BaseTenantModel):
    """
    Prepaid hours allotment attached to a billing plan.
    """

    plan = models.OneToOneField(BillingPlan, on_delete=models.CASCADE, related_name='bucket_plan')
    total_hours = models.DecimalField(_('total hours'), max_digits=8, decimal_places=2)
    billing_period = models.CharField(_('billing period'), max_length=20, default='monthly')
    overage_rate = models.DecimalField(_('overage rate'), max_digits=12, decimal_places=2)

    class Meta:
        verbose_name = _('Bucket Plan')
        verbose_name_plural = _('Bucket Plans')

    def __str__(self):
        return f"{self.plan.plan_name}: {self.total_hours}h"


class BucketUsage(BaseTenantModel):
    """
    Hours a company consumed from a bucket plan in one period.
    """

    bucket_plan = models.ForeignKey(BucketPlan, on_delete=models.CASCADE, related_name='usage')
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='bucket_usage')
    service_catalog = models.ForeignKey(
        ServiceCatalog, on_delete=models.SET_NULL, null=True, blank=True, related_name='bucket_usage'
    )
    period_start = models.DateTimeField(_('period start'))
    period_end = models.DateTimeField(_('period end'))
    hours_used = models.DecimalField(_('hours used'), max_digits=8, decimal_places=2, default=0)
    overage_hours = models.DecimalField(_('overage hours'), max_digits=8, decimal_places=2, default=0)

    class Meta:
        verbose_name = _('Bucket Usage')
        verbose_name_plural = _('Bucket Usage')
        ordering = ['-period_start']

    def __str__(self):
        return f"{self.company.company_name}: {self.hours_used}h ({self.overage_hours}h over)"


class UsageTracking(BaseTenantModel):
    """
    Metered usage of a service by a company.
    """

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='usage_records')
    service = models.ForeignKey(ServiceCatalog, on_delete=models.PROTECT, related_name='usage_records')
    usage_date = models.DateTimeField(_('usage date'))
    quantity = models.DecimalField(_('quantity'), max_digits=12, decimal_places=2)
    tax_region = models.CharField(_('tax region'), max_length=100, blank=True)

    class Meta:
        verbose_name = _('Usage Record')
        verbose_name_plural = _('Usage Records')
        ordering = ['-usage_date']

    def __str__(self):
        return f"{self.company.company_name} - {self.service.service_name}: {self.quantity}"


class Discount(BaseTenantModel):
    """
    Percentage or fixed discount applied to a billing run.
    """

    DISCOUNT_TYPES = [
        ('percentage', _('Percentage')),
        ('fixed', _('Fixed Amount')),
    ]

    discount_name = models.CharField(_('discount name'), max_length=200)
    description = models.TextField(_('description'), blank=True)
    discount_type = models.CharField(_('discount type'), max_length=20, choices=DISCOUNT_TYPES)
    value = models.DecimalField(_('value'), max_digits=12, decimal_places=2)
    is_active = models.BooleanField(_('active'), default=True)
    start_date = models.DateTimeField(_('start date'))
    end_date = models.DateTimeField(_('end date'), null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Discount')
        verbose_name_plural = _('Discounts')
        ordering = ['discount_name']

    def __str__(self):
        if self.discount_type == 'percentage':
            return f"{self.discount_name} ({self.value}%)"
        return f"{self.discount_name} ({self.value})"

    def clean(self):
        super().clean()
        if self.discount_type == 'percentage' and not (0 <= self.value <= 100):
            raise ValidationError({'value': _('Percentage must be between 0 and 100.')})
        if self.value is not None and self.value < 0:
            raise ValidationError({'value': _('Discount value cannot be negative.')})


class PlanDiscount(BaseTenantModel):
    """
    Discount granted on a plan to a specific company.
    """

    plan = models.ForeignKey(BillingPlan, on_delete=models.CASCADE, related_name='plan_discounts')
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='plan_discounts')
    discount = models.ForeignKey(Discount, on_delete=models.CASCADE, related_name='plan_discounts')

    class Meta:
        verbose_name = _('Plan Discount')
        verbose_name_plural = _('Plan Discounts')
        unique_together = ['plan', 'company', 'discount']

    def __str__(self):
        return f"{self.discount.discount_name} on {self.plan.plan_name} for {self.company.company_name}"
