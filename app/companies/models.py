"""
Company (client) models: billing cycle and tax configuration.
"""
from decimal import Decimal
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from core.db import BaseTenantModel


BILLING_CYCLES = [
    ('weekly', _('Weekly')),
    ('bi-weekly', _('Bi-Weekly')),
    ('monthly', _('Monthly')),
    ('quarterly', _('Quarterly')),
    ('semi-annually', _('Semi-Annually')),
    ('annually', _('Annually')),
]


class Company(BaseTenantModel):
    """
    A client company billed by the tenant.
    """

    company_name = models.CharField(_('company name'), max_length=200)
    email = models.EmailField(_('email'), blank=True)
    phone_no = models.CharField(_('phone number'), max_length=50, blank=True)
    url = models.URLField(_('website'), blank=True)
    address = models.TextField(_('address'), blank=True)
    client_type = models.CharField(_('client type'), max_length=50, blank=True)

    # Billing
    billing_cycle = models.CharField(
        _('billing cycle'), max_length=20, choices=BILLING_CYCLES, blank=True
    )
    payment_terms = models.CharField(_('payment terms'), max_length=50, blank=True)
    credit_limit = models.DecimalField(_('credit limit'), max_digits=12, decimal_places=2, null=True, blank=True)

    # Tax
    tax_region = models.CharField(_('tax region'), max_length=100, blank=True)
    is_tax_exempt = models.BooleanField(_('tax exempt'), default=False)
    tax_exemption_certificate = models.CharField(_('tax exemption certificate'), max_length=200, blank=True)

    is_inactive = models.BooleanField(_('inactive'), default=False)

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Company')
        verbose_name_plural = _('Companies')
        ordering = ['company_name']

    def __str__(self):
        return self.company_name


class CompanyBillingCycle(BaseTenantModel):
    """
    Billing cycle used as the proration denominator for a company.
    """

    company = models.OneToOneField(Company, on_delete=models.CASCADE, related_name='billing_cycle_record')
    billing_cycle = models.CharField(_('billing cycle'), max_length=20, choices=BILLING_CYCLES, default='monthly')
    effective_date = models.DateTimeField(_('effective date'), default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Company Billing Cycle')
        verbose_name_plural = _('Company Billing Cycles')

    def __str__(self):
        return f"{self.company.company_name} - {self.get_billing_cycle_display()}"


class TaxRate(BaseTenantModel):
    """
    Tax percentage for a region over an effective date range.
    """

    region = models.CharField(_('region'), max_length=100)
    tax_percentage = models.DecimalField(_('tax percentage'), max_digits=6, decimal_places=3)
    description = models.CharField(_('description'), max_length=200, blank=True)
    start_date = models.DateTimeField(_('start date'))
    end_date = models.DateTimeField(_('end date'), null=True, blank=True)

    class Meta:
        verbose_name = _('Tax Rate')
        verbose_name_plural = _('Tax Rates')
        ordering = ['region', '-start_date']

    def __str__(self):
        return f"{self.region}: {self.tax_percentage}%"

    @property
    def rate(self) -> Decimal:
        """Tax percentage as a fraction (8.25 -> 0.0825)."""
        return self.tax_percentage / Decimal('100')
