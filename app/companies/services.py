"""
Company lookups used by the billing engine.
"""
import logging
from decimal import Decimal

from django.db.models import Q

from core.exceptions import DataIntegrityError
from timetracking.periods import parse_iso
from .models import Company, CompanyBillingCycle, TaxRate

logger = logging.getLogger(__name__)


def get_company(scope, company_id) -> Company:
    """Fetch a company of the tenant or fail with ``DataIntegrityError``."""
    try:
        return scope.get(Company, pk=company_id)
    except Company.DoesNotExist:
        raise DataIntegrityError(f"Company {company_id} not found")


def get_billing_cycle(scope, company_id, default: str = 'monthly') -> str:
    """Billing cycle recorded for the company, ``default`` if unset."""
    record = scope.first(CompanyBillingCycle, company_id=company_id)
    return record.billing_cycle if record else default


def get_company_tax_rate(scope, region: str, as_of) -> Decimal:
    """
    Fractional tax rate for ``region`` effective at ``as_of``.

    Rates whose ranges overlap the date are summed (e.g. state + county).
    Returns ``Decimal('0')`` when the region has no rate.
    """
    if not region:
        return Decimal('0')

    as_of = parse_iso(as_of)
    rates = scope.queryset(TaxRate).filter(
        Q(end_date__isnull=True) | Q(end_date__gt=as_of),
        region=region,
        start_date__lte=as_of,
    )
    total = sum((rate.rate for rate in rates), Decimal('0'))
    logger.debug(f"Tax rate for region {region} at {as_of.isoformat()}: {total}")
    return total
