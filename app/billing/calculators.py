"""
Charge calculators.

Each calculator reads its own slice of billing data for one company plan
assignment and returns charges of a single type. They share no state and
may run in any order.
"""
import logging
from decimal import Decimal, ROUND_CEILING
from typing import List

from companies.services import get_company_tax_rate
from core.exceptions import DataIntegrityError
from core.utils import to_decimal
from projects.selectors import company_work_items_q
from timetracking.models import TimeEntry
from .charges import BucketCharge, FixedPriceCharge, TimeBasedCharge, UsageBasedCharge
from .models import BucketPlan, BucketUsage, PlanService, ServiceCatalog, UsageTracking

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')


def item_tax(company, service, total: Decimal):
    """
    ``(tax_rate, tax_amount)`` for a fixed, time or usage charge.

    The rate is the service's percentage; exempt companies and non-taxable
    services pay nothing.
    """
    if company.is_tax_exempt or not service.is_taxable:
        return Decimal('0'), Decimal('0')
    rate = to_decimal(service.tax_rate)
    return rate, total * rate / HUNDRED


def bucket_overage_tax(tax_rate, overage_hours, overage_rate) -> Decimal:
    """Tax on bucket overage, rounded up to a whole currency unit."""
    overage_hours = to_decimal(overage_hours)
    if overage_hours <= 0:
        return Decimal('0')
    amount = to_decimal(tax_rate) * overage_hours * to_decimal(overage_rate)
    return amount.to_integral_value(rounding=ROUND_CEILING)


def _plan_services(scope, company_plan):
    return (
        scope.queryset(PlanService)
        .filter(plan_id=company_plan.plan_id)
        .select_related('service')
    )


def calculate_fixed_price_charges(scope, company, period, company_plan) -> List[FixedPriceCharge]:
    plan_services = _plan_services(scope, company_plan).filter(service__service_type='Fixed')
    if company_plan.service_category_id:
        plan_services = plan_services.filter(service__category_id=company_plan.service_category_id)

    charges = []
    for plan_service in plan_services:
        service = plan_service.service
        rate = plan_service.rate
        total = plan_service.quantity * rate
        tax_rate, tax_amount = item_tax(company, service, total)
        charges.append(FixedPriceCharge(
            service_id=str(service.pk),
            service_name=service.service_name,
            quantity=plan_service.quantity,
            rate=rate,
            total=total,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            tax_region=service.tax_region or company.tax_region,
        ))

    logger.debug(f"Fixed charges for company {company.pk}, plan {company_plan.plan_id}: {len(charges)}")
    return charges


def calculate_time_based_charges(scope, company, period, company_plan) -> List[TimeBasedCharge]:
    """
    Approved time entries inside the period, logged against the company's
    tickets or project tasks, for services of the plan's category.
    """
    if not company_plan.service_category_id:
        return []

    plan_services = {
        plan_service.service_id: plan_service
        for plan_service in _plan_services(scope, company_plan)
    }
    if not plan_services:
        return []

    entries = (
        scope.queryset(TimeEntry)
        .filter(company_work_items_q(scope, company.pk))
        .filter(
            approval_status='APPROVED',
            start_time__gte=period.start,
            end_time__lte=period.end,
            service_id__in=list(plan_services),
            service__category_id=company_plan.service_category_id,
        )
        .select_related('service')
        .order_by('start_time')
    )

    charges = []
    for entry in entries:
        plan_service = plan_services[entry.service_id]
        rate = plan_service.rate
        duration = Decimal(int(entry.duration.total_seconds() // 3600))
        total = duration * rate
        tax_rate, tax_amount = item_tax(company, entry.service, total)
        charges.append(TimeBasedCharge(
            service_id=str(entry.service_id),
            service_name=entry.service.service_name,
            user_id=entry.user_id,
            duration=duration,
            rate=rate,
            total=total,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            tax_region=entry.tax_region or company.tax_region,
        ))
    return charges


def calculate_usage_based_charges(scope, company, period, company_plan) -> List[UsageBasedCharge]:
    if not company_plan.service_category_id:
        return []

    plan_services = {
        plan_service.service_id: plan_service
        for plan_service in _plan_services(scope, company_plan)
    }
    if not plan_services:
        return []

    records = (
        scope.queryset(UsageTracking)
        .filter(
            company_id=company.pk,
            usage_date__range=(period.start, period.end),
            service_id__in=list(plan_services),
            service__category_id=company_plan.service_category_id,
        )
        .select_related('service')
        .order_by('usage_date')
    )

    charges = []
    for record in records:
        rate = plan_services[record.service_id].rate
        total = record.quantity * rate
        tax_rate, tax_amount = item_tax(company, record.service, total)
        charges.append(UsageBasedCharge(
            service_id=str(record.service_id),
            service_name=record.service.service_name,
            quantity=record.quantity,
            rate=rate,
            total=total,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            tax_region=record.tax_region or company.tax_region,
        ))
    return charges


def calculate_bucket_plan_charges(scope, company, period, company_plan) -> List[BucketCharge]:
    """
    Overage charge for the company's bucket usage in the period, if any.

    Tax uses the region rate in force at the end of the period and is
    rounded up.
    """
    bucket_plan = scope.first(BucketPlan, plan_id=company_plan.plan_id)
    if bucket_plan is None:
        return []

    usage = (
        scope.queryset(BucketUsage)
        .filter(
            bucket_plan=bucket_plan,
            company_id=company.pk,
            period_start__range=(period.start, period.end),
        )
        .order_by('period_start')
        .first()
    )
    if usage is None or usage.overage_hours <= 0:
        return []

    if usage.service_catalog_id is None:
        raise DataIntegrityError(f"Bucket usage {usage.pk} has no service")
    service = scope.first(ServiceCatalog, pk=usage.service_catalog_id)
    if service is None:
        raise DataIntegrityError(
            f"Service {usage.service_catalog_id} referenced by bucket usage {usage.pk} not found"
        )

    tax_region = service.tax_region or company.tax_region
    if company.is_tax_exempt or not service.is_taxable:
        tax_rate = Decimal('0')
    else:
        tax_rate = get_company_tax_rate(scope, tax_region, period.end_date)

    overage_rate = bucket_plan.overage_rate
    charge = BucketCharge(
        service_id=str(service.pk),
        service_name=service.service_name,
        rate=overage_rate,
        total=usage.overage_hours * overage_rate,
        hours_used=usage.hours_used,
        overage_hours=usage.overage_hours,
        overage_rate=overage_rate,
        tax_rate=tax_rate,
        tax_amount=bucket_overage_tax(tax_rate, usage.overage_hours, overage_rate),
        tax_region=tax_region,
    )
    logger.debug(f"Bucket charge for company {company.pk}: {charge}")
    return [charge]
