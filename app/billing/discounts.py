"""
Discounts and adjustments applied to a billing result.
"""
import logging
from dataclasses import replace
from decimal import Decimal
from typing import List

from django.db.models import Q

from core.utils import to_decimal
from timetracking.periods import to_iso
from .charges import AppliedDiscount, BillingResult
from .models import CompanyBillingPlan, Discount

logger = logging.getLogger(__name__)


def fetch_discounts(scope, company_id, period) -> List[AppliedDiscount]:
    """
    Active discounts granted to the company on any of its plans that
    overlap ``period``.
    """
    plan_ids = scope.queryset(CompanyBillingPlan).filter(company_id=company_id).values('plan_id')
    discounts = (
        scope.queryset(Discount)
        .filter(
            Q(end_date__isnull=True) | Q(end_date__gte=period.start),
            is_active=True,
            start_date__lte=period.end,
            plan_discounts__company_id=company_id,
            plan_discounts__plan_id__in=plan_ids,
        )
        .distinct()
        .order_by('discount_name')
    )
    return [
        AppliedDiscount(
            discount_id=str(discount.pk),
            discount_name=discount.discount_name,
            discount_type=discount.discount_type,
            value=to_decimal(discount.value),
            start_date=to_iso(discount.start_date),
            end_date=to_iso(discount.end_date) if discount.end_date else None,
        )
        for discount in discounts
    ]


def apply_discounts_and_adjustments(result: BillingResult, discounts: List[AppliedDiscount]) -> BillingResult:
    """
    Price every discount against the undiscounted total and subtract them.

    Discounts do not compound. Adjustments stay an explicit empty list.
    """
    priced = []
    for discount in discounts:
        if discount.discount_type == 'percentage':
            amount = result.total_amount * discount.value / Decimal('100')
        else:
            amount = discount.value
        priced.append(replace(discount, amount=amount))

    discount_total = sum((discount.amount for discount in priced), Decimal('0'))
    adjustments = list(result.adjustments)
    adjustment_total = sum((adjustment.amount for adjustment in adjustments), Decimal('0'))

    return replace(
        result,
        discounts=priced,
        adjustments=adjustments,
        final_amount=result.total_amount - discount_total - adjustment_total,
    )
