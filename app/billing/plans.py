"""
Resolution of the billing plans and cycle a company is billed under.
"""
import logging
from typing import List, Tuple

from django.conf import settings

from companies.services import get_billing_cycle
from core.exceptions import NoActivePlanError
from .models import CompanyBillingPlan

logger = logging.getLogger(__name__)


def get_company_billing_plans_and_cycle(scope, company_id, period) -> Tuple[List[CompanyBillingPlan], str]:
    """
    Active plan assignments overlapping ``period`` and the company's billing
    cycle.

    Raises:
        NoActivePlanError: if no assignment covers any part of the period.
    """
    plans = list(
        scope.queryset(CompanyBillingPlan)
        .active_between(period.start, period.end)
        .filter(company_id=company_id)
        .select_related('plan', 'service_category')
        .order_by('-start_date')
    )
    if not plans:
        raise NoActivePlanError(company_id, period)

    cycle = get_billing_cycle(
        scope, company_id, default=getattr(settings, 'BILLING_DEFAULT_CYCLE', 'monthly')
    )
    logger.debug(f"Company {company_id}: {len(plans)} active plan(s), cycle {cycle}")
    return plans, cycle
