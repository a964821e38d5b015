"""
Celery tasks for billing operations.

Billing runs are invoked on demand; nothing here is scheduled.
"""
from celery import shared_task
import logging

from core.db import TenantScope
from organizations.models import Organization
from .engine import BillingEngine

logger = logging.getLogger(__name__)


def _engine(organization_id) -> BillingEngine:
    organization = Organization.objects.get(pk=organization_id, is_active=True)
    return BillingEngine(TenantScope(organization))


@shared_task
def calculate_company_billing(organization_id, company_id, start_date, end_date):
    """
    Calculate billing for a company and return the result as JSON data.

    Errors propagate so the task is marked failed.
    """
    logger.info(f"Billing task for company {company_id} ({start_date} - {end_date})")
    result = _engine(organization_id).calculate_billing(company_id, start_date, end_date)
    return result.to_dict()


@shared_task
def rollover_unapproved_time(organization_id, company_id, current_period_end, next_period_start):
    moved = _engine(organization_id).rollover_unapproved_time(
        company_id, current_period_end, next_period_start
    )
    return {"status": "success", "entries_moved": moved}
