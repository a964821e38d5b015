"""
Celery tasks for time period generation.
"""
from celery import shared_task
from django.conf import settings
from django.utils import timezone
import logging

from core.db import TenantScope
from core.exceptions import ConfigurationError
from organizations.models import Organization
from .services import generate_and_save_time_periods

logger = logging.getLogger(__name__)


@shared_task
def generate_upcoming_time_periods():
    """
    Generate and save periods for every active organization up to the
    configured horizon.

    Runs daily. An organization with unusable settings is logged and
    skipped so the others still get their periods.
    """
    logger.info("Starting time period generation")

    start = timezone.now().replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timezone.timedelta(days=settings.TIME_PERIOD_HORIZON_DAYS)

    created_count = 0
    failed = []
    for organization in Organization.objects.filter(is_active=True):
        try:
            created = generate_and_save_time_periods(TenantScope(organization), start, end)
            created_count += len(created)
        except ConfigurationError as e:
            logger.error(f"Time period settings of organization {organization.slug} are invalid: {str(e)}")
            failed.append(str(organization.pk))

    logger.info(f"Time period generation completed - Periods created: {created_count}, Failed: {len(failed)}")

    return {
        "status": "success",
        "periods_created": created_count,
        "failed_organizations": failed,
    }
