"""
Rollover of unapproved time into the next period.
"""
import logging

from django.db import DatabaseError

from core.exceptions import RolloverError
from projects.selectors import company_work_items_q
from timetracking.models import TimeEntry, UNAPPROVED_STATUSES
from timetracking.periods import parse_iso

logger = logging.getLogger(__name__)


def rollover_unapproved_time(scope, company_id, current_period_end, next_period_start) -> int:
    """
    Move the company's unapproved entries that ended by ``current_period_end``
    so they start at ``next_period_start``, keeping each entry's duration.

    All entries move in one transaction; on failure none do and
    ``RolloverError`` is raised. Returns the number of entries moved.
    """
    period_end = parse_iso(current_period_end)
    next_start = parse_iso(next_period_start)

    moved = 0
    entry_id = None
    try:
        with scope.atomic():
            entries = (
                scope.queryset(TimeEntry)
                .select_for_update()
                .filter(company_work_items_q(scope, company_id))
                .filter(approval_status__in=UNAPPROVED_STATUSES, end_time__lte=period_end)
                .order_by('start_time')
            )
            for entry in entries:
                entry_id = entry.pk
                duration = entry.end_time - entry.start_time
                scope.queryset(TimeEntry).filter(pk=entry.pk).update(
                    start_time=next_start,
                    end_time=next_start + duration,
                )
                moved += 1
    except DatabaseError as e:
        logger.error(f"Rollover for company {company_id} failed on entry {entry_id}: {str(e)}")
        raise RolloverError(company_id, entry_id, str(e)) from e

    logger.info(f"Rolled over {moved} unapproved time entries for company {company_id} to {next_start.isoformat()}")
    return moved
