"""
Time period persistence and time sheet approval.
"""
import logging
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.utils import timezone

from .generator import generate_time_periods
from .models import TimeEntry, TimePeriod, TimePeriodSettings, TimeSheet, TimeSheetComment
from .periods import parse_iso, to_iso

logger = logging.getLogger(__name__)


def get_active_settings(scope) -> List[TimePeriodSettings]:
    return list(scope.queryset(TimePeriodSettings).filter(is_active=True).order_by('effective_from', 'created_at'))


def generate_and_save_time_periods(scope, start_date, end_date) -> List[TimePeriod]:
    """
    Generate periods from the tenant's active settings and persist them.

    Candidates overlapping a stored period, or one accepted earlier in the
    same run, are skipped so the tenant's periods never overlap.
    """
    window_start, window_end = to_iso(start_date), to_iso(end_date)
    with scope.atomic():
        generated = generate_time_periods(get_active_settings(scope), window_start, window_end)

        taken = [
            (to_iso(period.start_date), to_iso(period.end_date))
            for period in scope.queryset(TimePeriod).overlapping(parse_iso(window_start), parse_iso(window_end))
        ]

        saved = []
        for candidate in generated:
            if any(candidate.overlaps(start, end) for start, end in taken):
                logger.info(
                    f"Skipping period {candidate.start_date} - {candidate.end_date} for tenant "
                    f"{scope.organization_id}: overlaps an existing period"
                )
                continue
            saved.append(scope.create(
                TimePeriod,
                id=candidate.period_id,
                start_date=parse_iso(candidate.start_date),
                end_date=parse_iso(candidate.end_date),
            ))
            taken.append((candidate.start_date, candidate.end_date))

    logger.info(
        f"Saved {len(saved)} of {len(generated)} generated period(s) for tenant {scope.organization_id}"
    )
    return saved


def create_time_period(scope, start_date, end_date) -> TimePeriod:
    """Create a single period after model validation (start < end, no overlap)."""
    period = TimePeriod(
        organization=scope.organization,
        start_date=parse_iso(start_date),
        end_date=parse_iso(end_date),
    )
    with scope.atomic():
        period.full_clean()
        period.save()
    logger.info(f"Created time period {period.pk} for tenant {scope.organization_id}")
    return period


def get_current_time_period(scope, at=None) -> Optional[TimePeriod]:
    moment = parse_iso(at) if at is not None else timezone.now()
    return scope.queryset(TimePeriod).containing(moment).order_by('start_date').first()


def get_latest_time_period(scope) -> Optional[TimePeriod]:
    return scope.queryset(TimePeriod).order_by('-end_date').first()


def fetch_all_time_periods(scope) -> List[TimePeriod]:
    return list(scope.queryset(TimePeriod).order_by('start_date'))


def add_comment_to_time_sheet(scope, time_sheet_id, user, comment: str, is_approver: bool = False) -> TimeSheetComment:
    time_sheet = scope.get(TimeSheet, pk=time_sheet_id)
    return scope.create(
        TimeSheetComment,
        time_sheet=time_sheet,
        user=user,
        comment=comment,
        is_approver=is_approver,
    )


def _set_entries_status(scope, time_sheet, status: str) -> int:
    return scope.queryset(TimeEntry).filter(time_sheet=time_sheet).update(approval_status=status)


def submit_time_sheet(scope, time_sheet_id) -> TimeSheet:
    """Submit a draft (or returned) time sheet and its entries for approval."""
    with scope.atomic():
        time_sheet = scope.queryset(TimeSheet).select_for_update().get(pk=time_sheet_id)
        if time_sheet.approval_status not in ('DRAFT', 'CHANGES_REQUESTED'):
            raise ValidationError(
                f"Time sheet {time_sheet_id} cannot be submitted from status {time_sheet.approval_status}"
            )
        time_sheet.approval_status = 'SUBMITTED'
        time_sheet.submitted_at = timezone.now()
        time_sheet.save(update_fields=['approval_status', 'submitted_at'])
        _set_entries_status(scope, time_sheet, 'SUBMITTED')

    logger.info(f"Time sheet {time_sheet_id} submitted")
    return time_sheet


def _approve(scope, time_sheet, approver) -> None:
    time_sheet.approval_status = 'APPROVED'
    time_sheet.approved_at = timezone.now()
    time_sheet.approved_by = approver
    time_sheet.save(update_fields=['approval_status', 'approved_at', 'approved_by'])
    _set_entries_status(scope, time_sheet, 'APPROVED')
    scope.create(
        TimeSheetComment,
        time_sheet=time_sheet,
        user=approver,
        comment='Time sheet approved',
        is_approver=True,
    )


def approve_time_sheet(scope, time_sheet_id, approver) -> TimeSheet:
    with scope.atomic():
        time_sheet = scope.queryset(TimeSheet).select_for_update().get(pk=time_sheet_id)
        _approve(scope, time_sheet, approver)

    logger.info(f"Time sheet {time_sheet_id} approved by {approver.pk}")
    return time_sheet


def request_changes_for_time_sheet(scope, time_sheet_id, approver) -> TimeSheet:
    """Send a time sheet back to its owner, clearing any earlier approval."""
    with scope.atomic():
        time_sheet = scope.queryset(TimeSheet).select_for_update().get(pk=time_sheet_id)
        time_sheet.approval_status = 'CHANGES_REQUESTED'
        time_sheet.approved_at = None
        time_sheet.approved_by = None
        time_sheet.save(update_fields=['approval_status', 'approved_at', 'approved_by'])
        _set_entries_status(scope, time_sheet, 'CHANGES_REQUESTED')
        scope.create(
            TimeSheetComment,
            time_sheet=time_sheet,
            user=approver,
            comment='Changes requested for time sheet',
            is_approver=True,
        )

    logger.info(f"Changes requested for time sheet {time_sheet_id} by {approver.pk}")
    return time_sheet


def bulk_approve_time_sheets(scope, time_sheet_ids, approver) -> int:
    """
    Approve several submitted time sheets together.

    All or nothing: a sheet that is missing or not submitted fails the
    whole batch with ``ValidationError``.
    """
    time_sheet_ids = list(time_sheet_ids)
    with scope.atomic():
        time_sheets = {
            str(sheet.pk): sheet
            for sheet in scope.queryset(TimeSheet).select_for_update().filter(pk__in=time_sheet_ids)
        }
        for time_sheet_id in time_sheet_ids:
            time_sheet = time_sheets.get(str(time_sheet_id))
            if time_sheet is None:
                raise ValidationError(f"Time sheet {time_sheet_id} not found")
            if time_sheet.approval_status != 'SUBMITTED':
                raise ValidationError(
                    f"Time sheet {time_sheet_id} is {time_sheet.approval_status}, only submitted sheets can be approved"
                )
            _approve(scope, time_sheet, approver)

    logger.info(f"Bulk approved {len(time_sheet_ids)} time sheet(s) by {approver.pk}")
    return len(time_sheet_ids)
