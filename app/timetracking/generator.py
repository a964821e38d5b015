"""
Time-period generation from tenant period settings.

``generate_time_periods`` is pure: it reads settings records and returns
``GeneratedPeriod`` values without touching the database. Boundaries are
canonical UTC strings (see ``timetracking.periods``) and are compared as
strings throughout.

Periods are half-open ``[start_date, end_date)``. For day and week units the
configured arithmetic yields the last day inside the period, so the emitted
end is the day after it.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from core.exceptions import ConfigurationError
from .periods import (
    add_days,
    align_to_month_day,
    align_to_weekday,
    days_in_month,
    first_day_of_month,
    month_day,
    nearest_midnight,
    parse_iso,
    to_iso,
)

logger = logging.getLogger(__name__)

DAY = 'day'
WEEK = 'week'
MONTH = 'month'
YEAR = 'year'

FREQUENCY_UNITS = (DAY, WEEK, MONTH, YEAR)

YEAR_FIELDS = ('start_month', 'start_day_of_month', 'end_month', 'end_day_of_month')


@dataclass(frozen=True)
class GeneratedPeriod:
    period_id: str
    start_date: str
    end_date: str
    tenant: Optional[str] = None

    def overlaps(self, start_date: str, end_date: str) -> bool:
        return self.start_date < end_date and start_date < self.end_date


def validate_setting(setting) -> None:
    """
    Raise ``ConfigurationError`` when ``setting`` cannot generate periods.
    """
    unit = setting.frequency_unit
    if unit not in FREQUENCY_UNITS:
        raise ConfigurationError(f"Unsupported frequency_unit: {unit}")

    frequency = setting.frequency
    if frequency is not None and frequency < 1:
        raise ConfigurationError(f"frequency must be at least 1, got {frequency}")

    if not setting.effective_from:
        raise ConfigurationError("effective_from is required")

    if unit == YEAR:
        missing = [field for field in YEAR_FIELDS if getattr(setting, field, None) is None]
        if missing:
            raise ConfigurationError(
                'start_month, start_day_of_month, end_month, end_day_of_month '
                'are required for yearly frequency.'
            )
        for field in ('start_month', 'end_month'):
            if not 1 <= getattr(setting, field) <= 12:
                raise ConfigurationError(f"{field} must be between 1 and 12")
        for field in ('start_day_of_month', 'end_day_of_month'):
            if not 1 <= getattr(setting, field) <= 31:
                raise ConfigurationError(f"{field} must be between 1 and 31")

    elif unit == WEEK:
        for field in ('start_day', 'end_day'):
            value = getattr(setting, field, None)
            if value is not None and not 1 <= value <= 7:
                raise ConfigurationError(f"{field} must be a day of week between 1 and 7")

    elif unit == MONTH:
        for field in ('start_day', 'end_day'):
            value = getattr(setting, field, None)
            if value is not None and not 1 <= value <= 31:
                raise ConfigurationError(f"{field} must be a day of month between 1 and 31")


def generate_time_periods(settings: Iterable, start_date, end_date) -> List[GeneratedPeriod]:
    """
    Union of the periods every active setting generates inside
    ``[start_date, end_date)``, in settings order.

    Overlap between periods of different settings is not resolved here.
    """
    window_start = to_iso(start_date)
    window_end = to_iso(end_date)

    periods: List[GeneratedPeriod] = []
    for setting in settings:
        if getattr(setting, 'is_active', True) is False:
            continue
        generated = _generate_for_setting(setting, window_start, window_end)
        logger.debug(
            f"Setting {getattr(setting, 'pk', None)} generated {len(generated)} "
            f"period(s) between {window_start} and {window_end}"
        )
        periods.extend(generated)

    return periods


def _generate_for_setting(setting, window_start: str, window_end: str) -> List[GeneratedPeriod]:
    validate_setting(setting)

    unit = setting.frequency_unit
    frequency = setting.frequency or 1
    effective_from = to_iso(setting.effective_from)
    effective_to = to_iso(setting.effective_to) if setting.effective_to else None
    tenant = getattr(setting, 'organization_id', None)
    if tenant is not None:
        tenant = str(tenant)

    current = max(window_start, effective_from)

    # Year periods are anchored by their configured month/day instead.
    if unit == WEEK and setting.start_day is not None:
        current = align_to_weekday(current, setting.start_day)
    elif unit == MONTH and setting.start_day:
        current = align_to_month_day(current, setting.start_day)

    periods = []
    while current < window_end:
        if effective_to and current > effective_to:
            break

        period_start, period_end = _period_bounds(setting, unit, frequency, current)

        if period_start > window_end or period_end > window_end:
            break
        if effective_to and (period_start > effective_to or period_end > effective_to):
            break

        periods.append(GeneratedPeriod(
            period_id=str(uuid.uuid4()),
            start_date=nearest_midnight(period_start),
            end_date=nearest_midnight(period_end),
            tenant=tenant,
        ))

        current = period_end

    return periods


def _period_bounds(setting, unit: str, frequency: int, current: str) -> Tuple[str, str]:
    if unit == DAY:
        last_day = add_days(current, frequency - 1)
        return current, add_days(last_day, 1)

    if unit == WEEK:
        last_day = add_days(current, frequency * 7 - 1)
        if setting.end_day is not None:
            aligned = align_to_weekday(last_day, setting.end_day)
            if aligned < current:
                aligned = add_days(aligned, 7)
            last_day = aligned
        return current, add_days(last_day, 1)

    if unit == MONTH:
        if setting.end_day:
            return current, _month_end_boundary(current, frequency, setting.end_day)
        return current, first_day_of_month(current, frequency)

    return _year_bounds(setting, frequency, current)


def _month_end_boundary(start: str, frequency: int, end_day: int) -> str:
    end = align_to_month_day(start, end_day)
    if end <= start:
        end = align_to_month_day(first_day_of_month(end, 1), end_day)
    for _ in range(frequency - 1):
        end = align_to_month_day(first_day_of_month(end, 1), end_day)
    return end


def _year_bounds(setting, frequency: int, current: str) -> Tuple[str, str]:
    year = parse_iso(current).year
    start = _year_start(year, setting.start_month, setting.start_day_of_month)
    if start < current:
        year += 1
        start = _year_start(year, setting.start_month, setting.start_day_of_month)

    # First end occurrence after the start closes the first year; each
    # further year of the frequency adds one.
    end_year = year
    if month_day(end_year, setting.end_month, setting.end_day_of_month, end_of_day=True) < start:
        end_year += 1
    end = month_day(
        end_year + frequency - 1, setting.end_month, setting.end_day_of_month, end_of_day=True
    )

    return start, end


def _year_start(year: int, month: int, day: int) -> str:
    """
    Midnight on ``month``/``day`` of ``year``. A day past the month's end
    (Feb 29 outside leap years) starts on the 1st of the following month.
    """
    if day > days_in_month(year, month):
        return first_day_of_month(month_day(year, month, 1), 1)
    return month_day(year, month, day)
