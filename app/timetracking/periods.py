"""
Calendar arithmetic on UTC timestamps.

Every function accepts an ISO 8601 string, a ``datetime`` or a ``date`` and
returns the canonical string form ``YYYY-MM-DDTHH:MM:SS.sssZ``. Canonical
strings sort chronologically, so period boundaries are compared with plain
``<`` and ``>``. Naive values are taken to be UTC.
"""
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Union

from dateutil.relativedelta import relativedelta
from django.utils.dateparse import parse_date, parse_datetime

UTC = dt_timezone.utc

Timestamp = Union[str, datetime, date]

_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def parse_iso(value: Timestamp) -> datetime:
    """Parse ``value`` into an aware UTC ``datetime``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                raise ValueError(f"Invalid ISO 8601 timestamp: {value!r}")
            parsed = datetime.combine(day, time.min)
    else:
        raise TypeError(f"Expected ISO string, datetime or date, got {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def to_iso(value: Timestamp) -> str:
    """Canonical UTC string with millisecond precision."""
    parsed = parse_iso(value)
    return f"{parsed:%Y-%m-%dT%H:%M:%S}.{parsed.microsecond // 1000:03d}Z"


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def add_days(value: Timestamp, days: int) -> str:
    return to_iso(parse_iso(value) + timedelta(days=days))


def add_months(value: Timestamp, months: int) -> str:
    """Add calendar months, clamping the day to the target month's length."""
    return to_iso(parse_iso(value) + relativedelta(months=months))


def first_day_of_month(value: Timestamp, months_to_advance: int = 0) -> str:
    """Midnight on the 1st of the month ``months_to_advance`` after ``value``."""
    parsed = parse_iso(value).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return to_iso(parsed + relativedelta(months=months_to_advance))


def month_day(year: int, month: int, day: int, end_of_day: bool = False) -> str:
    """
    ``year-month-day`` with ``day`` clamped to the month's length.

    With ``end_of_day`` the time is 23:59:59.999, otherwise midnight.
    """
    clamped = min(day, days_in_month(year, month))
    moment = time(23, 59, 59, 999000) if end_of_day else time.min
    return to_iso(datetime.combine(date(year, month, clamped), moment, tzinfo=UTC))


def day_of_week(value: Timestamp) -> int:
    """Day of week, 0 = Sunday ... 6 = Saturday."""
    return parse_iso(value).isoweekday() % 7


def align_to_weekday(value: Timestamp, target_weekday: int) -> str:
    """
    Advance to the next ``target_weekday`` (0-6, Sunday = 0; 7 is also
    accepted for Sunday). A date already on that weekday is unchanged.
    """
    days_to_add = (target_weekday - day_of_week(value)) % 7
    return add_days(value, days_to_add)


def align_to_month_day(value: Timestamp, target_day: int) -> str:
    """
    Midnight on ``target_day`` of the month of ``value``, clamped to the
    month's last day. Moves to the next month when that falls before
    ``value``. The comparison includes the time of day, so
    ``2024-01-15T10:00Z`` aligned to 15 gives Feb 15.
    """
    if not 1 <= target_day <= 31:
        raise ValueError(f"Day of month out of range: {target_day}")

    parsed = parse_iso(value)
    aligned = month_day(parsed.year, parsed.month, target_day)
    if aligned < to_iso(parsed):
        following = parse_iso(first_day_of_month(parsed, 1))
        aligned = month_day(following.year, following.month, target_day)
    return aligned


def nearest_midnight(value: Timestamp) -> str:
    """Round to the closer adjacent midnight; ties go to the previous one."""
    parsed = parse_iso(value)
    previous_midnight = parsed.replace(hour=0, minute=0, second=0, microsecond=0)
    next_midnight = previous_midnight + timedelta(days=1)

    if parsed - previous_midnight <= next_midnight - parsed:
        return to_iso(previous_midnight)
    return to_iso(next_midnight)
