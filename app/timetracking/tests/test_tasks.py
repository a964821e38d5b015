import pytest

from core.db import TenantScope
from timetracking.models import TimePeriod, TimePeriodSettings
from timetracking.periods import parse_iso
from timetracking.tasks import generate_upcoming_time_periods

pytestmark = pytest.mark.django_db


def test_generates_periods_for_each_active_organization(settings, scope, other_organization):
    settings.TIME_PERIOD_HORIZON_DAYS = 30
    scope.create(TimePeriodSettings, frequency=1, frequency_unit='day', effective_from=parse_iso('2020-01-01'))
    TenantScope(other_organization).create(
        TimePeriodSettings, frequency=1, frequency_unit='week', effective_from=parse_iso('2020-01-01'),
    )

    result = generate_upcoming_time_periods.delay().get()

    assert result['status'] == 'success'
    assert scope.queryset(TimePeriod).count() == 30
    assert TenantScope(other_organization).queryset(TimePeriod).count() == 4
    assert result['periods_created'] == 34


def test_rerun_creates_nothing_new(scope):
    scope.create(TimePeriodSettings, frequency=1, frequency_unit='day', effective_from=parse_iso('2020-01-01'))

    generate_upcoming_time_periods.delay().get()
    result = generate_upcoming_time_periods.delay().get()

    assert result['periods_created'] == 0


def test_invalid_settings_are_reported(scope):
    scope.create(TimePeriodSettings, frequency=1, frequency_unit='year', effective_from=parse_iso('2020-01-01'))

    result = generate_upcoming_time_periods.delay().get()

    assert result['failed_organizations'] == [str(scope.organization_id)]
