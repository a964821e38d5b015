from datetime import timedelta
from unittest import mock

import pytest
from django.db import DatabaseError
from django.db.models.query import QuerySet

from billing.engine import BillingEngine
from companies.models import Company
from core.exceptions import RolloverError
from projects.models import Ticket
from timetracking.models import TimeEntry
from timetracking.periods import parse_iso

pytestmark = pytest.mark.django_db


@pytest.fixture
def ticket(scope, company):
    return scope.create(Ticket, company=company, title='Server patching')


def log_time(scope, user, ticket, start, end, status='DRAFT'):
    return scope.create(
        TimeEntry,
        work_item_id=ticket.pk,
        work_item_type='ticket',
        user=user,
        start_time=parse_iso(start),
        end_time=parse_iso(end),
        approval_status=status,
    )


def test_unapproved_entry_keeps_its_duration(scope, company, ticket, user):
    entry = log_time(scope, user, ticket, '2024-01-30T08:00:00Z', '2024-01-30T10:30:00Z')

    moved = BillingEngine(scope).rollover_unapproved_time(
        company.pk, '2024-01-31T23:59:59Z', '2024-02-01T00:00:00Z'
    )

    entry.refresh_from_db()
    assert moved == 1
    assert entry.start_time == parse_iso('2024-02-01T00:00:00Z')
    assert entry.end_time == parse_iso('2024-02-01T02:30:00Z')
    assert entry.end_time - entry.start_time == timedelta(hours=2, minutes=30)


@pytest.mark.parametrize('status', ['DRAFT', 'SUBMITTED', 'CHANGES_REQUESTED'])
def test_every_unapproved_status_is_moved(scope, company, ticket, user, status):
    log_time(scope, user, ticket, '2024-01-10T08:00:00Z', '2024-01-10T09:00:00Z', status=status)

    assert BillingEngine(scope).rollover_unapproved_time(company.pk, '2024-02-01', '2024-02-01') == 1


def test_entries_left_in_place(scope, company, ticket, user):
    approved = log_time(scope, user, ticket, '2024-01-10T08:00:00Z', '2024-01-10T09:00:00Z', status='APPROVED')
    late = log_time(scope, user, ticket, '2024-02-03T08:00:00Z', '2024-02-03T09:00:00Z')
    other_ticket = scope.create(Ticket, company=scope.create(Company, company_name='Umbrella'), title='Email')
    other_company = log_time(scope, user, other_ticket, '2024-01-10T08:00:00Z', '2024-01-10T09:00:00Z')

    moved = BillingEngine(scope).rollover_unapproved_time(company.pk, '2024-02-01', '2024-02-01')

    assert moved == 0
    for entry, start in ((approved, '2024-01-10T08:00:00Z'), (late, '2024-02-03T08:00:00Z'),
                         (other_company, '2024-01-10T08:00:00Z')):
        entry.refresh_from_db()
        assert entry.start_time == parse_iso(start)


def test_failure_rolls_back_every_entry(scope, company, ticket, user):
    first = log_time(scope, user, ticket, '2024-01-10T08:00:00Z', '2024-01-10T09:00:00Z')
    log_time(scope, user, ticket, '2024-01-11T08:00:00Z', '2024-01-11T09:00:00Z')

    real_update = QuerySet.update
    calls = []

    def failing_update(self, **kwargs):
        calls.append(kwargs)
        if len(calls) == 2:
            raise DatabaseError('connection lost')
        return real_update(self, **kwargs)

    with mock.patch('django.db.models.query.QuerySet.update', failing_update):
        with pytest.raises(RolloverError) as exc_info:
            BillingEngine(scope).rollover_unapproved_time(company.pk, '2024-02-01', '2024-02-01')

    first.refresh_from_db()
    assert first.start_time == parse_iso('2024-01-10T08:00:00Z')
    assert exc_info.value.company_id == company.pk
