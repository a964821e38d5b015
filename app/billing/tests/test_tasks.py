import pytest

from billing.tasks import calculate_company_billing, rollover_unapproved_time
from projects.models import Ticket
from timetracking.models import TimeEntry
from timetracking.periods import parse_iso

pytestmark = pytest.mark.django_db


def test_calculate_company_billing_returns_json_data(organization, company, fixed_plan):
    result = calculate_company_billing.delay(
        str(organization.pk), str(company.pk), '2024-01-01', '2024-02-01'
    ).get()

    assert float(result['final_amount']) == 100
    assert result['charges'][0]['type'] == 'fixed'


def test_rollover_task(scope, organization, company, user):
    ticket = scope.create(Ticket, company=company, title='Firewall rules')
    scope.create(
        TimeEntry,
        work_item_id=ticket.pk,
        work_item_type='ticket',
        user=user,
        start_time=parse_iso('2024-01-30T08:00:00Z'),
        end_time=parse_iso('2024-01-30T09:00:00Z'),
    )

    result = rollover_unapproved_time.delay(
        str(organization.pk), str(company.pk), '2024-02-01', '2024-02-01'
    ).get()

    assert result == {'status': 'success', 'entries_moved': 1}
