import pytest

from companies.models import Company
from projects.models import Project, ProjectPhase, ProjectTask, Ticket
from projects.selectors import company_work_items_q
from timetracking.models import TimeEntry
from timetracking.periods import parse_iso

pytestmark = pytest.mark.django_db


def log_time(scope, user, work_item, work_item_type):
    return scope.create(
        TimeEntry,
        work_item_id=work_item.pk,
        work_item_type=work_item_type,
        user=user,
        start_time=parse_iso('2024-01-10T09:00:00Z'),
        end_time=parse_iso('2024-01-10T10:00:00Z'),
    )


def test_matches_company_tickets_and_project_tasks(scope, company, user):
    ticket = scope.create(Ticket, company=company, title='Laptop setup')
    project = scope.create(Project, company=company, project_name='Migration')
    phase = scope.create(ProjectPhase, project=project, phase_name='Discovery')
    task = scope.create(ProjectTask, phase=phase, task_name='Inventory')
    on_ticket = log_time(scope, user, ticket, 'ticket')
    on_task = log_time(scope, user, task, 'project_task')

    other = scope.create(Company, company_name='Umbrella')
    log_time(scope, user, scope.create(Ticket, company=other, title='Other'), 'ticket')
    # Right id, wrong type.
    log_time(scope, user, ticket, 'project_task')

    matched = scope.queryset(TimeEntry).filter(company_work_items_q(scope, company.pk))

    assert set(matched) == {on_ticket, on_task}
