"""
Query helpers resolving which work items belong to a company.
"""
from django.db.models import Q

from .models import Ticket, ProjectTask


def company_work_items_q(scope, company_id, prefix: str = '') -> Q:
    """
    ``Q`` matching rows whose ``work_item_id``/``work_item_type`` point at a
    ticket or project task of the company.
    """
    ticket_ids = scope.queryset(Ticket).filter(company_id=company_id).values('pk')
    task_ids = scope.queryset(ProjectTask).filter(phase__project__company_id=company_id).values('pk')
    return (
        Q(**{f'{prefix}work_item_type': 'ticket', f'{prefix}work_item_id__in': ticket_ids})
        | Q(**{f'{prefix}work_item_type': 'project_task', f'{prefix}work_item_id__in': task_ids})
    )
