"""
Work items time can be logged against: tickets and project tasks.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _
from core.db import BaseTenantModel


class Ticket(BaseTenantModel):
    """Service ticket raised for a company."""

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='tickets')
    ticket_number = models.CharField(_('ticket number'), max_length=50, blank=True)
    title = models.CharField(_('title'), max_length=300)
    is_closed = models.BooleanField(_('closed'), default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Ticket')
        verbose_name_plural = _('Tickets')
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Project(BaseTenantModel):
    """Project delivered to a company."""

    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='projects')
    project_name = models.CharField(_('project name'), max_length=200)
    start_date = models.DateTimeField(_('start date'), null=True, blank=True)
    end_date = models.DateTimeField(_('end date'), null=True, blank=True)
    is_inactive = models.BooleanField(_('inactive'), default=False)

    class Meta:
        verbose_name = _('Project')
        verbose_name_plural = _('Projects')
        ordering = ['project_name']

    def __str__(self):
        return self.project_name


class ProjectPhase(BaseTenantModel):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='phases')
    phase_name = models.CharField(_('phase name'), max_length=200)
    order_number = models.PositiveIntegerField(_('order'), default=0)

    class Meta:
        verbose_name = _('Project Phase')
        verbose_name_plural = _('Project Phases')
        ordering = ['project', 'order_number']

    def __str__(self):
        return f"{self.project.project_name} - {self.phase_name}"


class ProjectTask(BaseTenantModel):
    phase = models.ForeignKey(ProjectPhase, on_delete=models.CASCADE, related_name='tasks')
    task_name = models.CharField(_('task name'), max_length=300)
    estimated_hours = models.DecimalField(_('estimated hours'), max_digits=8, decimal_places=2, null=True, blank=True)

    class Meta:
        verbose_name = _('Project Task')
        verbose_name_plural = _('Project Tasks')
        ordering = ['phase', 'task_name']

    def __str__(self):
        return self.task_name
