"""
Admin configuration for projects app.
"""
from django.contrib import admin
from .models import Ticket, Project, ProjectPhase, ProjectTask


class ProjectPhaseInline(admin.TabularInline):
    model = ProjectPhase
    extra = 0
    fields = ['organization', 'phase_name', 'order_number']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['project_name', 'company', 'start_date', 'end_date', 'is_inactive']
    list_filter = ['is_inactive', 'organization']
    search_fields = ['project_name', 'company__company_name']
    inlines = [ProjectPhaseInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ['title', 'ticket_number', 'company', 'is_closed', 'created_at']
    list_filter = ['is_closed', 'organization']
    search_fields = ['title', 'ticket_number', 'company__company_name']


admin.site.register(ProjectTask)
