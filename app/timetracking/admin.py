"""
Admin configuration for timetracking app.
"""
from django.contrib import admin
from .models import TimePeriodSettings, TimePeriod, TimeSheet, TimeSheetComment, TimeEntry


class TimeSheetCommentInline(admin.TabularInline):
    model = TimeSheetComment
    extra = 0
    fields = ['user', 'comment', 'is_approver', 'created_at']
    readonly_fields = ['created_at']


class TimeEntryInline(admin.TabularInline):
    model = TimeEntry
    extra = 0
    fields = ['work_item_type', 'work_item_id', 'service', 'start_time', 'end_time', 'approval_status']


@admin.register(TimePeriodSettings)
class TimePeriodSettingsAdmin(admin.ModelAdmin):
    list_display = ['organization', 'frequency', 'frequency_unit', 'effective_from', 'effective_to', 'is_active']
    list_filter = ['frequency_unit', 'is_active', 'organization']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('organization', 'frequency', 'frequency_unit', 'is_active')
        }),
        ('Effective Range', {
            'fields': ('effective_from', 'effective_to')
        }),
        ('Week / Month Alignment', {
            'fields': ('start_day', 'end_day')
        }),
        ('Year Alignment', {
            'fields': ('start_month', 'start_day_of_month', 'end_month', 'end_day_of_month'),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


@admin.register(TimePeriod)
class TimePeriodAdmin(admin.ModelAdmin):
    list_display = ['organization', 'start_date', 'end_date', 'created_at']
    list_filter = ['organization']
    date_hierarchy = 'start_date'


@admin.register(TimeSheet)
class TimeSheetAdmin(admin.ModelAdmin):
    list_display = ['user', 'period', 'approval_status', 'submitted_at', 'approved_at', 'approved_by']
    list_filter = ['approval_status', 'organization']
    search_fields = ['user__username', 'user__email']
    inlines = [TimeEntryInline, TimeSheetCommentInline]


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ['user', 'work_item_type', 'service', 'start_time', 'end_time', 'billable_duration', 'approval_status']
    list_filter = ['approval_status', 'work_item_type', 'organization']
    search_fields = ['notes', 'user__username']
    date_hierarchy = 'start_time'
