"""
Time tracking models: period settings, periods, time sheets and entries.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.db import BaseTenantModel, TenantQuerySet
from core.exceptions import ConfigurationError
from .generator import FREQUENCY_UNITS, validate_setting


APPROVAL_STATUSES = [
    ('DRAFT', _('Draft')),
    ('SUBMITTED', _('Submitted')),
    ('APPROVED', _('Approved')),
    ('CHANGES_REQUESTED', _('Changes Requested')),
]

UNAPPROVED_STATUSES = ['DRAFT', 'SUBMITTED', 'CHANGES_REQUESTED']


class TimePeriodSettings(BaseTenantModel):
    """
    Tenant configuration describing how recurring time periods are generated.

    Week and month units align with ``start_day``/``end_day`` (day of week
    1-7 Monday..Sunday, or day of month 1-31). The year unit uses the
    explicit month/day pairs. The day unit has no alignment fields.
    """

    FREQUENCY_UNIT_CHOICES = [(unit, unit.title()) for unit in FREQUENCY_UNITS]

    frequency = models.PositiveIntegerField(_('frequency'), default=1)
    frequency_unit = models.CharField(_('frequency unit'), max_length=10, choices=FREQUENCY_UNIT_CHOICES)
    is_active = models.BooleanField(_('active'), default=True)
    effective_from = models.DateTimeField(_('effective from'))
    effective_to = models.DateTimeField(_('effective to'), null=True, blank=True)

    # Week and month alignment
    start_day = models.PositiveSmallIntegerField(_('start day'), null=True, blank=True)
    end_day = models.PositiveSmallIntegerField(_('end day'), null=True, blank=True)

    # Year alignment
    start_month = models.PositiveSmallIntegerField(_('start month'), null=True, blank=True)
    start_day_of_month = models.PositiveSmallIntegerField(_('start day of month'), null=True, blank=True)
    end_month = models.PositiveSmallIntegerField(_('end month'), null=True, blank=True)
    end_day_of_month = models.PositiveSmallIntegerField(_('end day of month'), null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Time Period Settings')
        verbose_name_plural = _('Time Period Settings')
        ordering = ['-effective_from']

    def __str__(self):
        return f"Every {self.frequency} {self.frequency_unit}(s) from {self.effective_from:%Y-%m-%d}"

    def clean(self):
        super().clean()
        try:
            validate_setting(self)
        except ConfigurationError as e:
            raise ValidationError(str(e))

        if self.effective_to and self.effective_from and self.effective_to <= self.effective_from:
            raise ValidationError({'effective_to': _('Effective to must be after effective from.')})

        # Only the alignment fields of the chosen unit may be set.
        if self.frequency_unit != 'year':
            stray = [f for f in ('start_month', 'start_day_of_month', 'end_month', 'end_day_of_month')
                     if getattr(self, f) is not None]
            if stray:
                raise ValidationError(_('Year alignment fields are only valid for yearly frequency.'))
        if self.frequency_unit in ('day', 'year') and (self.start_day is not None or self.end_day is not None):
            raise ValidationError(_('start_day and end_day are only valid for weekly or monthly frequency.'))


class TimePeriodQuerySet(TenantQuerySet):

    def overlapping(self, start_date, end_date):
        return self.filter(start_date__lt=end_date, end_date__gt=start_date)

    def containing(self, moment):
        return self.filter(start_date__lte=moment, end_date__gt=moment)


class TimePeriod(BaseTenantModel):
    """
    A generated, persisted time period ``[start_date, end_date)``.
    """

    start_date = models.DateTimeField(_('start date'))
    end_date = models.DateTimeField(_('end date'))

    created_at = models.DateTimeField(auto_now_add=True)

    objects = TimePeriodQuerySet.as_manager()

    class Meta:
        verbose_name = _('Time Period')
        verbose_name_plural = _('Time Periods')
        ordering = ['start_date']

    def __str__(self):
        return f"{self.start_date:%Y-%m-%d} - {self.end_date:%Y-%m-%d}"

    def clean(self):
        super().clean()
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValidationError(_('Period start must be before its end.'))

        overlapping = TimePeriod.objects.for_tenant(self.organization_id).overlapping(
            self.start_date, self.end_date
        ).exclude(pk=self.pk)
        if overlapping.exists():
            raise ValidationError(_('Period overlaps an existing time period.'))


class TimeSheet(BaseTenantModel):
    """
    A user's time sheet for one period, approved as a unit.
    """

    period = models.ForeignKey(TimePeriod, on_delete=models.CASCADE, related_name='time_sheets')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_sheets')
    approval_status = models.CharField(_('approval status'), max_length=20, choices=APPROVAL_STATUSES, default='DRAFT')

    submitted_at = models.DateTimeField(_('submitted at'), null=True, blank=True)
    approved_at = models.DateTimeField(_('approved at'), null=True, blank=True)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='approved_time_sheets'
    )

    class Meta:
        verbose_name = _('Time Sheet')
        verbose_name_plural = _('Time Sheets')
        unique_together = ['period', 'user']
        ordering = ['-period__start_date']

    def __str__(self):
        return f"{self.user} - {self.period} ({self.approval_status})"

    @property
    def is_approved(self):
        return self.approval_status == 'APPROVED'


class TimeSheetComment(BaseTenantModel):
    """
    Comment left on a time sheet by its owner or an approver.
    """

    time_sheet = models.ForeignKey(TimeSheet, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_sheet_comments')
    comment = models.TextField(_('comment'))
    is_approver = models.BooleanField(_('left by approver'), default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Time Sheet Comment')
        verbose_name_plural = _('Time Sheet Comments')
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user}: {self.comment[:50]}"


class TimeEntry(BaseTenantModel):
    """
    Time logged by a user against a ticket or project task.
    """

    WORK_ITEM_TYPES = [
        ('ticket', _('Ticket')),
        ('project_task', _('Project Task')),
    ]

    work_item_id = models.UUIDField(_('work item'))
    work_item_type = models.CharField(_('work item type'), max_length=20, choices=WORK_ITEM_TYPES)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_entries')
    time_sheet = models.ForeignKey(
        TimeSheet, on_delete=models.SET_NULL, null=True, blank=True, related_name='entries'
    )
    service = models.ForeignKey(
        'billing.ServiceCatalog', on_delete=models.PROTECT, null=True, blank=True, related_name='time_entries'
    )

    start_time = models.DateTimeField(_('start time'))
    end_time = models.DateTimeField(_('end time'))
    billable_duration = models.PositiveIntegerField(_('billable duration (minutes)'), default=0)
    notes = models.TextField(_('notes'), blank=True)

    approval_status = models.CharField(_('approval status'), max_length=20, choices=APPROVAL_STATUSES, default='DRAFT')
    tax_region = models.CharField(_('tax region'), max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Time Entry')
        verbose_name_plural = _('Time Entries')
        ordering = ['-start_time']
        indexes = [
            models.Index(fields=['organization', 'approval_status', 'end_time'], name='timeentry_status_end_idx'),
        ]

    def __str__(self):
        return f"{self.user} {self.start_time:%Y-%m-%d %H:%M} ({self.approval_status})"

    def clean(self):
        super().clean()
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({'end_time': _('End time must be after start time.')})

    @property
    def duration(self):
        return self.end_time - self.start_time

    def save(self, *args, **kwargs):
        if not self.billable_duration and self.start_time and self.end_time:
            self.billable_duration = int(self.duration.total_seconds() // 60)
        super().save(*args, **kwargs)
