# Generated migration for timetracking app
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


APPROVAL_STATUSES = [
    ('DRAFT', 'Draft'),
    ('SUBMITTED', 'Submitted'),
    ('APPROVED', 'Approved'),
    ('CHANGES_REQUESTED', 'Changes Requested'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('organizations', '0001_initial'),
        ('billing', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TimePeriodSettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('frequency', models.PositiveIntegerField(default=1, verbose_name='frequency')),
                ('frequency_unit', models.CharField(choices=[('day', 'Day'), ('week', 'Week'), ('month', 'Month'), ('year', 'Year')], max_length=10, verbose_name='frequency unit')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('effective_from', models.DateTimeField(verbose_name='effective from')),
                ('effective_to', models.DateTimeField(blank=True, null=True, verbose_name='effective to')),
                ('start_day', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='start day')),
                ('end_day', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='end day')),
                ('start_month', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='start month')),
                ('start_day_of_month', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='start day of month')),
                ('end_month', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='end month')),
                ('end_day_of_month', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='end day of month')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timetracking_timeperiodsettings_set', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Time Period Settings',
                'verbose_name_plural': 'Time Period Settings',
                'ordering': ['-effective_from'],
            },
        ),
        migrations.CreateModel(
            name='TimePeriod',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('start_date', models.DateTimeField(verbose_name='start date')),
                ('end_date', models.DateTimeField(verbose_name='end date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timetracking_timeperiod_set', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Time Period',
                'verbose_name_plural': 'Time Periods',
                'ordering': ['start_date'],
            },
        ),
        migrations.CreateModel(
            name='TimeSheet',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('approval_status', models.CharField(choices=APPROVAL_STATUSES, default='DRAFT', max_length=20, verbose_name='approval status')),
                ('submitted_at', models.DateTimeField(blank=True, null=True, verbose_name='submitted at')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='approved at')),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_time_sheets', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timetracking_timesheet_set', to='organizations.organization')),
                ('period', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_sheets', to='timetracking.timeperiod')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_sheets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Time Sheet',
                'verbose_name_plural': 'Time Sheets',
                'ordering': ['-period__start_date'],
                'unique_together': {('period', 'user')},
            },
        ),
        migrations.CreateModel(
            name='TimeSheetComment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('comment', models.TextField(verbose_name='comment')),
                ('is_approver', models.BooleanField(default=False, verbose_name='left by approver')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timetracking_timesheetcomment_set', to='organizations.organization')),
                ('time_sheet', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='timetracking.timesheet')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_sheet_comments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Time Sheet Comment',
                'verbose_name_plural': 'Time Sheet Comments',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='TimeEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('work_item_id', models.UUIDField(verbose_name='work item')),
                ('work_item_type', models.CharField(choices=[('ticket', 'Ticket'), ('project_task', 'Project Task')], max_length=20, verbose_name='work item type')),
                ('start_time', models.DateTimeField(verbose_name='start time')),
                ('end_time', models.DateTimeField(verbose_name='end time')),
                ('billable_duration', models.PositiveIntegerField(default=0, verbose_name='billable duration (minutes)')),
                ('notes', models.TextField(blank=True, verbose_name='notes')),
                ('approval_status', models.CharField(choices=APPROVAL_STATUSES, default='DRAFT', max_length=20, verbose_name='approval status')),
                ('tax_region', models.CharField(blank=True, max_length=100, verbose_name='tax region')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timetracking_timeentry_set', to='organizations.organization')),
                ('service', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='time_entries', to='billing.servicecatalog')),
                ('time_sheet', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entries', to='timetracking.timesheet')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Time Entry',
                'verbose_name_plural': 'Time Entries',
                'ordering': ['-start_time'],
                'indexes': [models.Index(fields=['organization', 'approval_status', 'end_time'], name='timeentry_status_end_idx')],
            },
        ),
    ]
