# Enable Row Level Security for timetracking app
from django.db import migrations
from core.db import execute_rls_migration, reverse_rls_migration


TABLES = [
    'timetracking_timeperiodsettings',
    'timetracking_timeperiod',
    'timetracking_timesheet',
    'timetracking_timesheetcomment',
    'timetracking_timeentry',
]


def enable_rls_for_timetracking(apps, schema_editor):
    """Enable RLS for all timetracking tables."""
    for table in TABLES:
        execute_rls_migration(table, using=schema_editor.connection)


def reverse_rls_for_timetracking(apps, schema_editor):
    """Disable RLS (reverse migration)."""
    for table in TABLES:
        reverse_rls_migration(table, using=schema_editor.connection)


class Migration(migrations.Migration):

    dependencies = [
        ('timetracking', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(
            enable_rls_for_timetracking,
            reverse_rls_for_timetracking
        ),
    ]
