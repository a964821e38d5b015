# Enable Row Level Security for projects app
from django.db import migrations
from core.db import execute_rls_migration, reverse_rls_migration


TABLES = [
    'projects_ticket',
    'projects_project',
    'projects_projectphase',
    'projects_projecttask',
]


def enable_rls_for_projects(apps, schema_editor):
    """Enable RLS for all projects tables."""
    for table in TABLES:
        execute_rls_migration(table, using=schema_editor.connection)


def reverse_rls_for_projects(apps, schema_editor):
    """Disable RLS (reverse migration)."""
    for table in TABLES:
        reverse_rls_migration(table, using=schema_editor.connection)


class Migration(migrations.Migration):

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(
            enable_rls_for_projects,
            reverse_rls_for_projects
        ),
    ]
