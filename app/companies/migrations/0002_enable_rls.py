# Enable Row Level Security for companies app
from django.db import migrations
from core.db import execute_rls_migration, reverse_rls_migration


TABLES = [
    'companies_company',
    'companies_companybillingcycle',
    'companies_taxrate',
]


def enable_rls_for_companies(apps, schema_editor):
    """Enable RLS for all companies tables."""
    for table in TABLES:
        execute_rls_migration(table, using=schema_editor.connection)


def reverse_rls_for_companies(apps, schema_editor):
    """Disable RLS (reverse migration)."""
    for table in TABLES:
        reverse_rls_migration(table, using=schema_editor.connection)


class Migration(migrations.Migration):

    dependencies = [
        ('companies', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(
            enable_rls_for_companies,
            reverse_rls_for_companies
        ),
    ]
