# Enable Row Level Security for billing app
from django.db import migrations
from core.db import execute_rls_migration, reverse_rls_migration


TABLES = [
    'billing_servicecategory',
    'billing_servicecatalog',
    'billing_billingplan',
    'billing_planservice',
    'billing_companybillingplan',
    'billing_bucketplan',
    'billing_bucketusage',
    'billing_usagetracking',
    'billing_discount',
    'billing_plandiscount',
]


def enable_rls_for_billing(apps, schema_editor):
    """Enable RLS for all billing tables."""
    for table in TABLES:
        execute_rls_migration(table, using=schema_editor.connection)


def reverse_rls_for_billing(apps, schema_editor):
    """Disable RLS (reverse migration)."""
    for table in TABLES:
        reverse_rls_migration(table, using=schema_editor.connection)


class Migration(migrations.Migration):

    dependencies = [
        ('billing', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(
            enable_rls_for_billing,
            reverse_rls_for_billing
        ),
    ]
