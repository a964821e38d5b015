# Generated migration for companies app
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('company_name', models.CharField(max_length=200, verbose_name='company name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email')),
                ('phone_no', models.CharField(blank=True, max_length=50, verbose_name='phone number')),
                ('url', models.URLField(blank=True, verbose_name='website')),
                ('address', models.TextField(blank=True, verbose_name='address')),
                ('client_type', models.CharField(blank=True, max_length=50, verbose_name='client type')),
                ('billing_cycle', models.CharField(blank=True, choices=[('weekly', 'Weekly'), ('bi-weekly', 'Bi-Weekly'), ('monthly', 'Monthly'), ('quarterly', 'Quarterly'), ('semi-annually', 'Semi-Annually'), ('annually', 'Annually')], max_length=20, verbose_name='billing cycle')),
                ('payment_terms', models.CharField(blank=True, max_length=50, verbose_name='payment terms')),
                ('credit_limit', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='credit limit')),
                ('tax_region', models.CharField(blank=True, max_length=100, verbose_name='tax region')),
                ('is_tax_exempt', models.BooleanField(default=False, verbose_name='tax exempt')),
                ('tax_exemption_certificate', models.CharField(blank=True, max_length=200, verbose_name='tax exemption certificate')),
                ('is_inactive', models.BooleanField(default=False, verbose_name='inactive')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='companies_company_set', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Company',
                'verbose_name_plural': 'Companies',
                'ordering': ['company_name'],
            },
        ),
        migrations.CreateModel(
            name='CompanyBillingCycle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('billing_cycle', models.CharField(choices=[('weekly', 'Weekly'), ('bi-weekly', 'Bi-Weekly'), ('monthly', 'Monthly'), ('quarterly', 'Quarterly'), ('semi-annually', 'Semi-Annually'), ('annually', 'Annually')], default='monthly', max_length=20, verbose_name='billing cycle')),
                ('effective_date', models.DateTimeField(default=django.utils.timezone.now, verbose_name='effective date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='billing_cycle_record', to='companies.company')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='companies_companybillingcycle_set', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Company Billing Cycle',
                'verbose_name_plural': 'Company Billing Cycles',
            },
        ),
        migrations.CreateModel(
            name='TaxRate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('region', models.CharField(max_length=100, verbose_name='region')),
                ('tax_percentage', models.DecimalField(decimal_places=3, max_digits=6, verbose_name='tax percentage')),
                ('description', models.CharField(blank=True, max_length=200, verbose_name='description')),
                ('start_date', models.DateTimeField(verbose_name='start date')),
                ('end_date', models.DateTimeField(blank=True, null=True, verbose_name='end date')),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='companies_taxrate_set', to='organizations.organization')),
            ],
            options={
                'verbose_name': 'Tax Rate',
                'verbose_name_plural': 'Tax Rates',
                'ordering': ['region', '-start_date'],
            },
        ),
    ]
