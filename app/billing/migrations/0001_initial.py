# Generated migration for billing app
from django.db import migrations, models
import django.db.models.deletion
import uuid


def tenant_fk(model_name):
    return models.ForeignKey(
        on_delete=django.db.models.deletion.CASCADE,
        related_name=f'billing_{model_name}_set',
        to='organizations.organization',
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
        ('companies', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ServiceCategory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category_name', models.CharField(max_length=200, verbose_name='category name')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('organization', tenant_fk('servicecategory')),
            ],
            options={
                'verbose_name': 'Service Category',
                'verbose_name_plural': 'Service Categories',
                'ordering': ['category_name'],
            },
        ),
        migrations.CreateModel(
            name='ServiceCatalog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('service_name', models.CharField(max_length=200, verbose_name='service name')),
                ('service_type', models.CharField(choices=[('Fixed', 'Fixed Price'), ('Time', 'Time Based'), ('Usage', 'Usage Based')], max_length=10, verbose_name='service type')),
                ('default_rate', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='default rate')),
                ('unit_of_measure', models.CharField(blank=True, max_length=50, verbose_name='unit of measure')),
                ('is_taxable', models.BooleanField(default=True, verbose_name='taxable')),
                ('tax_rate', models.DecimalField(decimal_places=3, default=0, help_text='Percentage applied to fixed, time and usage charges.', max_digits=6, verbose_name='tax rate (%)')),
                ('tax_region', models.CharField(blank=True, max_length=100, verbose_name='tax region')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='services', to='billing.servicecategory')),
                ('organization', tenant_fk('servicecatalog')),
            ],
            options={
                'verbose_name': 'Service',
                'verbose_name_plural': 'Service Catalog',
                'ordering': ['service_name'],
            },
        ),
        migrations.CreateModel(
            name='BillingPlan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('plan_name', models.CharField(max_length=200, verbose_name='plan name')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('billing_frequency', models.CharField(default='monthly', max_length=20, verbose_name='billing frequency')),
                ('plan_type', models.CharField(choices=[('Fixed', 'Fixed Price'), ('Hourly', 'Hourly'), ('Usage', 'Usage Based'), ('Bucket', 'Bucket')], default='Fixed', max_length=10, verbose_name='plan type')),
                ('is_custom', models.BooleanField(default=False, verbose_name='custom plan')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', tenant_fk('billingplan')),
            ],
            options={
                'verbose_name': 'Billing Plan',
                'verbose_name_plural': 'Billing Plans',
                'ordering': ['plan_name'],
            },
        ),
        migrations.CreateModel(
            name='PlanService',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=2, default=1, max_digits=10, verbose_name='quantity')),
                ('custom_rate', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='custom rate')),
                ('organization', tenant_fk('planservice')),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_services', to='billing.billingplan')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_services', to='billing.servicecatalog')),
            ],
            options={
                'verbose_name': 'Plan Service',
                'verbose_name_plural': 'Plan Services',
                'unique_together': {('plan', 'service')},
            },
        ),
        migrations.AddField(
            model_name='billingplan',
            name='services',
            field=models.ManyToManyField(related_name='plans', through='billing.PlanService', to='billing.servicecatalog'),
        ),
        migrations.CreateModel(
            name='CompanyBillingPlan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('start_date', models.DateTimeField(verbose_name='start date')),
                ('end_date', models.DateTimeField(blank=True, null=True, verbose_name='end date')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='billing_plans', to='companies.company')),
                ('organization', tenant_fk('companybillingplan')),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='company_assignments', to='billing.billingplan')),
                ('service_category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='company_billing_plans', to='billing.servicecategory')),
            ],
            options={
                'verbose_name': 'Company Billing Plan',
                'verbose_name_plural': 'Company Billing Plans',
                'ordering': ['-start_date'],
            },
        ),
        migrations.CreateModel(
            name='BucketPlan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('total_hours', models.DecimalField(decimal_places=2, max_digits=8, verbose_name='total hours')),
                ('billing_period', models.CharField(default='monthly', max_length=20, verbose_name='billing period')),
                ('overage_rate', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='overage rate')),
                ('organization', tenant_fk('bucketplan')),
                ('plan', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='bucket_plan', to='billing.billingplan')),
            ],
            options={
                'verbose_name': 'Bucket Plan',
                'verbose_name_plural': 'Bucket Plans',
            },
        ),
        migrations.CreateModel(
            name='BucketUsage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('period_start', models.DateTimeField(verbose_name='period start')),
                ('period_end', models.DateTimeField(verbose_name='period end')),
                ('hours_used', models.DecimalField(decimal_places=2, default=0, max_digits=8, verbose_name='hours used')),
                ('overage_hours', models.DecimalField(decimal_places=2, default=0, max_digits=8, verbose_name='overage hours')),
                ('bucket_plan', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='usage', to='billing.bucketplan')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bucket_usage', to='companies.company')),
                ('organization', tenant_fk('bucketusage')),
                ('service_catalog', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bucket_usage', to='billing.servicecatalog')),
            ],
            options={
                'verbose_name': 'Bucket Usage',
                'verbose_name_plural': 'Bucket Usage',
                'ordering': ['-period_start'],
            },
        ),
        migrations.CreateModel(
            name='UsageTracking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('usage_date', models.DateTimeField(verbose_name='usage date')),
                ('quantity', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='quantity')),
                ('tax_region', models.CharField(blank=True, max_length=100, verbose_name='tax region')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='usage_records', to='companies.company')),
                ('organization', tenant_fk('usagetracking')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='usage_records', to='billing.servicecatalog')),
            ],
            options={
                'verbose_name': 'Usage Record',
                'verbose_name_plural': 'Usage Records',
                'ordering': ['-usage_date'],
            },
        ),
        migrations.CreateModel(
            name='Discount',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('discount_name', models.CharField(max_length=200, verbose_name='discount name')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('discount_type', models.CharField(choices=[('percentage', 'Percentage'), ('fixed', 'Fixed Amount')], max_length=20, verbose_name='discount type')),
                ('value', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='value')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('start_date', models.DateTimeField(verbose_name='start date')),
                ('end_date', models.DateTimeField(blank=True, null=True, verbose_name='end date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organization', tenant_fk('discount')),
            ],
            options={
                'verbose_name': 'Discount',
                'verbose_name_plural': 'Discounts',
                'ordering': ['discount_name'],
            },
        ),
        migrations.CreateModel(
            name='PlanDiscount',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_discounts', to='companies.company')),
                ('discount', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_discounts', to='billing.discount')),
                ('organization', tenant_fk('plandiscount')),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_discounts', to='billing.billingplan')),
            ],
            options={
                'verbose_name': 'Plan Discount',
                'verbose_name_plural': 'Plan Discounts',
                'unique_together': {('plan', 'company', 'discount')},
            },
        ),
    ]
