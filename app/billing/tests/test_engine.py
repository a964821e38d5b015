from datetime import timedelta
from decimal import Decimal
from unittest.mock import call, patch

import pytest

from billing.engine import BillingEngine
from billing.models import (
    BillingPlan, BucketPlan, BucketUsage, CompanyBillingPlan, Discount, PlanDiscount,
    PlanService, ServiceCatalog, UsageTracking,
)
from companies.models import Company, CompanyBillingCycle, TaxRate
from core.exceptions import DataIntegrityError, NoActivePlanError
from projects.models import Project, ProjectPhase, ProjectTask, Ticket
from timetracking.models import TimeEntry
from timetracking.periods import parse_iso

pytestmark = pytest.mark.django_db

JANUARY = ('2024-01-01T00:00:00Z', '2024-02-01T00:00:00Z')


@pytest.fixture
def engine(scope):
    return BillingEngine(scope)


@pytest.fixture
def time_service(scope, category):
    return scope.create(
        ServiceCatalog,
        service_name='Remote Support',
        service_type='Time',
        category=category,
        default_rate=Decimal('150.00'),
        tax_rate=Decimal('5'),
    )


@pytest.fixture
def usage_service(scope, category):
    return scope.create(
        ServiceCatalog,
        service_name='Backup Storage (GB)',
        service_type='Usage',
        category=category,
        default_rate=Decimal('0.50'),
        is_taxable=False,
    )


@pytest.fixture
def ticket(scope, company):
    return scope.create(Ticket, company=company, title='Printer offline')


def log_time(scope, user, service, work_item, work_item_type='ticket', start='2024-01-10T09:00:00Z',
             hours=2.5, status='APPROVED'):
    start_time = parse_iso(start)
    return scope.create(
        TimeEntry,
        work_item_id=work_item.pk,
        work_item_type=work_item_type,
        user=user,
        service=service,
        start_time=start_time,
        end_time=start_time + timedelta(hours=hours),
        approval_status=status,
    )


def grant_discount(scope, company, plan, discount_type, value, **kwargs):
    kwargs.setdefault('start_date', parse_iso('2023-01-01'))
    discount = scope.create(
        Discount,
        discount_name=f'{discount_type} {value}',
        discount_type=discount_type,
        value=Decimal(value),
        **kwargs
    )
    scope.create(PlanDiscount, plan=plan, company=company, discount=discount)
    return discount


class TestFixedPriceBilling:

    def test_full_month(self, engine, company, fixed_plan):
        result = engine.calculate_billing(company.pk, *JANUARY)

        assert len(result.charges) == 1
        charge = result.charges[0]
        assert charge.type == 'fixed'
        assert charge.total == Decimal('100')
        assert charge.tax_amount == Decimal('10')
        assert result.total_amount == Decimal('100')
        assert result.discounts == []
        assert result.adjustments == []
        assert result.final_amount == Decimal('100')
        assert result.total_tax == Decimal('10')

    def test_plan_starting_mid_period_is_prorated(self, engine, company, fixed_plan):
        fixed_plan.start_date = parse_iso('2024-06-15')
        fixed_plan.save()

        result = engine.calculate_billing(company.pk, '2024-06-01', '2024-07-01')

        charge = result.charges[0]
        assert charge.total.quantize(Decimal('0.01')) == Decimal('53.33')
        assert charge.total == Decimal('100') * (Decimal(30 - 14) / Decimal(30))
        # Tax keeps its pre-proration amount.
        assert charge.tax_amount == Decimal('10')

    def test_weekly_cycle_uses_seven_day_denominator(self, scope, engine, company, fixed_plan):
        CompanyBillingCycle.objects.filter(company=company).update(billing_cycle='weekly')

        result = engine.calculate_billing(company.pk, '2024-01-01', '2024-01-08')

        assert result.total_amount == Decimal('100')

    def test_tax_exempt_company(self, engine, company, fixed_plan):
        company.is_tax_exempt = True
        company.save()
        fixed_plan.start_date = parse_iso('2024-01-15')
        fixed_plan.save()

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.charges[0].total < Decimal('100')
        assert all(charge.tax_amount == 0 for charge in result.charges)
        assert result.total_tax == 0

    def test_non_taxable_service(self, engine, company, fixed_plan, fixed_service):
        fixed_service.is_taxable = False
        fixed_service.save()

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.charges[0].tax_rate == 0
        assert result.charges[0].tax_amount == 0

    def test_custom_rate_and_quantity(self, scope, engine, company, fixed_plan, plan):
        PlanService.objects.filter(plan=plan).update(quantity=Decimal('3'), custom_rate=Decimal('80.00'))

        result = engine.calculate_billing(company.pk, *JANUARY)

        charge = result.charges[0]
        assert charge.rate == Decimal('80')
        assert charge.quantity == Decimal('3')
        assert charge.total == Decimal('240')

    def test_plan_without_category_bills_every_fixed_service(self, scope, engine, company, fixed_plan, plan):
        other = scope.create(
            ServiceCatalog, service_name='Licensing', service_type='Fixed', default_rate=Decimal('20.00')
        )
        scope.create(PlanService, plan=plan, service=other)

        assert len(engine.calculate_billing(company.pk, *JANUARY).charges) == 1

        fixed_plan.service_category = None
        fixed_plan.save()

        result = engine.calculate_billing(company.pk, *JANUARY)
        assert result.total_amount == Decimal('120')


class TestPlanResolution:

    def test_no_plan(self, engine, company):
        with pytest.raises(NoActivePlanError) as exc_info:
            engine.calculate_billing(company.pk, *JANUARY)

        assert str(company.pk) in str(exc_info.value)

    def test_plan_ended_before_period(self, engine, company, fixed_plan):
        fixed_plan.end_date = parse_iso('2023-12-31')
        fixed_plan.save()

        with pytest.raises(NoActivePlanError):
            engine.calculate_billing(company.pk, *JANUARY)

    def test_inactive_plan(self, engine, company, fixed_plan):
        fixed_plan.is_active = False
        fixed_plan.save()

        with pytest.raises(NoActivePlanError):
            engine.calculate_billing(company.pk, *JANUARY)

    def test_every_overlapping_plan_is_billed(self, scope, engine, company, fixed_plan, fixed_service, category):
        second = scope.create(BillingPlan, plan_name='After Hours')
        scope.create(PlanService, plan=second, service=fixed_service, quantity=Decimal('2'))
        scope.create(
            CompanyBillingPlan, company=company, plan=second, service_category=category,
            start_date=parse_iso('2023-06-01'),
        )

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.total_amount == Decimal('300')

    def test_plan_of_another_tenant_is_invisible(self, other_organization, company, fixed_plan):
        from core.db import TenantScope

        with pytest.raises(NoActivePlanError):
            BillingEngine(TenantScope(other_organization)).calculate_billing(company.pk, *JANUARY)

    def test_invalid_period(self, engine, company, fixed_plan):
        with pytest.raises(ValueError):
            engine.calculate_billing(company.pk, '2024-02-01', '2024-01-01')

    def test_tenant_is_bound_for_the_run(self, scope, engine, company, fixed_plan):
        with patch('core.db.set_rls_tenant') as set_rls_tenant:
            engine.calculate_billing(company.pk, *JANUARY)

        assert set_rls_tenant.call_args_list == [
            call(str(scope.organization_id), using=None, local=False),
            call('', using=None, local=False),
        ]

    def test_tenant_is_unbound_after_a_failed_run(self, engine, company):
        with patch('core.db.set_rls_tenant') as set_rls_tenant:
            with pytest.raises(NoActivePlanError):
                engine.calculate_billing(company.pk, *JANUARY)

        assert set_rls_tenant.call_args_list[-1] == call('', using=None, local=False)


class TestTimeAndUsageBilling:

    def test_approved_time_on_company_ticket(self, scope, engine, company, fixed_plan, plan, time_service, ticket, user):
        scope.create(PlanService, plan=plan, service=time_service, custom_rate=Decimal('120.00'))
        log_time(scope, user, time_service, ticket, hours=2.5)

        result = engine.calculate_billing(company.pk, *JANUARY)

        [charge] = result.charges_of_type('time')
        assert charge.duration == Decimal('2')
        assert charge.rate == Decimal('120')
        assert charge.total == Decimal('240')
        assert charge.user_id == user.pk
        assert charge.tax_amount == Decimal('12')
        # Time charges are never prorated.
        assert result.total_amount == Decimal('340')

    def test_time_on_project_task(self, scope, engine, company, fixed_plan, plan, time_service, user):
        scope.create(PlanService, plan=plan, service=time_service)
        project = scope.create(Project, company=company, project_name='Office move')
        phase = scope.create(ProjectPhase, project=project, phase_name='Cabling')
        task = scope.create(ProjectTask, phase=phase, task_name='Patch panel')
        log_time(scope, user, time_service, task, work_item_type='project_task', hours=3)

        [charge] = engine.calculate_billing(company.pk, *JANUARY).charges_of_type('time')

        assert charge.total == Decimal('450')

    def test_excluded_time_entries(self, scope, engine, company, fixed_plan, plan, time_service, ticket, user):
        scope.create(PlanService, plan=plan, service=time_service)
        other_company = scope.create(Company, company_name='Umbrella')
        other_ticket = scope.create(Ticket, company=other_company, title='VPN down')

        log_time(scope, user, time_service, ticket, status='SUBMITTED')
        log_time(scope, user, time_service, other_ticket)
        log_time(scope, user, time_service, ticket, start='2024-01-31T23:00:00Z')
        log_time(scope, user, time_service, ticket, work_item_type='project_task')

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.charges_of_type('time') == []

    def test_usage_records(self, scope, engine, company, fixed_plan, plan, usage_service):
        scope.create(PlanService, plan=plan, service=usage_service)
        scope.create(
            UsageTracking, company=company, service=usage_service,
            usage_date=parse_iso('2024-01-20'), quantity=Decimal('200'),
        )
        scope.create(
            UsageTracking, company=company, service=usage_service,
            usage_date=parse_iso('2024-02-20'), quantity=Decimal('999'),
        )

        [charge] = engine.calculate_billing(company.pk, *JANUARY).charges_of_type('usage')

        assert charge.quantity == Decimal('200')
        assert charge.total == Decimal('100')
        assert charge.tax_amount == 0

    def test_plan_without_category_has_no_time_or_usage(self, scope, engine, company, fixed_plan, plan,
                                                       time_service, usage_service, ticket, user):
        scope.create(PlanService, plan=plan, service=time_service)
        scope.create(PlanService, plan=plan, service=usage_service)
        log_time(scope, user, time_service, ticket)
        scope.create(
            UsageTracking, company=company, service=usage_service,
            usage_date=parse_iso('2024-01-20'), quantity=Decimal('10'),
        )
        fixed_plan.service_category = None
        fixed_plan.save()

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert [charge.type for charge in result.charges] == ['fixed']

    def test_charge_order(self, scope, engine, company, fixed_plan, plan, time_service, usage_service, ticket, user):
        scope.create(PlanService, plan=plan, service=time_service)
        scope.create(PlanService, plan=plan, service=usage_service)
        log_time(scope, user, time_service, ticket)
        scope.create(
            UsageTracking, company=company, service=usage_service,
            usage_date=parse_iso('2024-01-20'), quantity=Decimal('10'),
        )

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert [charge.type for charge in result.charges] == ['fixed', 'time', 'usage']


class TestBucketBilling:

    @pytest.fixture
    def bucket(self, scope, plan):
        return scope.create(BucketPlan, plan=plan, total_hours=Decimal('10'), overage_rate=Decimal('40.00'))

    @pytest.fixture
    def texas_tax(self, scope):
        return scope.create(
            TaxRate, region='US-TX', tax_percentage=Decimal('8.25'), start_date=parse_iso('2023-01-01')
        )

    def record_usage(self, scope, bucket, company, service, hours_used, overage_hours):
        return scope.create(
            BucketUsage,
            bucket_plan=bucket,
            company=company,
            service_catalog=service,
            period_start=parse_iso('2024-01-01'),
            period_end=parse_iso('2024-02-01'),
            hours_used=Decimal(hours_used),
            overage_hours=Decimal(overage_hours),
        )

    def test_overage_charge_tax_rounds_up(self, scope, engine, company, fixed_plan, bucket, texas_tax, time_service):
        self.record_usage(scope, bucket, company, time_service, '13.5', '3.5')

        [charge] = engine.calculate_billing(company.pk, *JANUARY).charges_of_type('bucket')

        assert charge.total == Decimal('140')
        assert charge.overage_hours == Decimal('3.5')
        assert charge.hours_used == Decimal('13.5')
        assert charge.tax_rate == Decimal('0.0825')
        assert charge.tax_region == 'US-TX'
        # 0.0825 * 3.5 * 40 = 11.55
        assert charge.tax_amount == Decimal('12')

    def test_no_overage_no_charge(self, scope, engine, company, fixed_plan, bucket, texas_tax, time_service):
        self.record_usage(scope, bucket, company, time_service, '8', '0')

        assert engine.calculate_billing(company.pk, *JANUARY).charges_of_type('bucket') == []

    def test_exempt_company_pays_no_bucket_tax(self, scope, engine, company, fixed_plan, bucket, texas_tax,
                                               time_service):
        Company.objects.filter(pk=company.pk).update(is_tax_exempt=True)
        self.record_usage(scope, bucket, company, time_service, '13.5', '3.5')

        [charge] = engine.calculate_billing(company.pk, *JANUARY).charges_of_type('bucket')

        assert charge.tax_amount == 0

    def test_usage_without_service(self, scope, engine, company, fixed_plan, bucket):
        self.record_usage(scope, bucket, company, None, '13.5', '3.5')

        with pytest.raises(DataIntegrityError):
            engine.calculate_billing(company.pk, *JANUARY)


class TestDiscounts:

    @pytest.fixture
    def five_hundred(self, company, fixed_plan, plan):
        PlanService.objects.filter(plan=plan).update(quantity=Decimal('5'))
        return plan

    def test_percentage_discount(self, scope, engine, company, five_hundred):
        grant_discount(scope, company, five_hundred, 'percentage', '10')

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.total_amount == Decimal('500')
        assert result.discounts[0].amount == Decimal('50')
        assert result.final_amount == Decimal('450')

    def test_fixed_discount(self, scope, engine, company, five_hundred):
        grant_discount(scope, company, five_hundred, 'fixed', '50')

        assert engine.calculate_billing(company.pk, *JANUARY).final_amount == Decimal('450')

    def test_discounts_do_not_compound(self, scope, engine, company, five_hundred):
        grant_discount(scope, company, five_hundred, 'percentage', '10')
        grant_discount(scope, company, five_hundred, 'fixed', '50')

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert len(result.discounts) == 2
        assert result.final_amount == Decimal('400')

    def test_inactive_and_expired_discounts_are_ignored(self, scope, engine, company, five_hundred):
        grant_discount(scope, company, five_hundred, 'fixed', '50', is_active=False)
        grant_discount(scope, company, five_hundred, 'fixed', '25', end_date=parse_iso('2023-12-31'))
        grant_discount(scope, company, five_hundred, 'fixed', '10', start_date=parse_iso('2024-03-01'))

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.discounts == []
        assert result.final_amount == Decimal('500')

    def test_tax_is_not_subtracted_from_final_amount(self, scope, engine, company, five_hundred):
        grant_discount(scope, company, five_hundred, 'fixed', '50')

        result = engine.calculate_billing(company.pk, *JANUARY)

        assert result.total_tax == Decimal('50')
        assert result.final_amount == Decimal('450')


def test_result_serializes_to_json_types(engine, company, fixed_plan):
    data = engine.calculate_billing(company.pk, *JANUARY).to_dict()

    assert Decimal(data['total_amount']) == Decimal('100')
    assert data['adjustments'] == []
    assert data['charges'][0]['type'] == 'fixed'
    assert isinstance(data['charges'][0]['tax_amount'], str)
