"""
Pytest fixtures shared by the test suite.
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from core.db import TenantScope


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.fixture
def organization(db):
    from organizations.models import Organization
    return Organization.objects.create(name='Acme Managed Services', slug='acme')


@pytest.fixture
def other_organization(db):
    from organizations.models import Organization
    return Organization.objects.create(name='Globex IT', slug='globex')


@pytest.fixture
def scope(organization):
    return TenantScope(organization)


@pytest.fixture
def user(db):
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username='technician',
        email='technician@acme.test',
        password='testpass123',
    )


@pytest.fixture
def approver(db):
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username='manager',
        email='manager@acme.test',
        password='testpass123',
    )


@pytest.fixture
def company(scope):
    from companies.models import Company, CompanyBillingCycle
    company = scope.create(Company, company_name='Initech', tax_region='US-TX')
    scope.create(CompanyBillingCycle, company=company, billing_cycle='monthly')
    return company


@pytest.fixture
def category(scope):
    from billing.models import ServiceCategory
    return scope.create(ServiceCategory, category_name='Managed Services')


@pytest.fixture
def fixed_service(scope, category):
    from billing.models import ServiceCatalog
    return scope.create(
        ServiceCatalog,
        service_name='Monitoring',
        service_type='Fixed',
        category=category,
        default_rate=Decimal('100.00'),
        tax_rate=Decimal('10'),
    )


@pytest.fixture
def plan(scope):
    from billing.models import BillingPlan
    return scope.create(BillingPlan, plan_name='Standard Support')


@pytest.fixture
def fixed_plan(scope, company, plan, fixed_service, category):
    """Company on a $100/month fixed-price plan since before 2024."""
    from billing.models import CompanyBillingPlan, PlanService
    scope.create(PlanService, plan=plan, service=fixed_service, quantity=Decimal('1'))
    return scope.create(
        CompanyBillingPlan,
        company=company,
        plan=plan,
        service_category=category,
        start_date=utc(2023, 12, 1),
    )


@pytest.fixture(autouse=True)
def clear_tenant_cache():
    """Tenant lookups are cached by slug; start every test cold."""
    from django.core.cache import cache
    cache.clear()
    yield
