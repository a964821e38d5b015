from decimal import Decimal

import pytest

from companies.models import CompanyBillingCycle, TaxRate
from companies.services import get_billing_cycle, get_company, get_company_tax_rate
from core.exceptions import DataIntegrityError
from timetracking.periods import parse_iso

pytestmark = pytest.mark.django_db


class TestTaxRateLookup:

    @pytest.fixture
    def rates(self, scope):
        scope.create(
            TaxRate, region='US-TX', tax_percentage=Decimal('6.25'),
            start_date=parse_iso('2020-01-01'),
        )
        scope.create(
            TaxRate, region='US-TX', tax_percentage=Decimal('2.00'),
            start_date=parse_iso('2020-01-01'), end_date=parse_iso('2024-01-01'),
        )
        scope.create(
            TaxRate, region='US-TX', tax_percentage=Decimal('1.50'),
            start_date=parse_iso('2024-01-01'),
        )

    def test_overlapping_rates_are_summed(self, scope, rates):
        assert get_company_tax_rate(scope, 'US-TX', '2023-06-01') == Decimal('0.0825')

    def test_rate_changes_at_boundary(self, scope, rates):
        assert get_company_tax_rate(scope, 'US-TX', '2024-01-01') == Decimal('0.0775')

    def test_unknown_or_empty_region(self, scope, rates):
        assert get_company_tax_rate(scope, 'CA-ON', '2024-06-01') == 0
        assert get_company_tax_rate(scope, '', '2024-06-01') == 0

    def test_rates_are_tenant_scoped(self, rates, other_organization):
        from core.db import TenantScope

        assert get_company_tax_rate(TenantScope(other_organization), 'US-TX', '2023-06-01') == 0


class TestCompanyLookups:

    def test_missing_company(self, scope):
        import uuid

        with pytest.raises(DataIntegrityError):
            get_company(scope, uuid.uuid4())

    def test_billing_cycle_defaults_to_monthly(self, scope, company):
        CompanyBillingCycle.objects.filter(company=company).delete()

        assert get_billing_cycle(scope, company.pk) == 'monthly'
        assert get_billing_cycle(scope, company.pk, default='quarterly') == 'quarterly'

    def test_recorded_billing_cycle(self, scope, company):
        CompanyBillingCycle.objects.filter(company=company).update(billing_cycle='annually')

        assert get_billing_cycle(scope, company.pk) == 'annually'
