"""
Billing orchestrator.

``BillingEngine`` resolves a company's active plans for a period, runs the
four charge calculators for each plan concurrently, prorates fixed charges
and applies discounts. Any failure aborts the whole run; no partial result
is returned.
"""
import asyncio
import logging
from decimal import Decimal

from asgiref.sync import async_to_sync, sync_to_async

from companies.services import get_company
from core.db import reset_rls_tenant
from . import calculators
from .charges import BillingPeriod, BillingResult
from .discounts import apply_discounts_and_adjustments, fetch_discounts
from .plans import get_company_billing_plans_and_cycle
from .proration import apply_proration
from .rollover import rollover_unapproved_time

logger = logging.getLogger(__name__)

CALCULATORS = (
    calculators.calculate_fixed_price_charges,
    calculators.calculate_time_based_charges,
    calculators.calculate_usage_based_charges,
    calculators.calculate_bucket_plan_charges,
)


class BillingEngine:
    """
    Billing calculations for the tenant behind ``scope``.
    """

    def __init__(self, scope):
        self.scope = scope

    def calculate_billing(self, company_id, start_date, end_date) -> BillingResult:
        return async_to_sync(self.acalculate_billing)(company_id, start_date, end_date)

    async def acalculate_billing(self, company_id, start_date, end_date) -> BillingResult:
        # Thread-sensitive calls share one connection, so binding the tenant
        # once covers every read of the run.
        await sync_to_async(self.scope.activate)()
        try:
            return await self._calculate(company_id, start_date, end_date)
        finally:
            await sync_to_async(reset_rls_tenant)()

    async def _calculate(self, company_id, start_date, end_date) -> BillingResult:
        period = BillingPeriod(start_date, end_date)
        logger.info(f"Calculating billing for company {company_id} from {period.start_date} to {period.end_date}")

        company_plans, billing_cycle = await sync_to_async(get_company_billing_plans_and_cycle)(
            self.scope, company_id, period
        )
        company = await sync_to_async(get_company)(self.scope, company_id)

        charges = []
        for company_plan in company_plans:
            fixed, time, usage, bucket = await asyncio.gather(*[
                sync_to_async(calculator)(self.scope, company, period, company_plan)
                for calculator in CALCULATORS
            ])
            fixed = apply_proration(fixed, period, company_plan.start_date, billing_cycle)
            logger.debug(
                f"Plan {company_plan.plan_id}: {len(fixed)} fixed, {len(time)} time, "
                f"{len(usage)} usage, {len(bucket)} bucket charge(s)"
            )
            charges.extend(fixed + time + usage + bucket)

        total_amount = sum((charge.total for charge in charges), Decimal('0'))
        result = BillingResult(
            charges=charges,
            total_amount=total_amount,
            discounts=[],
            adjustments=[],
            final_amount=total_amount,
        )

        discounts = await sync_to_async(fetch_discounts)(self.scope, company_id, period)
        result = apply_discounts_and_adjustments(result, discounts)

        logger.info(
            f"Billing for company {company_id}: {len(result.charges)} charge(s), "
            f"total {result.total_amount}, {len(result.discounts)} discount(s), "
            f"final {result.final_amount}, tax {result.total_tax}"
        )
        return result

    def rollover_unapproved_time(self, company_id, current_period_end, next_period_start) -> int:
        return rollover_unapproved_time(self.scope, company_id, current_period_end, next_period_start)
