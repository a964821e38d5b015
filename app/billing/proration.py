"""
Proration of fixed-price charges by the share of a billing cycle covered.
"""
import logging
from dataclasses import replace
from decimal import Decimal
from typing import List

from timetracking.periods import days_in_month, parse_iso

logger = logging.getLogger(__name__)

# Calendar approximations; monthly cycles use the exact month length.
CYCLE_LENGTHS = {
    'weekly': 7,
    'bi-weekly': 14,
    'quarterly': 91,
    'semi-annually': 182,
    'annually': 365,
}


def cycle_length(billing_cycle: str, period) -> int:
    """Days in one ``billing_cycle``; unknown cycles count as monthly."""
    if billing_cycle in CYCLE_LENGTHS:
        return CYCLE_LENGTHS[billing_cycle]
    start = period.start
    return days_in_month(start.year, start.month)


def proration_factor(period, plan_start, billing_cycle: str) -> Decimal:
    effective_start = max(parse_iso(plan_start), period.start)
    actual_days = (period.end - effective_start).days
    return Decimal(actual_days) / Decimal(cycle_length(billing_cycle, period))


def apply_proration(charges: List, period, plan_start, billing_cycle: str) -> List:
    """
    Scale each charge's total by the plan's proration factor.

    Tax amounts keep their pre-proration value.
    """
    factor = proration_factor(period, plan_start, billing_cycle)
    logger.debug(
        f"Proration factor {factor:.4f} for plan starting {plan_start} "
        f"in {period.start_date} - {period.end_date} ({billing_cycle})"
    )
    return [replace(charge, total=charge.total * factor) for charge in charges]
