"""
Value types produced by a billing run.

Charges are computed fresh for each run and never persisted directly; an
invoice built from a ``BillingResult`` is the only durable record.
"""
from dataclasses import dataclass, field, asdict
from decimal import Decimal
from typing import Any, Dict, List, Optional

from timetracking.periods import parse_iso, to_iso


@dataclass(frozen=True)
class BillingPeriod:
    """Half-open billing window ``[start_date, end_date)`` as canonical UTC strings."""

    start_date: str
    end_date: str

    def __post_init__(self):
        start, end = to_iso(self.start_date), to_iso(self.end_date)
        if start >= end:
            raise ValueError(f"Billing period start {start} must be before end {end}")
        object.__setattr__(self, 'start_date', start)
        object.__setattr__(self, 'end_date', end)

    @property
    def start(self):
        return parse_iso(self.start_date)

    @property
    def end(self):
        return parse_iso(self.end_date)


@dataclass
class BillingCharge:
    service_id: Optional[str]
    service_name: str
    rate: Decimal
    total: Decimal
    tax_rate: Decimal = Decimal('0')
    tax_amount: Decimal = Decimal('0')
    tax_region: str = ''
    type: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class FixedPriceCharge(BillingCharge):
    quantity: Decimal = Decimal('0')
    type: str = 'fixed'


@dataclass
class TimeBasedCharge(BillingCharge):
    user_id: Optional[int] = None
    duration: Decimal = Decimal('0')
    type: str = 'time'


@dataclass
class UsageBasedCharge(BillingCharge):
    quantity: Decimal = Decimal('0')
    type: str = 'usage'


@dataclass
class BucketCharge(BillingCharge):
    hours_used: Decimal = Decimal('0')
    overage_hours: Decimal = Decimal('0')
    overage_rate: Decimal = Decimal('0')
    type: str = 'bucket'


@dataclass
class AppliedDiscount:
    discount_id: str
    discount_name: str
    discount_type: str
    value: Decimal
    amount: Decimal = Decimal('0')
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class Adjustment:
    amount: Decimal
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class BillingResult:
    charges: List[BillingCharge] = field(default_factory=list)
    total_amount: Decimal = Decimal('0')
    discounts: List[AppliedDiscount] = field(default_factory=list)
    adjustments: List[Adjustment] = field(default_factory=list)
    final_amount: Decimal = Decimal('0')

    @property
    def total_tax(self) -> Decimal:
        """Tax across all charges, tracked apart from ``final_amount``."""
        return sum((charge.tax_amount for charge in self.charges), Decimal('0'))

    def charges_of_type(self, charge_type: str) -> List[BillingCharge]:
        return [charge for charge in self.charges if charge.type == charge_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'charges': [charge.to_dict() for charge in self.charges],
            'total_amount': str(self.total_amount),
            'discounts': [discount.to_dict() for discount in self.discounts],
            'adjustments': [adjustment.to_dict() for adjustment in self.adjustments],
            'final_amount': str(self.final_amount),
            'total_tax': str(self.total_tax),
        }


def _jsonable(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: str(value) if isinstance(value, Decimal) else value
        for key, value in data.items()
    }
