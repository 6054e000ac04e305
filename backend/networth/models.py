"""Domain models used by the net worth calculation engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
    CUSTOM = "custom"
    NONE = "none"


class TransactionType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class AssetType(str, Enum):
    STOCK = "stock"
    BOND = "bond"
    REAL_ESTATE = "real_estate"
    CRYPTO = "crypto"
    CASH = "cash"
    OTHER = "other"


class IncomeType(str, Enum):
    SALARY = "salary"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    RENTAL = "rental"
    SIDE_JOB = "side_job"
    OTHER = "other"


@dataclass(frozen=True)
class PaymentSchedule:
    """A recurring cash flow rule.

    ``amount`` is the default value of one payment. For custom schedules
    ``months`` lists the paying months and ``custom_amounts`` overrides the
    amount for individual months. ``payment_months`` names the paying months
    of quarterly and annual schedules.
    """

    frequency: PaymentFrequency
    amount: Decimal = Decimal("0")
    months: Optional[FrozenSet[int]] = None
    custom_amounts: Optional[Dict[int, Decimal]] = None
    payment_months: Optional[FrozenSet[int]] = None


@dataclass(frozen=True)
class NormalizedSchedule:
    """Monthly and annual equivalents of a payment schedule."""

    monthly_amount: Decimal
    annual_amount: Decimal
    paying_months: FrozenSet[int]


@dataclass(frozen=True)
class PriceHistoryPoint:
    date: date
    price: Decimal


@dataclass(frozen=True)
class Transaction:
    """A buy or sell of one asset definition."""

    id: str
    purchase_date: date
    purchase_quantity: Decimal
    purchase_price: Decimal
    transaction_type: TransactionType = TransactionType.BUY
    value: Decimal = Decimal("0")


@dataclass(frozen=True)
class RentalInfo:
    base_rent: Decimal


@dataclass(frozen=True)
class BondInfo:
    interest_rate: Decimal


@dataclass(frozen=True)
class AssetDefinition:
    """Market identity of an asset, shared by every position that holds it."""

    id: str
    name: str
    current_price: Optional[Decimal] = None
    price_history: Sequence[PriceHistoryPoint] = ()
    asset_type: AssetType = AssetType.STOCK
    ticker: Optional[str] = None
    dividend_info: Optional[PaymentSchedule] = None
    rental_info: Optional[RentalInfo] = None
    bond_info: Optional[BondInfo] = None


@dataclass(frozen=True)
class PortfolioPosition:
    """All transactions held against one asset definition."""

    asset_definition: AssetDefinition
    transactions: Sequence[Transaction] = ()


@dataclass(frozen=True)
class PortfolioHistoryDay:
    date: date
    value: Decimal
    change: Decimal
    change_percentage: Decimal


@dataclass(frozen=True)
class SkippedPosition:
    """Diagnostic for a position left out of a timeline run."""

    asset_id: Optional[str]
    reason: str


@dataclass(frozen=True)
class HistoryReport:
    days: List[PortfolioHistoryDay]
    skipped: List[SkippedPosition] = field(default_factory=list)


@dataclass(frozen=True)
class PositionSummary:
    asset_id: str
    name: str
    quantity: Decimal
    price: Decimal
    value: Decimal
    net_invested: Decimal


@dataclass(frozen=True)
class IncomeAsset:
    """A position together with the held quantity and value used for income.

    When ``quantity`` is left unset the held shares are replayed from the
    position's transactions; an explicit quantity takes precedence over them.
    """

    position: PortfolioPosition
    quantity: Optional[Decimal] = None
    value: Decimal = Decimal("0")

    @property
    def definition(self) -> AssetDefinition:
        return self.position.asset_definition


@dataclass(frozen=True)
class IncomeBreakdown:
    monthly_amount: Decimal
    annual_amount: Decimal
    monthly_breakdown: Dict[int, Decimal]


@dataclass(frozen=True)
class IncomeResult:
    monthly_amount: Decimal
    annual_amount: Decimal
    monthly_breakdown: Dict[int, Decimal]
    cache_hit: bool


@dataclass(frozen=True)
class Income:
    name: str
    schedule: PaymentSchedule
    is_passive: bool = False
    income_type: IncomeType = IncomeType.OTHER
    # Asset id when this income is the recorded payout of a held asset
    source_id: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    name: str
    schedule: PaymentSchedule
    category: str = "other"


@dataclass(frozen=True)
class Liability:
    name: str
    current_balance: Decimal
    schedule: PaymentSchedule
    interest_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class AllocationSlice:
    """Share of one asset or income type in a total."""

    type: str
    value: Decimal
    percentage: Decimal
    count: int


@dataclass(frozen=True)
class ProjectionMonth:
    month: date
    active_income: Decimal
    passive_income: Decimal
    asset_income: Decimal
    expense_total: Decimal
    liability_payments: Decimal
    income_total: Decimal
    net_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    passive_income_coverage: Decimal


__all__ = [
    "PaymentFrequency",
    "TransactionType",
    "AssetType",
    "IncomeType",
    "PaymentSchedule",
    "NormalizedSchedule",
    "PriceHistoryPoint",
    "Transaction",
    "RentalInfo",
    "BondInfo",
    "AssetDefinition",
    "PortfolioPosition",
    "PortfolioHistoryDay",
    "SkippedPosition",
    "HistoryReport",
    "PositionSummary",
    "IncomeAsset",
    "IncomeBreakdown",
    "IncomeResult",
    "Income",
    "Expense",
    "Liability",
    "AllocationSlice",
    "ProjectionMonth",
]
