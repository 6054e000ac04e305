"""Allocation breakdowns and forward cash-flow projections."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Sequence

from .errors import PreconditionViolation
from .income import calculate_asset_income
from .models import (
    AllocationSlice,
    AssetType,
    Expense,
    Income,
    IncomeAsset,
    IncomeBreakdown,
    IncomeType,
    Liability,
    ProjectionMonth,
)
from .schedules import (
    monthly_liability_payments,
    normalize,
    passive_monthly_income,
    total_monthly_expenses,
    total_monthly_income,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

ASSET_INCOME_TYPES: Dict[AssetType, IncomeType] = {
    AssetType.STOCK: IncomeType.DIVIDEND,
    AssetType.BOND: IncomeType.INTEREST,
    AssetType.REAL_ESTATE: IncomeType.RENTAL,
    AssetType.CRYPTO: IncomeType.INTEREST,
    AssetType.CASH: IncomeType.INTEREST,
}

IncomeFn = Callable[[IncomeAsset], IncomeBreakdown]


def _slices(values: Dict[str, Decimal], counts: Dict[str, int]) -> List[AllocationSlice]:
    total = sum(values.values(), ZERO)
    slices = [
        AllocationSlice(
            type=kind,
            value=value,
            percentage=value / total * HUNDRED if total > 0 else ZERO,
            count=counts.get(kind, 0),
        )
        for kind, value in values.items()
    ]
    return sorted(slices, key=lambda s: (-s.value, s.type))


def asset_allocation(assets: Iterable[IncomeAsset]) -> List[AllocationSlice]:
    """Group asset values by asset type, largest first."""

    values: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for asset in assets:
        kind = AssetType(asset.definition.asset_type).value
        values[kind] = values.get(kind, ZERO) + Decimal(asset.value)
        counts[kind] = counts.get(kind, 0) + 1
    result = _slices(values, counts)
    logger.info("Asset allocation over %d types, total %s", len(result), sum(values.values(), ZERO))
    return result


def _unrecorded(assets: Iterable[IncomeAsset], incomes: Sequence[Income]) -> List[IncomeAsset]:
    recorded = {income.source_id for income in incomes if income.source_id}
    return [asset for asset in assets if asset.definition.id not in recorded]


def income_allocation(
    incomes: Sequence[Income],
    assets: Iterable[IncomeAsset] = (),
    income_fn: IncomeFn = calculate_asset_income,
) -> List[AllocationSlice]:
    """Group monthly income by income type, largest first.

    Assets contribute under the type their payouts fall into unless an
    income entry already records them through ``source_id``. Entries and
    assets with no positive monthly amount are left out.
    """

    values: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}

    def add(kind: IncomeType, amount: Decimal) -> None:
        values[kind.value] = values.get(kind.value, ZERO) + amount
        counts[kind.value] = counts.get(kind.value, 0) + 1

    for income in incomes:
        monthly = normalize(income.schedule).monthly_amount
        if monthly > 0:
            add(IncomeType(income.income_type), monthly)

    for asset in _unrecorded(assets, incomes):
        monthly = income_fn(asset).monthly_amount
        if monthly > 0:
            add(ASSET_INCOME_TYPES.get(AssetType(asset.definition.asset_type), IncomeType.OTHER), monthly)

    return _slices(values, counts)


def _month_start(start: date, offset: int) -> date:
    index = start.month - 1 + offset
    return date(start.year + index // 12, index % 12 + 1, 1)


def cash_flow_projection(
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    liabilities: Sequence[Liability],
    assets: Iterable[IncomeAsset] = (),
    *,
    months: int = 12,
    start: date | None = None,
    income_fn: IncomeFn = calculate_asset_income,
) -> List[ProjectionMonth]:
    """Project cash flow for ``months`` calendar months from ``start``.

    Schedule-based income, expenses and liability payments use their monthly
    equivalents; asset income follows each asset's actual payment months.
    Passive coverage is ``(passive + asset income) / (expenses + liability
    payments)`` and is zero when there are no obligations.
    """

    if months < 1:
        raise PreconditionViolation(f"projection needs at least one month, got {months}")

    total_income = total_monthly_income(incomes)
    passive = passive_monthly_income(incomes)
    active = total_income - passive
    expense_total = total_monthly_expenses(expenses)
    liability_total = monthly_liability_payments(liabilities)
    obligations = expense_total + liability_total

    by_month: Dict[int, Decimal] = {}
    for asset in _unrecorded(assets, incomes):
        for month, amount in income_fn(asset).monthly_breakdown.items():
            by_month[month] = by_month.get(month, ZERO) + Decimal(amount)

    first = start or date.today()
    cumulative = ZERO
    projection: List[ProjectionMonth] = []
    for offset in range(months):
        month_start = _month_start(first, offset)
        asset_income = by_month.get(month_start.month, ZERO)
        income_month = active + passive + asset_income
        net = income_month - obligations
        cumulative += net
        projection.append(
            ProjectionMonth(
                month=month_start,
                active_income=active,
                passive_income=passive,
                asset_income=asset_income,
                expense_total=expense_total,
                liability_payments=liability_total,
                income_total=income_month,
                net_cash_flow=net,
                cumulative_cash_flow=cumulative,
                passive_income_coverage=(passive + asset_income) / obligations if obligations > 0 else ZERO,
            )
        )

    logger.info(
        "Projected %d months from %s, cumulative cash flow %s",
        months,
        projection[0].month.isoformat(),
        cumulative,
    )
    return projection


__all__ = [
    "ASSET_INCOME_TYPES",
    "asset_allocation",
    "income_allocation",
    "cash_flow_projection",
]
