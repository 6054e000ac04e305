"""Payment schedule normalization and cash-flow totals.

Every income, expense, liability and dividend in the tracker is described by a
:class:`~networth.models.PaymentSchedule`. The helpers here turn a schedule
into comparable monthly and annual figures and aggregate those figures into
the totals shown on the dashboard.
"""

from __future__ import annotations

from decimal import Decimal, getcontext
from typing import Dict, FrozenSet, Iterable

from .errors import PreconditionViolation
from .models import (
    Expense,
    Income,
    Liability,
    NormalizedSchedule,
    PaymentFrequency,
    PaymentSchedule,
)

getcontext().prec = 28

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")
ALL_MONTHS: FrozenSet[int] = frozenset(range(1, 13))
DEFAULT_QUARTERLY_MONTHS: FrozenSet[int] = frozenset({3, 6, 9, 12})
DEFAULT_ANNUAL_MONTHS: FrozenSet[int] = frozenset({12})


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise PreconditionViolation(f"month must be within 1..12, got {month}")


def _validate(schedule: PaymentSchedule) -> None:
    if schedule.amount < 0:
        raise PreconditionViolation(f"schedule amount must be >= 0, got {schedule.amount}")
    for month in schedule.months or ():
        _check_month(month)
    for month in schedule.payment_months or ():
        _check_month(month)
    for month, value in (schedule.custom_amounts or {}).items():
        _check_month(month)
        if value < 0:
            raise PreconditionViolation(
                f"custom amount for month {month} must be >= 0, got {value}"
            )
    if schedule.frequency == PaymentFrequency.QUARTERLY:
        declared = _declared_months(schedule)
        if declared is not None and len(declared) != 4:
            raise PreconditionViolation(
                f"quarterly schedule must pay in exactly 4 months, got {sorted(declared)}"
            )


def _declared_months(schedule: PaymentSchedule) -> FrozenSet[int] | None:
    months = schedule.payment_months or schedule.months
    return frozenset(months) if months else None


def paying_months(schedule: PaymentSchedule) -> FrozenSet[int]:
    """Return the calendar months in which ``schedule`` pays."""

    frequency = schedule.frequency
    if frequency == PaymentFrequency.MONTHLY:
        return ALL_MONTHS
    if frequency == PaymentFrequency.QUARTERLY:
        return _declared_months(schedule) or DEFAULT_QUARTERLY_MONTHS
    if frequency == PaymentFrequency.ANNUALLY:
        declared = _declared_months(schedule)
        if declared:
            return frozenset({min(declared)})
        return DEFAULT_ANNUAL_MONTHS
    if frequency == PaymentFrequency.CUSTOM:
        if schedule.months:
            return frozenset(schedule.months)
        return frozenset((schedule.custom_amounts or {}).keys())
    return frozenset()


def _custom_contribution(schedule: PaymentSchedule, month: int) -> Decimal:
    overrides = schedule.custom_amounts or {}
    if month in overrides:
        return Decimal(overrides[month])
    return Decimal(schedule.amount)


def normalize(schedule: PaymentSchedule) -> NormalizedSchedule:
    """Convert ``schedule`` into monthly and annual equivalents."""

    _validate(schedule)
    amount = Decimal(schedule.amount)
    months = paying_months(schedule)
    frequency = schedule.frequency

    if frequency == PaymentFrequency.MONTHLY:
        return NormalizedSchedule(amount, amount * MONTHS_PER_YEAR, months)
    if frequency == PaymentFrequency.QUARTERLY:
        annual = amount * 4
        return NormalizedSchedule(annual / MONTHS_PER_YEAR, annual, months)
    if frequency == PaymentFrequency.ANNUALLY:
        return NormalizedSchedule(amount / MONTHS_PER_YEAR, amount, months)
    if frequency == PaymentFrequency.CUSTOM:
        annual = sum((_custom_contribution(schedule, m) for m in sorted(months)), ZERO)
        return NormalizedSchedule(annual / MONTHS_PER_YEAR, annual, months)
    return NormalizedSchedule(ZERO, ZERO, frozenset())


def amount_for_month(schedule: PaymentSchedule, month: int) -> Decimal:
    """Return the amount ``schedule`` pays in calendar ``month``."""

    _check_month(month)
    _validate(schedule)
    if month not in paying_months(schedule):
        return ZERO
    if schedule.frequency == PaymentFrequency.CUSTOM:
        return _custom_contribution(schedule, month)
    return Decimal(schedule.amount)


def monthly_breakdown(schedule: PaymentSchedule, quantity: Decimal = Decimal("1")) -> Dict[int, Decimal]:
    """Return the payment of every calendar month, scaled by ``quantity``."""

    return {month: amount_for_month(schedule, month) * quantity for month in range(1, 13)}


def dividend_schedule(schedule: PaymentSchedule, quantity: Decimal) -> NormalizedSchedule:
    """Scale a per-share dividend schedule by the number of shares held."""

    per_share = normalize(schedule)
    return NormalizedSchedule(
        monthly_amount=per_share.monthly_amount * quantity,
        annual_amount=per_share.annual_amount * quantity,
        paying_months=per_share.paying_months,
    )


# Totals


def total_monthly(schedules: Iterable[PaymentSchedule]) -> Decimal:
    return sum((normalize(s).monthly_amount for s in schedules), ZERO)


def total_monthly_income(incomes: Iterable[Income]) -> Decimal:
    return total_monthly(income.schedule for income in incomes)


def passive_monthly_income(incomes: Iterable[Income]) -> Decimal:
    return total_monthly(income.schedule for income in incomes if income.is_passive)


def total_monthly_expenses(expenses: Iterable[Expense]) -> Decimal:
    return total_monthly(expense.schedule for expense in expenses)


def expenses_by_category(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    """Group monthly expense equivalents by category."""

    categorized: Dict[str, Decimal] = {}
    for expense in expenses:
        monthly = normalize(expense.schedule).monthly_amount
        categorized[expense.category] = categorized.get(expense.category, ZERO) + monthly
    return categorized


def monthly_liability_payments(liabilities: Iterable[Liability]) -> Decimal:
    return total_monthly(liability.schedule for liability in liabilities)


def total_debt(liabilities: Iterable[Liability]) -> Decimal:
    return sum((Decimal(liability.current_balance) for liability in liabilities), ZERO)


def net_worth(total_assets: Decimal, total_liabilities: Decimal) -> Decimal:
    return total_assets - total_liabilities


def monthly_cash_flow(monthly_income: Decimal, monthly_expenses: Decimal, monthly_debt_payments: Decimal) -> Decimal:
    return monthly_income - monthly_expenses - monthly_debt_payments


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return ZERO
    return numerator / denominator * Decimal("100")


def passive_income_ratio(total_income: Decimal, passive_income: Decimal) -> Decimal:
    return _percent(passive_income, total_income)


def expense_ratio(monthly_expenses: Decimal, monthly_income: Decimal) -> Decimal:
    return _percent(monthly_expenses, monthly_income)


def savings_rate(monthly_savings: Decimal, monthly_income: Decimal) -> Decimal:
    return _percent(monthly_savings, monthly_income)


def debt_to_income_ratio(total_debt_amount: Decimal, monthly_income: Decimal) -> Decimal:
    """Total debt as a percentage of annual income."""

    return _percent(total_debt_amount, monthly_income * MONTHS_PER_YEAR)


__all__ = [
    "ALL_MONTHS",
    "DEFAULT_QUARTERLY_MONTHS",
    "DEFAULT_ANNUAL_MONTHS",
    "paying_months",
    "normalize",
    "amount_for_month",
    "monthly_breakdown",
    "dividend_schedule",
    "total_monthly",
    "total_monthly_income",
    "passive_monthly_income",
    "total_monthly_expenses",
    "expenses_by_category",
    "monthly_liability_payments",
    "total_debt",
    "net_worth",
    "monthly_cash_flow",
    "passive_income_ratio",
    "expense_ratio",
    "savings_rate",
    "debt_to_income_ratio",
]
