from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from networth.errors import PreconditionViolation
from networth.income import calculate_asset_income
from networth.models import (
    AssetDefinition,
    AssetType,
    BondInfo,
    Expense,
    Income,
    IncomeAsset,
    IncomeType,
    Liability,
    PaymentFrequency,
    PaymentSchedule,
    PortfolioPosition,
    RentalInfo,
)
from networth.projections import asset_allocation, cash_flow_projection, income_allocation


def monthly(amount: str) -> PaymentSchedule:
    return PaymentSchedule(frequency=PaymentFrequency.MONTHLY, amount=Decimal(amount))


def holding(asset_id: str, asset_type: AssetType, value: str = "0", quantity: str | None = None, **extra):
    definition = AssetDefinition(id=asset_id, name=asset_id.title(), asset_type=asset_type, **extra)
    return IncomeAsset(
        position=PortfolioPosition(asset_definition=definition),
        quantity=Decimal(quantity) if quantity is not None else None,
        value=Decimal(value),
    )


def dividend_stock(quantity: str = "100", value: str = "5000") -> IncomeAsset:
    return holding(
        "ko",
        AssetType.STOCK,
        value=value,
        quantity=quantity,
        dividend_info=PaymentSchedule(frequency=PaymentFrequency.QUARTERLY, amount=Decimal("0.5")),
    )


def test_asset_allocation_groups_by_type_largest_first():
    assets = [
        dividend_stock(value="5000"),
        holding("msft", AssetType.STOCK, value="3000"),
        holding("flat", AssetType.REAL_ESTATE, value="12000"),
        holding("btc", AssetType.CRYPTO, value="0"),
    ]

    slices = asset_allocation(assets)

    assert [s.type for s in slices] == ["real_estate", "stock", "crypto"]
    assert slices[0].percentage == Decimal("60")
    assert slices[1].value == Decimal("8000")
    assert slices[1].count == 2
    assert slices[2].percentage == 0
    assert sum(s.percentage for s in slices) == Decimal("100")


def test_asset_allocation_of_worthless_portfolio_has_zero_shares():
    slices = asset_allocation([holding("btc", AssetType.CRYPTO)])
    assert [(s.type, s.percentage, s.count) for s in slices] == [("crypto", Decimal("0"), 1)]


def test_income_allocation_maps_asset_payouts_to_income_types():
    incomes = [
        Income("Salary", monthly("3000"), income_type=IncomeType.SALARY),
        Income("Tutoring", monthly("0"), income_type=IncomeType.SIDE_JOB),
    ]
    assets = [
        dividend_stock(),
        holding("flat", AssetType.REAL_ESTATE, rental_info=RentalInfo(base_rent=Decimal("900"))),
        holding("bund", AssetType.BOND, value="12000", bond_info=BondInfo(interest_rate=Decimal("1"))),
    ]

    slices = {s.type: s for s in income_allocation(incomes, assets)}

    assert set(slices) == {"salary", "rental", "dividend", "interest"}
    assert slices["salary"].value == Decimal("3000")
    assert slices["rental"].value == Decimal("900")
    assert slices["dividend"].value == Decimal("200") / Decimal("12")
    assert slices["interest"].value == Decimal("10")
    assert slices["salary"].count == 1
    assert [s.type for s in income_allocation(incomes, assets)][:2] == ["salary", "rental"]


def test_income_allocation_skips_assets_already_recorded_as_income():
    incomes = [
        Income("Flat rent", monthly("950"), is_passive=True, income_type=IncomeType.RENTAL, source_id="flat"),
    ]
    assets = [holding("flat", AssetType.REAL_ESTATE, rental_info=RentalInfo(base_rent=Decimal("900")))]

    [rental] = income_allocation(incomes, assets)

    assert rental.value == Decimal("950")
    assert rental.count == 1
    assert rental.percentage == Decimal("100")


def test_projection_follows_calendar_months_and_asset_payouts():
    incomes = [
        Income("Salary", monthly("3000"), income_type=IncomeType.SALARY),
        Income("Royalties", monthly("200"), is_passive=True),
    ]
    expenses = [Expense("Rent", monthly("1500"), category="housing")]
    liabilities = [Liability("Car loan", Decimal("8000"), monthly("500"))]

    months = cash_flow_projection(
        incomes, expenses, liabilities, [dividend_stock()], months=4, start=date(2024, 11, 17)
    )

    assert [m.month for m in months] == [
        date(2024, 11, 1),
        date(2024, 12, 1),
        date(2025, 1, 1),
        date(2025, 2, 1),
    ]
    november, december = months[0], months[1]
    assert november.active_income == Decimal("3000")
    assert november.passive_income == Decimal("200")
    assert november.asset_income == 0
    assert november.income_total == Decimal("3200")
    assert november.net_cash_flow == Decimal("1200")
    assert november.passive_income_coverage == Decimal("0.1")

    assert december.asset_income == Decimal("50")
    assert december.income_total == Decimal("3250")
    assert december.passive_income_coverage == Decimal("0.125")
    assert months[-1].cumulative_cash_flow == Decimal("4850")


def test_projection_without_obligations_has_zero_coverage():
    [month] = cash_flow_projection(
        [Income("Dividends", monthly("100"), is_passive=True)], [], [], months=1, start=date(2024, 1, 1)
    )
    assert month.passive_income_coverage == 0
    assert month.net_cash_flow == Decimal("100")


def test_projection_uses_supplied_income_function():
    calls = []

    def tracked(asset):
        calls.append(asset.definition.id)
        return calculate_asset_income(asset)

    cash_flow_projection([], [], [], [dividend_stock()], months=2, start=date(2024, 3, 1), income_fn=tracked)
    assert calls == ["ko"]


def test_projection_needs_at_least_one_month():
    with pytest.raises(PreconditionViolation):
        cash_flow_projection([], [], [], months=0)
