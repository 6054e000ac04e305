from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from networth.dates import TimeRange
from networth.errors import PreconditionViolation
from networth.models import (
    AssetDefinition,
    PortfolioPosition,
    PriceHistoryPoint,
    Transaction,
    TransactionType,
)
from networth.timeline import (
    build_history,
    build_history_for_range,
    build_history_report,
    summarize_positions,
)


def buy(tx_id: str, on: date, quantity: str, price: str = "100") -> Transaction:
    return Transaction(
        id=tx_id,
        purchase_date=on,
        purchase_quantity=Decimal(quantity),
        purchase_price=Decimal(price),
    )


def build_position(prices: dict, transactions, current_price=None, asset_id="asset-1") -> PortfolioPosition:
    definition = AssetDefinition(
        id=asset_id,
        name=asset_id.upper(),
        current_price=current_price,
        price_history=[PriceHistoryPoint(date=d, price=Decimal(p)) for d, p in prices.items()],
    )
    return PortfolioPosition(asset_definition=definition, transactions=transactions)


def test_constant_price_produces_flat_series():
    position = build_position({date(2024, 1, 1): "100"}, [buy("tx1", date(2024, 1, 1), "1")])
    days = build_history([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 3))
    assert [d.date for d in days] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    assert all(d.value == Decimal("100") for d in days)
    assert all(d.change == 0 and d.change_percentage == 0 for d in days)


def test_price_move_reports_change_and_percentage():
    position = build_position(
        {date(2024, 1, 1): "100", date(2024, 1, 2): "110"},
        [buy("tx1", date(2024, 1, 1), "1")],
    )
    days = build_history([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 2))
    assert days[0].change == 0
    assert days[1].value == Decimal("110")
    assert days[1].change == Decimal("10")
    assert days[1].change_percentage == Decimal("10")


def test_liabilities_are_subtracted_every_day():
    position = build_position({date(2024, 1, 1): "100"}, [buy("tx1", date(2024, 1, 1), "2")])
    days = build_history([position], Decimal("50"), date(2024, 1, 1), date(2024, 1, 2))
    assert [d.value for d in days] == [Decimal("150"), Decimal("150")]


def test_sell_reduces_value_from_its_date():
    transactions = [
        buy("tx1", date(2024, 1, 1), "10"),
        Transaction(
            id="tx2",
            purchase_date=date(2024, 1, 3),
            purchase_quantity=Decimal("4"),
            purchase_price=Decimal("10"),
            transaction_type=TransactionType.SELL,
        ),
    ]
    position = build_position({date(2024, 1, 1): "10"}, transactions)
    days = build_history([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 3))
    assert [d.value for d in days] == [Decimal("100"), Decimal("100"), Decimal("60")]
    assert days[2].change == Decimal("-40")
    assert days[2].change_percentage == Decimal("-40")


def test_days_before_first_price_use_current_price():
    position = build_position(
        {date(2024, 1, 3): "20"},
        [buy("tx1", date(2024, 1, 1), "1")],
        current_price=Decimal("15"),
    )
    days = build_history([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 3))
    assert [d.value for d in days] == [Decimal("15"), Decimal("15"), Decimal("20")]


def test_zero_previous_value_gives_zero_percentage():
    position = build_position({date(2024, 1, 1): "10"}, [buy("tx1", date(2024, 1, 2), "1")])
    days = build_history([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 2))
    assert days[0].value == 0
    assert days[1].change == Decimal("10")
    assert days[1].change_percentage == 0


def test_empty_portfolio_is_negative_liabilities():
    days = build_history([], Decimal("25"), date(2024, 1, 1), date(2024, 1, 2))
    assert [d.value for d in days] == [Decimal("-25"), Decimal("-25")]


def test_invalid_position_is_skipped_and_reported(caplog):
    good = build_position({date(2024, 1, 1): "10"}, [buy("tx1", date(2024, 1, 1), "1")])
    bad = build_position(
        {date(2024, 1, 1): "10"},
        [
            Transaction(
                id="broken",
                purchase_date=date(2024, 1, 1),
                purchase_quantity=None,  # type: ignore[arg-type]
                purchase_price=Decimal("10"),
            )
        ],
        asset_id="asset-2",
    )
    logger = logging.getLogger("tests.timeline")
    with caplog.at_level(logging.WARNING, logger="tests.timeline"):
        report = build_history_report([good, bad], Decimal("0"), date(2024, 1, 1), date(2024, 1, 1), logger=logger)

    assert [d.value for d in report.days] == [Decimal("10")]
    assert len(report.skipped) == 1
    assert report.skipped[0].asset_id == "asset-2"
    assert "quantity" in report.skipped[0].reason
    assert any("asset-2" in record.getMessage() for record in caplog.records)


def test_unknown_transaction_type_is_skipped():
    position = build_position(
        {date(2024, 1, 1): "10"},
        [
            Transaction(
                id="weird",
                purchase_date=date(2024, 1, 1),
                purchase_quantity=Decimal("1"),
                purchase_price=Decimal("10"),
                transaction_type="gift",  # type: ignore[arg-type]
            )
        ],
    )
    report = build_history_report([position], Decimal("0"), date(2024, 1, 1), date(2024, 1, 1))
    assert report.skipped[0].asset_id == "asset-1"
    assert report.days[0].value == 0


def test_inverted_dates_raise():
    with pytest.raises(PreconditionViolation):
        build_history([], Decimal("0"), date(2024, 1, 2), date(2024, 1, 1))


def test_history_is_deterministic():
    position = build_position(
        {date(2024, 1, 1): "100", date(2024, 1, 5): "90"},
        [buy("tx1", date(2024, 1, 1), "3")],
    )
    first = build_history([position], Decimal("10"), date(2024, 1, 1), date(2024, 1, 10))
    second = build_history([position], Decimal("10"), date(2024, 1, 1), date(2024, 1, 10))
    assert first == second


def test_history_for_preset_range():
    position = build_position({date(2024, 1, 1): "10"}, [buy("tx1", date(2024, 1, 1), "1")])
    report = build_history_for_range([position], Decimal("0"), TimeRange.WEEK, today=date(2024, 1, 31))
    assert len(report.days) == 7
    assert report.days[0].date == date(2024, 1, 25)
    assert report.days[-1].date == date(2024, 1, 31)


def test_summarize_positions():
    position = build_position(
        {date(2024, 1, 1): "10", date(2024, 2, 1): "12"},
        [buy("tx1", date(2024, 1, 1), "5", price="10")],
    )
    [summary] = summarize_positions([position], date(2024, 2, 10))
    assert summary.asset_id == "asset-1"
    assert summary.quantity == Decimal("5")
    assert summary.price == Decimal("12")
    assert summary.value == Decimal("60")
    assert summary.net_invested == Decimal("50")
