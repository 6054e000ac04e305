from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from networth.models import PriceHistoryPoint
from networth.prices import PriceIndex, latest_price, price_history_for_range, resolve_price


def build_history():
    # Deliberately unsorted
    return [
        PriceHistoryPoint(date=date(2024, 2, 1), price=Decimal("12")),
        PriceHistoryPoint(date=date(2024, 1, 1), price=Decimal("10")),
        PriceHistoryPoint(date=date(2024, 3, 1), price=Decimal("15")),
    ]


def test_exact_match_wins():
    assert resolve_price(build_history(), date(2024, 2, 1)) == Decimal("12")


def test_falls_back_to_most_recent_prior_point():
    history = build_history()
    assert resolve_price(history, date(2024, 1, 15)) == Decimal("10")
    assert resolve_price(history, date(2024, 12, 31)) == Decimal("15")


def test_before_first_point_uses_current_price_then_zero():
    history = build_history()
    assert resolve_price(history, date(2023, 12, 1), Decimal("9")) == Decimal("9")
    assert resolve_price(history, date(2023, 12, 1)) == Decimal("0")


def test_empty_history_uses_current_price_or_zero():
    assert resolve_price([], date(2024, 1, 1), Decimal("42")) == Decimal("42")
    assert resolve_price(None, date(2024, 1, 1)) == Decimal("0")


def test_resolution_is_idempotent():
    history = build_history()
    target = date(2024, 2, 20)
    assert resolve_price(history, target) == resolve_price(history, target)


def test_duplicate_dates_keep_last_point():
    history = [
        PriceHistoryPoint(date=date(2024, 1, 1), price=Decimal("10")),
        PriceHistoryPoint(date=date(2024, 1, 1), price=Decimal("11")),
    ]
    assert resolve_price(history, date(2024, 1, 1)) == Decimal("11")
    assert PriceIndex(history).resolve(date(2024, 1, 5)) == Decimal("11")


def test_index_agrees_with_linear_resolution():
    history = build_history()
    index = PriceIndex(history, Decimal("7"))
    assert len(index) == 3
    day = date(2023, 12, 25)
    while day <= date(2024, 3, 10):
        assert index.resolve(day) == resolve_price(history, day, Decimal("7"))
        day += timedelta(days=1)


def test_latest_and_range_helpers():
    history = build_history()
    assert latest_price(history).date == date(2024, 3, 1)
    assert latest_price([]) is None
    window = price_history_for_range(history, date(2024, 1, 15), date(2024, 3, 1))
    assert [p.date for p in window] == [date(2024, 2, 1), date(2024, 3, 1)]
