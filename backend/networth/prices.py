"""Price lookups over sparse, unsorted price histories."""

from __future__ import annotations

from bisect import bisect_right
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from .models import PriceHistoryPoint

ZERO = Decimal("0")


def _by_date(history: Sequence[PriceHistoryPoint]) -> Dict[date, Decimal]:
    # Later points overwrite earlier ones for the same date.
    prices: Dict[date, Decimal] = {}
    for point in history:
        prices[point.date] = point.price
    return prices


def resolve_price(
    history: Sequence[PriceHistoryPoint] | None,
    target: date,
    current_price: Decimal | None = None,
) -> Decimal:
    """Return the effective price on ``target``.

    Exact match first, then the most recent earlier point, then
    ``current_price``, then zero.
    """

    prices = _by_date(history or ())
    if target in prices:
        return prices[target]
    prior = [d for d in prices if d < target]
    if prior:
        return prices[max(prior)]
    if current_price is not None:
        return current_price
    return ZERO


class PriceIndex:
    """Sorted view of one price history for repeated lookups.

    Gives the same answers as :func:`resolve_price` but in logarithmic time,
    which matters when a timeline resolves every day of a long range.
    """

    def __init__(self, history: Sequence[PriceHistoryPoint] | None, current_price: Decimal | None = None):
        prices = _by_date(history or ())
        self._dates: List[date] = sorted(prices)
        self._prices: List[Decimal] = [prices[d] for d in self._dates]
        self.current_price = current_price

    def __len__(self) -> int:
        return len(self._dates)

    def resolve(self, target: date) -> Decimal:
        idx = bisect_right(self._dates, target)
        if idx:
            return self._prices[idx - 1]
        if self.current_price is not None:
            return self.current_price
        return ZERO


def latest_price(history: Sequence[PriceHistoryPoint] | None) -> Optional[PriceHistoryPoint]:
    """Return the point with the greatest date, or ``None`` for an empty history."""

    latest: Optional[PriceHistoryPoint] = None
    for point in history or ():
        if latest is None or point.date >= latest.date:
            latest = point
    return latest


def price_history_for_range(
    history: Sequence[PriceHistoryPoint] | None,
    start: date,
    end: date,
) -> List[PriceHistoryPoint]:
    """Return the points dated within ``start``..``end``, oldest first."""

    selected = [p for p in history or () if start <= p.date <= end]
    return sorted(selected, key=lambda p: p.date)


__all__ = ["resolve_price", "PriceIndex", "latest_price", "price_history_for_range"]
