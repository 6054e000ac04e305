"""Day-by-day net worth reconstruction from positions and price history."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Sequence

from .dates import DateRange, TimeRange
from .errors import InvalidPositionError
from .models import (
    HistoryReport,
    PortfolioHistoryDay,
    PortfolioPosition,
    PositionSummary,
    SkippedPosition,
    Transaction,
    TransactionType,
)
from .prices import PriceIndex
from .replay import net_invested_as_of, quantity_as_of

_logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class _PreparedPosition:
    """Validated position with its price history indexed."""

    asset_id: str
    name: str
    transactions: tuple[Transaction, ...]
    prices: PriceIndex


def _finite_decimal(value: object, what: str, asset_id: str | None) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidPositionError(asset_id, f"{what} is missing")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidPositionError(asset_id, f"{what} is not a number: {value!r}") from exc
    if not number.is_finite():
        raise InvalidPositionError(asset_id, f"{what} is not finite: {value!r}")
    return number


def _prepare(position: PortfolioPosition) -> _PreparedPosition:
    definition = getattr(position, "asset_definition", None)
    if definition is None:
        raise InvalidPositionError(None, "position has no asset definition")
    asset_id = definition.id

    transactions: list[Transaction] = []
    for tx in position.transactions or ():
        if not isinstance(tx.purchase_date, date):
            raise InvalidPositionError(asset_id, f"transaction {tx.id} has no purchase date")
        try:
            tx_type = TransactionType(tx.transaction_type)
        except ValueError as exc:
            raise InvalidPositionError(
                asset_id, f"transaction {tx.id} has unknown type {tx.transaction_type!r}"
            ) from exc
        quantity = _finite_decimal(tx.purchase_quantity, f"quantity of transaction {tx.id}", asset_id)
        price = _finite_decimal(tx.purchase_price, f"price of transaction {tx.id}", asset_id)
        transactions.append(
            replace(tx, purchase_quantity=quantity, purchase_price=price, transaction_type=tx_type)
        )

    history = []
    for point in definition.price_history or ():
        if not isinstance(point.date, date):
            raise InvalidPositionError(asset_id, f"price point has invalid date {point.date!r}")
        history.append(replace(point, price=_finite_decimal(point.price, "historical price", asset_id)))

    current_price = None
    if definition.current_price is not None:
        current_price = _finite_decimal(definition.current_price, "current price", asset_id)

    return _PreparedPosition(
        asset_id=asset_id,
        name=definition.name,
        transactions=tuple(transactions),
        prices=PriceIndex(history, current_price),
    )


def _prepare_all(
    positions: Sequence[PortfolioPosition],
    logger: logging.Logger,
) -> tuple[list[_PreparedPosition], list[SkippedPosition]]:
    prepared: list[_PreparedPosition] = []
    skipped: list[SkippedPosition] = []
    for position in positions:
        try:
            prepared.append(_prepare(position))
        except InvalidPositionError as exc:
            logger.warning("Skipping position %s: %s", exc.asset_id, exc.reason)
            skipped.append(SkippedPosition(asset_id=exc.asset_id, reason=exc.reason))
    return prepared, skipped


def _change_percentage(change: Decimal, previous: Decimal) -> Decimal:
    if previous == 0:
        return ZERO
    return change / previous * HUNDRED


def build_history_report(
    positions: Sequence[PortfolioPosition],
    liabilities_total: Decimal,
    start_date: date,
    end_date: date,
    *,
    logger: logging.Logger | None = None,
) -> HistoryReport:
    """Compute the daily net worth series and the positions left out of it.

    Liabilities are applied at their current total on every day; they are not
    replayed historically.
    """

    log = logger or _logger
    days = DateRange(start_date, end_date)
    prepared, skipped = _prepare_all(positions, log)
    liabilities = Decimal(liabilities_total)

    log.info(
        "Building net worth history %s..%s for %d positions (%d skipped)",
        start_date.isoformat(),
        end_date.isoformat(),
        len(prepared),
        len(skipped),
    )

    series: List[PortfolioHistoryDay] = []
    previous: Decimal | None = None
    for current_date in days:
        total_asset_value = ZERO
        for position in prepared:
            quantity = quantity_as_of(position.transactions, current_date)
            if quantity == 0:
                continue
            total_asset_value += quantity * position.prices.resolve(current_date)
        net = total_asset_value - liabilities
        if previous is None:
            change = ZERO
            change_pct = ZERO
        else:
            change = net - previous
            change_pct = _change_percentage(change, previous)
        series.append(
            PortfolioHistoryDay(
                date=current_date,
                value=net,
                change=change,
                change_percentage=change_pct,
            )
        )
        previous = net

    return HistoryReport(days=series, skipped=skipped)


def build_history(
    positions: Sequence[PortfolioPosition],
    liabilities_total: Decimal,
    start_date: date,
    end_date: date,
    *,
    logger: logging.Logger | None = None,
) -> List[PortfolioHistoryDay]:
    """Return one :class:`PortfolioHistoryDay` per calendar day, oldest first."""

    return build_history_report(
        positions, liabilities_total, start_date, end_date, logger=logger
    ).days


def build_history_for_range(
    positions: Sequence[PortfolioPosition],
    liabilities_total: Decimal,
    time_range: TimeRange,
    *,
    today: date | None = None,
    logger: logging.Logger | None = None,
) -> HistoryReport:
    """Compute the history for a preset window ending ``today``."""

    window = DateRange.for_time_range(TimeRange(time_range), end=today or date.today())
    return build_history_report(
        positions, liabilities_total, window.start, window.end, logger=logger
    )


def summarize_positions(
    positions: Sequence[PortfolioPosition],
    as_of: date,
    *,
    logger: logging.Logger | None = None,
) -> List[PositionSummary]:
    """Return quantity, price, value and net invested of each valid position."""

    prepared, _ = _prepare_all(positions, logger or _logger)
    summaries: List[PositionSummary] = []
    for position in prepared:
        quantity = quantity_as_of(position.transactions, as_of)
        price = position.prices.resolve(as_of)
        summaries.append(
            PositionSummary(
                asset_id=position.asset_id,
                name=position.name,
                quantity=quantity,
                price=price,
                value=quantity * price,
                net_invested=net_invested_as_of(position.transactions, as_of),
            )
        )
    return summaries


__all__ = [
    "build_history",
    "build_history_report",
    "build_history_for_range",
    "summarize_positions",
]
