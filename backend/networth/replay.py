"""Transaction replay: point-in-time holdings of a position."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable

from .models import Transaction, TransactionType

ZERO = Decimal("0")


def signed_quantity(tx: Transaction) -> Decimal:
    """Return the quantity ``tx`` adds to the holding (negative for sells)."""

    quantity = Decimal(tx.purchase_quantity)
    if TransactionType(tx.transaction_type) == TransactionType.SELL:
        return -quantity
    return quantity


def quantity_as_of(transactions: Iterable[Transaction], as_of: date) -> Decimal:
    """Sum signed quantities of transactions dated on or before ``as_of``.

    Sells exceeding buys produce a negative holding; the result is not
    clamped.
    """

    return sum((signed_quantity(tx) for tx in transactions if tx.purchase_date <= as_of), ZERO)


def net_invested_as_of(transactions: Iterable[Transaction], as_of: date) -> Decimal:
    """Cash put into the position up to ``as_of``, net of sale proceeds."""

    return sum(
        (
            signed_quantity(tx) * Decimal(tx.purchase_price)
            for tx in transactions
            if tx.purchase_date <= as_of
        ),
        ZERO,
    )


__all__ = ["signed_quantity", "quantity_as_of", "net_invested_as_of"]
