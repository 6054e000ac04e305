from __future__ import annotations

from datetime import date
from decimal import Decimal

from networth.models import Transaction, TransactionType
from networth.replay import net_invested_as_of, quantity_as_of


def build_transactions():
    return [
        Transaction(
            id="tx1",
            purchase_date=date(2024, 1, 1),
            purchase_quantity=Decimal("10"),
            purchase_price=Decimal("100"),
        ),
        Transaction(
            id="tx2",
            purchase_date=date(2024, 2, 1),
            purchase_quantity=Decimal("4"),
            purchase_price=Decimal("120"),
            transaction_type=TransactionType.SELL,
        ),
    ]


def test_buy_then_sell_nets_quantity():
    transactions = build_transactions()
    assert quantity_as_of(transactions, date(2023, 12, 31)) == Decimal("0")
    assert quantity_as_of(transactions, date(2024, 1, 15)) == Decimal("10")
    assert quantity_as_of(transactions, date(2024, 2, 1)) == Decimal("6")
    assert quantity_as_of(transactions, date(2024, 2, 15)) == Decimal("6")


def test_oversold_position_goes_negative():
    transactions = [
        Transaction(
            id="sell",
            purchase_date=date(2024, 1, 1),
            purchase_quantity=Decimal("3"),
            purchase_price=Decimal("10"),
            transaction_type=TransactionType.SELL,
        )
    ]
    assert quantity_as_of(transactions, date(2024, 1, 2)) == Decimal("-3")


def test_net_invested_subtracts_sale_proceeds():
    transactions = build_transactions()
    assert net_invested_as_of(transactions, date(2024, 1, 15)) == Decimal("1000")
    assert net_invested_as_of(transactions, date(2024, 2, 15)) == Decimal("520")
