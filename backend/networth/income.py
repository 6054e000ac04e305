"""Income produced by held assets: dividends, interest and rent."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict

from .errors import PreconditionViolation
from .models import AssetType, IncomeAsset, IncomeBreakdown, PaymentFrequency
from .replay import quantity_as_of
from .schedules import dividend_schedule, monthly_breakdown

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
MONTHS = range(1, 13)


def _flat(monthly: Decimal) -> IncomeBreakdown:
    breakdown: Dict[int, Decimal] = {month: monthly for month in MONTHS}
    return IncomeBreakdown(monthly_amount=monthly, annual_amount=monthly * 12, monthly_breakdown=breakdown)


def held_quantity(asset: IncomeAsset, as_of: date | None = None) -> Decimal:
    """Return the shares of ``asset`` that earn dividends.

    A caller-supplied ``asset.quantity`` wins, even when it disagrees with the
    transactions. Without one the transactions are replayed up to ``as_of``
    (today by default).
    """

    if asset.quantity is not None:
        return Decimal(asset.quantity)
    try:
        return quantity_as_of(asset.position.transactions or (), as_of or date.today())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PreconditionViolation(
            f"cannot replay transactions of asset {asset.definition.id}: {exc}"
        ) from exc


def stock_dividend_breakdown(asset: IncomeAsset, as_of: date | None = None) -> IncomeBreakdown | None:
    definition = asset.definition
    if definition.asset_type != AssetType.STOCK:
        return None
    schedule = definition.dividend_info
    if schedule is None or schedule.frequency == PaymentFrequency.NONE:
        return None
    quantity = held_quantity(asset, as_of)
    if quantity <= 0:
        return None
    normalized = dividend_schedule(schedule, quantity)
    return IncomeBreakdown(
        monthly_amount=normalized.monthly_amount,
        annual_amount=normalized.annual_amount,
        monthly_breakdown=monthly_breakdown(schedule, quantity),
    )


def interest_breakdown(asset: IncomeAsset) -> IncomeBreakdown | None:
    definition = asset.definition
    if definition.asset_type not in (AssetType.BOND, AssetType.CASH):
        return None
    if definition.bond_info is None or not asset.value:
        return None
    annual = Decimal(definition.bond_info.interest_rate) * asset.value / Decimal("100")
    return _flat(annual / 12)


def rental_breakdown(asset: IncomeAsset) -> IncomeBreakdown | None:
    definition = asset.definition
    if definition.asset_type != AssetType.REAL_ESTATE or definition.rental_info is None:
        return None
    return _flat(Decimal(definition.rental_info.base_rent))


def calculate_asset_income(asset: IncomeAsset) -> IncomeBreakdown:
    """Compute the monthly, annual and per-month income of ``asset``."""

    for calculator in (stock_dividend_breakdown, interest_breakdown, rental_breakdown):
        result = calculator(asset)
        if result is not None:
            return result
    logger.debug("No income model for asset %s (%s)", asset.definition.id, asset.definition.asset_type)
    return IncomeBreakdown(monthly_amount=ZERO, annual_amount=ZERO, monthly_breakdown={})


__all__ = [
    "calculate_asset_income",
    "held_quantity",
    "stock_dividend_breakdown",
    "interest_breakdown",
    "rental_breakdown",
]
