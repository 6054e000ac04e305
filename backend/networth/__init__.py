"""Core package for the net worth calculation engine."""

from .cache import IncomeCacheService, InMemoryKeyValueStore, KeyValueStore
from .dates import DateRange, TimeRange
from .models import (
    AssetDefinition,
    PaymentFrequency,
    PaymentSchedule,
    PortfolioHistoryDay,
    PortfolioPosition,
    PriceHistoryPoint,
    Transaction,
    TransactionType,
)
from .prices import resolve_price
from .projections import asset_allocation, cash_flow_projection, income_allocation
from .replay import quantity_as_of
from .schedules import normalize
from .timeline import build_history, build_history_report

__all__ = [
    "AssetDefinition",
    "PaymentFrequency",
    "PaymentSchedule",
    "PortfolioHistoryDay",
    "PortfolioPosition",
    "PriceHistoryPoint",
    "Transaction",
    "TransactionType",
    "DateRange",
    "TimeRange",
    "normalize",
    "resolve_price",
    "quantity_as_of",
    "build_history",
    "build_history_report",
    "asset_allocation",
    "income_allocation",
    "cash_flow_projection",
    "IncomeCacheService",
    "InMemoryKeyValueStore",
    "KeyValueStore",
]
