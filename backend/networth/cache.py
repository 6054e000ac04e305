"""Memoization of per-asset income keyed by a content fingerprint.

The service never invalidates individual entries: a changed asset simply
hashes to a new fingerprint and the old entry is no longer looked up. Stale
entries stay in the store until :meth:`IncomeCacheService.clear_cache`.
"""

from __future__ import annotations

import copy
import hashlib
import json
import logging
import threading
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Protocol

from .income import calculate_asset_income, held_quantity
from .models import AssetType, IncomeAsset, IncomeBreakdown, IncomeResult

_logger = logging.getLogger(__name__)

DIVIDEND_CACHE_BUCKET = "dividend_cache"
PORTFOLIO_CACHE_BUCKET = "portfolio_cache"
_INDEX_SUFFIX = "__keys__"


class KeyValueStore(Protocol):
    """Minimal persistent store used for memo tables."""

    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed store for tests and single-process use."""

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            value = self._items.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        stored = copy.deepcopy(value)
        with self._lock:
            self._items[key] = stored

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _canonical(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value.normalize(), "f") if value.is_finite() else str(value)
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return _canonical(asdict(value))
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_canonical(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def asset_fingerprint(asset: IncomeAsset) -> str:
    """Hash the fields of ``asset`` that affect its computed income.

    Stocks hash the share count their dividends are computed from, so a
    position priced off its transactions rehashes when a trade is added.
    """

    definition = asset.definition
    quantity = held_quantity(asset) if definition.asset_type == AssetType.STOCK else asset.quantity
    relevant = {
        "asset_definition_id": definition.id,
        "type": definition.asset_type,
        "dividend_info": definition.dividend_info,
        "rental_info": definition.rental_info,
        "bond_info": definition.bond_info,
        "quantity": quantity,
        "value": Decimal(asset.value),
    }
    payload = json.dumps(_canonical(relevant), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _encode(result: IncomeBreakdown) -> dict[str, Any]:
    return {
        "monthly_amount": str(result.monthly_amount),
        "annual_amount": str(result.annual_amount),
        "monthly_breakdown": {str(m): str(v) for m, v in result.monthly_breakdown.items()},
    }


def _decode(payload: dict[str, Any]) -> IncomeBreakdown:
    return IncomeBreakdown(
        monthly_amount=Decimal(payload["monthly_amount"]),
        annual_amount=Decimal(payload["annual_amount"]),
        monthly_breakdown={int(m): Decimal(v) for m, v in payload.get("monthly_breakdown", {}).items()},
    )


class IncomeCacheService:
    """Look up or compute the income of an asset under its fingerprint."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        bucket: str = DIVIDEND_CACHE_BUCKET,
        logger: logging.Logger | None = None,
    ):
        self.store = store
        self.bucket = bucket
        self._logger = logger or _logger
        self._index_lock = threading.Lock()

    @property
    def _index_key(self) -> str:
        return f"{self.bucket}:{_INDEX_SUFFIX}"

    def _entry_key(self, fingerprint: str) -> str:
        return f"{self.bucket}:{fingerprint}"

    def _remember(self, key: str) -> None:
        with self._index_lock:
            keys = self.store.get(self._index_key) or []
            if key not in keys:
                keys.append(key)
                self.store.set(self._index_key, keys)

    def get_or_compute(
        self,
        asset: IncomeAsset,
        compute_fn: Callable[[IncomeAsset], IncomeBreakdown] = calculate_asset_income,
    ) -> IncomeResult:
        key = self._entry_key(asset_fingerprint(asset))
        cached = self.store.get(key)
        if cached is not None:
            self._logger.debug("Income cache hit for asset %s", asset.definition.id)
            hit = _decode(cached)
            return IncomeResult(
                monthly_amount=hit.monthly_amount,
                annual_amount=hit.annual_amount,
                monthly_breakdown=hit.monthly_breakdown,
                cache_hit=True,
            )

        self._logger.info("Income cache miss for asset %s, computing", asset.definition.id)
        computed = compute_fn(asset)
        self.store.set(key, _encode(computed))
        self._remember(key)
        return IncomeResult(
            monthly_amount=computed.monthly_amount,
            annual_amount=computed.annual_amount,
            monthly_breakdown=dict(computed.monthly_breakdown),
            cache_hit=False,
        )

    def clear_cache(self) -> int:
        """Drop every entry this service wrote and return how many there were."""

        with self._index_lock:
            keys = self.store.get(self._index_key) or []
            for key in keys:
                self.store.remove(key)
            self.store.remove(self._index_key)
        self._logger.info("Cleared %d income cache entries from bucket %s", len(keys), self.bucket)
        return len(keys)


__all__ = [
    "DIVIDEND_CACHE_BUCKET",
    "PORTFOLIO_CACHE_BUCKET",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "IncomeCacheService",
    "asset_fingerprint",
]
