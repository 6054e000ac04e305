"""Shared service instances injected into the API routes."""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import get_settings
from app.db.session import _session_factory
from app.services.kv_store import SqlKeyValueStore
from app.services.portfolio import PortfolioServiceClient
from networth.cache import (
    DIVIDEND_CACHE_BUCKET,
    PORTFOLIO_CACHE_BUCKET,
    IncomeCacheService,
    InMemoryKeyValueStore,
    KeyValueStore,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_kv_store() -> KeyValueStore:
    """Return the process-wide store selected by ``cache_backend``."""

    backend = get_settings().cache_backend
    logger.info("Using %s key-value store for income cache", backend)
    if backend == "database":
        return SqlKeyValueStore(_session_factory)
    return InMemoryKeyValueStore()


@lru_cache(maxsize=1)
def get_income_cache() -> IncomeCacheService:
    return IncomeCacheService(get_kv_store(), bucket=DIVIDEND_CACHE_BUCKET)


@lru_cache(maxsize=1)
def get_portfolio_income_cache() -> IncomeCacheService:
    return IncomeCacheService(get_kv_store(), bucket=PORTFOLIO_CACHE_BUCKET)


def get_portfolio_client() -> PortfolioServiceClient:
    return PortfolioServiceClient(get_settings())


__all__ = [
    "get_kv_store",
    "get_income_cache",
    "get_portfolio_income_cache",
    "get_portfolio_client",
]
