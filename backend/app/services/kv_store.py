"""SQL-backed key-value store for the income memo table."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.models import KVCacheEntry

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlKeyValueStore:
    """Store JSON-serialisable values in ``kv_cache_entry`` by primary key.

    Each call runs in its own short transaction; concurrent writers to the
    same key resolve as last writer wins.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> Any | None:
        with self._session_factory() as session:
            return session.execute(
                select(KVCacheEntry.value).where(KVCacheEntry.key == key)
            ).scalar_one_or_none()

    def set(self, key: str, value: Any) -> None:
        with self._session_factory() as session:
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is None:
                session.merge(KVCacheEntry(key=key, value=value))
            else:
                stmt = insert(KVCacheEntry).values(key=key, value=value)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[KVCacheEntry.key],
                    set_={"value": stmt.excluded.value, "updated_at": func.now()},
                )
                session.execute(stmt)
            session.commit()
        logger.debug("Stored cache entry %s", key)

    def remove(self, key: str) -> None:
        with self._session_factory() as session:
            session.execute(delete(KVCacheEntry).where(KVCacheEntry.key == key))
            session.commit()


__all__ = ["SqlKeyValueStore"]
