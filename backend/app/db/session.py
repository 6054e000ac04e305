"""Database engine and session utilities."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_settings


def build_engine(database_url: str) -> Engine:
    """Create a synchronous engine; SQLite connections may be shared across threads."""

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, future=True, connect_args=connect_args)


_settings = get_settings()
_engine: Engine = build_engine(_settings.database_url)
_session_factory = sessionmaker(bind=_engine, expire_on_commit=False, class_=Session)


__all__ = ["build_engine", "_engine", "_session_factory"]
