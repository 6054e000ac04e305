"""Database schema initialization helpers."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import Base
from app.db.session import _engine

# Import models so that SQLAlchemy is aware of all tables before create_all runs.
import app.models  # noqa: F401  # pylint: disable=unused-import

logger = logging.getLogger(__name__)


def init_database(engine: Engine | None = None) -> None:
    """Ensure the key-value cache table exists."""

    target = engine or _engine
    try:
        Base.metadata.create_all(bind=target)
    except SQLAlchemyError:
        logger.exception("Failed to initialise database schema")
        raise
    logger.info("Database schema ready on %s", target.url.render_as_string(hide_password=True))


__all__ = ["init_database"]
