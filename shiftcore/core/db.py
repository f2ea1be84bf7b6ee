"""Engine construction and schema bootstrap for the scheduling tables."""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from shiftcore.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings | None = None) -> Engine:
    """
    Create a SQLAlchemy engine for the configured database.

    In-memory SQLite shares one connection across sessions so that every
    unit of work sees the same database.
    """
    settings = settings or get_settings()
    url = settings.SQLALCHEMY_DATABASE_URI

    engine_kwargs: dict = {"echo": settings.SQL_ECHO}
    if settings.is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = settings.DATABASE_POOL_PRE_PING

    logger.debug(f"Creating engine for {url.split('@')[-1]}")
    return create_engine(url, **engine_kwargs)


def init_db(engine: Engine) -> None:
    """Create all scheduling tables that do not exist yet."""
    # Registers the table classes on SQLModel.metadata
    from shiftcore.infrastructure.database import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Scheduling schema initialised")


def drop_db(engine: Engine) -> None:
    """Drop all scheduling tables."""
    from shiftcore.infrastructure.database import models  # noqa: F401

    SQLModel.metadata.drop_all(engine)
