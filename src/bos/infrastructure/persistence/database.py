"""Engine and session factory construction."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bos.infrastructure.persistence.sql_models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, lock_timeout_ms: int) -> Engine:
    """Create an engine; SQLite waits up to *lock_timeout_ms* on a busy file."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    connect_args = {"timeout": lock_timeout_ms / 1000, "check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise every thread sees an empty database.
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(engine)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))
