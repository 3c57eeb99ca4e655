"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from bos.config import Settings
from bos.domain.model.order_status import StatusPolicy
from bos.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_schema,
)
from bos.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass
class Container:
    """Everything a request needs, built once per process."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker

    @property
    def status_policy(self) -> StatusPolicy:
        return self.settings.status_policy

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self.session_factory, self.settings.lock_timeout_ms)

    def init_schema(self) -> None:
        init_schema(self.engine)


def build_container(settings: Settings) -> Container:
    engine = create_db_engine(settings.database_url, settings.lock_timeout_ms)
    return Container(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
    )


@lru_cache(maxsize=1)
def default_container() -> Container:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return build_container(settings)
