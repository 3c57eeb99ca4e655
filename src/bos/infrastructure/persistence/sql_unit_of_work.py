"""SQLAlchemy unit of work: one Session, one transaction per ``with`` block."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from bos.domain.exceptions import ConflictError
from bos.domain.repository.unit_of_work import UnitOfWork
from bos.infrastructure.persistence.sql_book_repository import (
    SqlAuthorRepository,
    SqlBookRepository,
)
from bos.infrastructure.persistence.sql_order_repository import SqlOrderRepository

logger = logging.getLogger(__name__)

_LOCK_MARKERS = ("lock", "serialize", "deadlock")


def _is_conflict(exc: BaseException) -> bool:
    if isinstance(exc, (IntegrityError, StaleDataError)):
        return True
    if isinstance(exc, OperationalError):
        message = str(exc.orig).lower()
        return any(marker in message for marker in _LOCK_MARKERS)
    return False


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker, lock_timeout_ms: int = 5000) -> None:
        self._session_factory = session_factory
        self._lock_timeout_ms = lock_timeout_ms
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        session = self._session_factory()
        if session.get_bind().dialect.name == "postgresql":
            session.execute(text(f"SET LOCAL lock_timeout = '{int(self._lock_timeout_ms)}ms'"))
        self._session = session
        self.books = SqlBookRepository(session)
        self.authors = SqlAuthorRepository(session)
        self.orders = SqlOrderRepository(session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None
        if exc is not None and _is_conflict(exc):
            logger.warning("Transaction aborted by a concurrent update: %s", exc)
            raise ConflictError("The data was changed concurrently, please retry") from exc

    def commit(self) -> None:
        try:
            self._session.commit()  # type: ignore[union-attr]
        except (IntegrityError, StaleDataError, OperationalError) as exc:
            if not _is_conflict(exc):
                raise
            self._session.rollback()  # type: ignore[union-attr]
            logger.warning("Commit rejected by a concurrent update: %s", exc)
            raise ConflictError("The data was changed concurrently, please retry") from exc

    def rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]
