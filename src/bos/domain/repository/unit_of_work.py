"""Abstract unit of work: one transaction and the repositories bound to it.

Handlers use it as a context manager.  Leaving the block without
``commit()`` rolls everything back, so a failed reservation can never
leave stock half-decremented.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bos.domain.repository.book_repository import AuthorRepository, BookRepository
from bos.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    books: BookRepository
    authors: AuthorRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # No-op after a successful commit.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable.

        Raises ConflictError if a concurrent transaction got there first.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
