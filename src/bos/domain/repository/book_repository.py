"""Abstract repositories for the Book and Author aggregates.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bos.domain.model.book import Author, Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, book_id: int) -> Book | None:
        """Like ``get_by_id`` but locks the row until the transaction ends."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book in the catalog, ordered by ID."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Persist a new or updated book; assigns ``book.id`` if missing."""


class AuthorRepository(ABC):

    @abstractmethod
    def get_by_id(self, author_id: int) -> Author | None:
        """Return an author by its ID, or None if not found."""

    @abstractmethod
    def save(self, author: Author) -> None:
        """Persist a new or updated author; assigns ``author.id`` if missing."""
