"""Application services: catalog use cases (authors and books).

Thin by design; they exist so books can be created and priced
without touching the database by hand.
"""

from __future__ import annotations

import logging

from bos.application.book_patch import BookPatch, MIN_YEAR
from bos.application.dto import BookDTO
from bos.application.projection import to_book_dto
from bos.domain.exceptions import ValidationError
from bos.domain.model.book import Author, Book
from bos.domain.model.value_objects import Money
from bos.domain.outcome import Failure, Outcome, Success
from bos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddAuthorHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, first_name: str, last_name: str) -> Outcome[int]:
        if not first_name or not first_name.strip():
            return Failure("Author first name is required")
        if not last_name or not last_name.strip():
            return Failure("Author last name is required")

        author = Author(id=None, first_name=first_name.strip(), last_name=last_name.strip())
        with self._uow as uow:
            uow.authors.save(author)
            uow.commit()

        logger.info("Author #%s '%s' added", author.id, author.full_name)
        return Success(author.id)  # type: ignore[arg-type]


class AddBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        title: str,
        year: int,
        price: str,
        available: int,
        author_ids: list[int] | None = None,
    ) -> Outcome[int]:
        """Add a new book to the catalog."""
        if not title or not title.strip():
            return Failure("Book title is required")
        if year < MIN_YEAR:
            return Failure(f"Book year must be {MIN_YEAR} or later")
        if available < 0:
            return Failure("Available stock cannot be negative")
        try:
            money = Money.of(price)
        except ValidationError as exc:
            return Failure(str(exc))
        if not money.has_cents_precision:
            return Failure(f"Price {price} has more than two decimal places")

        with self._uow as uow:
            authors: list[Author] = []
            for author_id in dict.fromkeys(author_ids or []):
                author = uow.authors.get_by_id(author_id)
                if author is None:
                    return Failure(f"Can not find author with given id: {author_id}")
                authors.append(author)

            book = Book(
                id=None,
                title=title.strip(),
                year=year,
                price=money,
                available=available,
                authors=authors,
            )
            uow.books.save(book)
            uow.commit()

        logger.info("Book #%s '%s' added at %s", book.id, book.title, book.price)
        return Success(book.id)  # type: ignore[arg-type]


class UpdateBookPriceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: int, new_price: str) -> Outcome[int]:
        """Update a book's price.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        try:
            money = Money.of(new_price)
        except ValidationError as exc:
            return Failure(str(exc))
        if not money.has_cents_precision:
            return Failure(f"Price {new_price} has more than two decimal places")

        with self._uow as uow:
            book = uow.books.get_for_update(book_id)
            if book is None:
                return Failure(f"Can not find a book with id: {book_id}")
            book.update_price(money)
            uow.books.save(book)
            uow.commit()

        logger.info("Book #%s price updated to %s", book_id, money)
        return Success(book_id)


class PatchBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: int, commands: list[BookPatch]) -> Outcome[int]:
        """Apply every command, or none if any of them is invalid."""
        with self._uow as uow:
            book = uow.books.get_for_update(book_id)
            if book is None:
                return Failure(f"Can not find a book with id: {book_id}")

            errors: list[str] = []
            for command in commands:
                error = command.validate(uow.authors)
                if error is not None:
                    errors.append(error)
            if errors:
                logger.info("Patch of book #%s rejected: %s", book_id, "; ".join(errors))
                return Failure("\n".join(errors))

            for command in commands:
                command.apply(book, uow.authors)
            uow.books.save(book)
            uow.commit()

        logger.info(
            "Book #%s patched: %s", book_id, ", ".join(c.field for c in commands)
        )
        return Success(book_id)


class ShowBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: int) -> BookDTO | None:
        with self._uow as uow:
            book = uow.books.get_by_id(book_id)
            return to_book_dto(book) if book is not None else None


class ListBooksHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[BookDTO]:
        with self._uow as uow:
            return [to_book_dto(book) for book in uow.books.list_all()]
