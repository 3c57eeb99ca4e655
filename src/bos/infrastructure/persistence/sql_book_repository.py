"""SQLAlchemy-backed implementations of BookRepository and AuthorRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from bos.domain.exceptions import EntityNotFoundError
from bos.domain.model.book import Author, Book
from bos.domain.model.value_objects import Money
from bos.domain.repository.book_repository import AuthorRepository, BookRepository
from bos.infrastructure.persistence.sql_models import AuthorRow, BookRow, is_row_id


class SqlBookRepository(BookRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: int) -> Book | None:
        if not is_row_id(book_id):
            return None
        row = self._session.get(BookRow, book_id)
        return self._to_domain(row) if row is not None else None

    def get_for_update(self, book_id: int) -> Book | None:
        if not is_row_id(book_id):
            return None
        # FOR UPDATE is dropped on SQLite; the version column still guards it.
        stmt = (
            select(BookRow)
            .where(BookRow.id == book_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = self._session.execute(stmt).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Book]:
        rows = self._session.execute(select(BookRow).order_by(BookRow.id)).scalars()
        return [self._to_domain(row) for row in rows]

    def save(self, book: Book) -> None:
        if book.id is None:
            row = BookRow()
            self._copy_to_row(book, row)
            self._session.add(row)
            self._session.flush()
            book.id = row.id
            return

        row = self._session.get(BookRow, book.id)
        if row is None:
            raise EntityNotFoundError(f"Book #{book.id} vanished during the transaction")
        self._copy_to_row(book, row)

    # --- Serialization --------------------------------------------------------

    def _copy_to_row(self, book: Book, row: BookRow) -> None:
        row.title = book.title
        row.year = book.year
        row.price = book.price.amount
        row.available = book.available
        row.cover_id = book.cover_id
        author_ids = [author.id for author in book.authors]
        if [author.id for author in row.authors] != author_ids:
            row.authors = [self._session.get(AuthorRow, author_id) for author_id in author_ids]

    @staticmethod
    def _to_domain(row: BookRow) -> Book:
        return Book(
            id=row.id,
            title=row.title,
            year=row.year,
            price=Money(Decimal(row.price)),
            available=row.available,
            authors=[SqlAuthorRepository._to_domain(a) for a in row.authors],
            cover_id=row.cover_id,
        )


class SqlAuthorRepository(AuthorRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, author_id: int) -> Author | None:
        if not is_row_id(author_id):
            return None
        row = self._session.get(AuthorRow, author_id)
        return self._to_domain(row) if row is not None else None

    def save(self, author: Author) -> None:
        if author.id is None:
            row = AuthorRow(first_name=author.first_name, last_name=author.last_name)
            self._session.add(row)
            self._session.flush()
            author.id = row.id
            return

        row = self._session.get(AuthorRow, author.id)
        if row is None:
            raise EntityNotFoundError(f"Author #{author.id} vanished during the transaction")
        row.first_name = author.first_name
        row.last_name = author.last_name

    @staticmethod
    def _to_domain(row: AuthorRow) -> Author:
        return Author(id=row.id, first_name=row.first_name, last_name=row.last_name)
