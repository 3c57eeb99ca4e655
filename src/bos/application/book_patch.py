"""Typed field-update commands for partial book updates.

A PATCH body is an untyped JSON object.  ``parse_patch`` turns it into
a closed set of commands, one per patchable field, each carrying its own
validator.  Validation never touches the book; ``apply`` only runs once
every command in the batch has passed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Mapping, Union

from bos.domain.model.book import Book
from bos.domain.model.value_objects import Money
from bos.domain.outcome import Failure, Outcome, Success
from bos.domain.repository.book_repository import AuthorRepository

MIN_YEAR = 1900
MIN_PRICE = Decimal("1")
MAX_PRICE = Decimal("1000")
MIN_AVAILABLE = 1
MAX_AVAILABLE = 10000


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _incorrect(field: str) -> str:
    return f"{field} incorrect input data"


@dataclass(frozen=True)
class SetTitle:
    field: ClassVar[str] = "title"
    value: Any

    def validate(self, authors: AuthorRepository) -> str | None:
        if not isinstance(self.value, str) or not self.value.strip():
            return _incorrect(self.field)
        if self.value != self.value.strip():
            return _incorrect(self.field)
        return None

    def apply(self, book: Book, authors: AuthorRepository) -> None:
        book.title = self.value


@dataclass(frozen=True)
class SetYear:
    field: ClassVar[str] = "year"
    value: Any

    def validate(self, authors: AuthorRepository) -> str | None:
        if not _is_int(self.value) or self.value < MIN_YEAR:
            return _incorrect(self.field)
        return None

    def apply(self, book: Book, authors: AuthorRepository) -> None:
        book.year = self.value


@dataclass(frozen=True)
class SetPrice:
    field: ClassVar[str] = "price"
    value: Any

    def _amount(self) -> Decimal | None:
        if self.value is None or isinstance(self.value, bool):
            return None
        if not isinstance(self.value, (int, float, str, Decimal)):
            return None
        try:
            amount = Decimal(str(self.value).strip())
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None

    def validate(self, authors: AuthorRepository) -> str | None:
        amount = self._amount()
        if amount is None or not MIN_PRICE <= amount <= MAX_PRICE:
            return _incorrect(self.field)
        if not Money(amount).has_cents_precision:
            return _incorrect(self.field)
        return None

    def apply(self, book: Book, authors: AuthorRepository) -> None:
        book.update_price(Money(self._amount()))  # type: ignore[arg-type]


@dataclass(frozen=True)
class SetAvailable:
    field: ClassVar[str] = "available"
    value: Any

    def validate(self, authors: AuthorRepository) -> str | None:
        if not _is_int(self.value):
            return _incorrect(self.field)
        if not MIN_AVAILABLE <= self.value <= MAX_AVAILABLE:
            return _incorrect(self.field)
        return None

    def apply(self, book: Book, authors: AuthorRepository) -> None:
        book.available = self.value


@dataclass(frozen=True)
class SetAuthors:
    field: ClassVar[str] = "authors"
    value: Any

    def validate(self, authors: AuthorRepository) -> str | None:
        if not isinstance(self.value, list) or not self.value:
            return _incorrect(self.field)
        if not all(_is_int(author_id) for author_id in self.value):
            return _incorrect(self.field)
        unknown = [a for a in self.value if authors.get_by_id(a) is None]
        if unknown:
            return f"Can not find author with given id: {unknown[0]}"
        return None

    def apply(self, book: Book, authors: AuthorRepository) -> None:
        book.authors = [authors.get_by_id(a) for a in dict.fromkeys(self.value)]  # type: ignore[misc]


BookPatch = Union[SetTitle, SetYear, SetPrice, SetAvailable, SetAuthors]

_COMMANDS: dict[str, type] = {
    command.field: command
    for command in (SetTitle, SetYear, SetPrice, SetAvailable, SetAuthors)
}


def parse_patch(raw: Mapping[str, Any]) -> Outcome[list[BookPatch]]:
    """Map a JSON object onto commands; unknown keys are errors."""
    if not raw:
        return Failure("Nothing to update")

    commands: list[BookPatch] = []
    errors: list[str] = []
    for key, value in raw.items():
        if key == "id":
            errors.append("id can not be changed")
            continue
        command = _COMMANDS.get(key)
        if command is None:
            errors.append(f"{key} is not a patchable field")
            continue
        commands.append(command(value))

    if errors:
        return Failure("\n".join(errors))
    return Success(commands)
