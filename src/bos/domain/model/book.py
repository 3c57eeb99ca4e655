"""Book aggregate and its authors.

Books live independently of orders.  The only thing an order does to a
book is move units in and out of its ``available`` stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bos.domain.exceptions import ValidationError
from bos.domain.model.value_objects import Money


@dataclass
class Author:
    id: int | None
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Book:
    """A book in the catalog together with its stock level.

    Invariants:
    - ``available`` is never negative
    - ``price`` is never negative
    """

    id: int | None
    title: str
    year: int
    price: Money
    available: int
    authors: list[Author] = field(default_factory=list)
    cover_id: int | None = None

    def __post_init__(self) -> None:
        if self.available < 0:
            raise ValidationError(
                f"Available stock cannot be negative, got {self.available}"
            )

    def has_stock_for(self, quantity: int) -> bool:
        return self.available >= quantity

    def reserve(self, quantity: int) -> None:
        """Take *quantity* units out of stock for an order."""
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if not self.has_stock_for(quantity):
            raise ValidationError(
                f"Insufficient stock for '{self.title}' "
                f"(need {quantity}, have {self.available} available)"
            )
        self.available -= quantity

    def restock(self, quantity: int) -> None:
        """Put units back, e.g. when an undispatched order goes away."""
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.available += quantity

    def update_price(self, new_price: Money) -> None:
        """Change the book price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    @property
    def author_names(self) -> list[str]:
        return [author.full_name for author in self.authors]
