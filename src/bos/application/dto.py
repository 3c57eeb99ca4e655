"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the web/CLI adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (book id + quantity)."""

    book_id: int
    quantity: int


@dataclass(frozen=True)
class RecipientDTO:
    name: str
    phone: str
    street: str
    city: str
    zip_code: str
    email: str


@dataclass(frozen=True)
class RichOrderItemDTO:
    """Output: a line item enriched with the book it points at."""

    book_id: int
    title: str | None  # None once the book has left the catalog
    authors: list[str]
    quantity: int
    unit_price: str  # formatted, e.g. "120.00"
    line_total: str


@dataclass(frozen=True)
class RichOrderDTO:
    """Output: a complete order as shown to API and CLI users."""

    id: int
    status: str
    recipient: RecipientDTO
    items: list[RichOrderItemDTO]
    total: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class BookDTO:
    id: int
    title: str
    year: int
    price: str
    available: int
    authors: list[str]
    cover_id: int | None
