"""Domain service: Inventory Reservation.

This service coordinates the cross-aggregate operation of taking stock
out of books for a new order, and putting it back when an undispatched
order goes away.  It lives in the domain layer because the logic is a
core business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures we never leave
stock in a partially-reserved state if one book fails validation.  The
caller owns the transaction; this service only reads and writes through
the repository it is given.
"""

from __future__ import annotations

import logging

from bos.domain.model.book import Book
from bos.domain.model.order import Order, OrderLineItem
from bos.domain.model.value_objects import Quantity
from bos.domain.outcome import Failure, Outcome, Success
from bos.domain.repository.book_repository import BookRepository

logger = logging.getLogger(__name__)


class InventoryReservationService:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def reserve(self, lines: list[tuple[int, Quantity]]) -> Outcome[list[OrderLineItem]]:
        """Reserve stock for every (book_id, quantity) line, or for none.

        Phase 1: lock and validate: every book must exist and have
                  enough stock.  Collects every problem before failing.
        Phase 2: mutate and persist: decrement each book and snapshot
                  its current price into a line item.
        """
        # Phase 1: lock all books and validate.  Locks are taken in id
        # order so two orders over the same books cannot deadlock.
        books: dict[int, Book | None] = {
            book_id: self._book_repo.get_for_update(book_id)
            for book_id in sorted({book_id for book_id, _ in lines})
        }
        missing = [book_id for book_id, _ in lines if books[book_id] is None]
        if missing:
            ids = ", ".join(str(book_id) for book_id in missing)
            return Failure(f"Can not find a book with id: {ids}")

        locked: list[tuple[Book, Quantity]] = [
            (books[book_id], quantity) for book_id, quantity in lines  # type: ignore[misc]
        ]
        shortages = [
            f"'{book.title}' (requested {quantity.value}, available {book.available})"
            for book, quantity in locked
            if not book.has_stock_for(quantity.value)
        ]
        if shortages:
            return Failure("Not enough books available: " + "; ".join(shortages))

        # Phase 2: mutate and persist
        items: list[OrderLineItem] = []
        for book, quantity in locked:
            book.reserve(quantity.value)
            self._book_repo.save(book)
            items.append(
                OrderLineItem(
                    book_id=book.id,  # type: ignore[arg-type]
                    quantity=quantity,
                    unit_price=book.price,  # <-- price snapshot
                )
            )
        return Success(items)

    def restock_for_order(self, order: Order) -> None:
        """Return every line quantity of *order* to its book."""
        for item in sorted(order.items, key=lambda line: line.book_id):
            book = self._book_repo.get_for_update(item.book_id)
            if book is None:
                logger.warning(
                    "Order #%s: book %s no longer exists, %s unit(s) not restocked",
                    order.id,
                    item.book_id,
                    item.quantity.value,
                )
                continue
            book.restock(item.quantity.value)
            self._book_repo.save(book)
