"""Read-side mapping from aggregates to DTOs.

Order views resolve each line's book at read time for its title and
authors; prices always come from the line's own snapshot.
"""

from __future__ import annotations

from bos.application.dto import BookDTO, RecipientDTO, RichOrderDTO, RichOrderItemDTO
from bos.domain.model.book import Book
from bos.domain.model.order import Order
from bos.domain.repository.book_repository import BookRepository


def to_rich_order(order: Order, books: BookRepository) -> RichOrderDTO:
    items: list[RichOrderItemDTO] = []
    for item in order.items:
        book = books.get_by_id(item.book_id)
        items.append(
            RichOrderItemDTO(
                book_id=item.book_id,
                title=book.title if book is not None else None,
                authors=book.author_names if book is not None else [],
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
        )

    recipient = order.recipient
    return RichOrderDTO(
        id=order.id,  # type: ignore[arg-type]
        status=order.status.value,
        recipient=RecipientDTO(
            name=recipient.name,
            phone=recipient.phone,
            street=recipient.street,
            city=recipient.city,
            zip_code=recipient.zip_code,
            email=recipient.email,
        ),
        items=items,
        total=str(order.total),
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )


def to_book_dto(book: Book) -> BookDTO:
    return BookDTO(
        id=book.id,  # type: ignore[arg-type]
        title=book.title,
        year=book.year,
        price=str(book.price),
        available=book.available,
        authors=book.author_names,
        cover_id=book.cover_id,
    )
