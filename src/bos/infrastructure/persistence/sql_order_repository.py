"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from bos.domain.exceptions import EntityNotFoundError
from bos.domain.model.order import Order, OrderLineItem
from bos.domain.model.order_status import OrderStatus
from bos.domain.model.value_objects import Money, Quantity, Recipient
from bos.domain.repository.order_repository import OrderRepository
from bos.infrastructure.persistence.sql_models import OrderItemRow, OrderRow, is_row_id


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        if not is_row_id(order_id):
            return None
        row = self._session.get(OrderRow, order_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Order]:
        rows = self._session.execute(select(OrderRow).order_by(OrderRow.id)).scalars()
        return [self._to_domain(row) for row in rows]

    def save(self, order: Order) -> None:
        if order.id is None:
            row = self._to_row(order)
            self._session.add(row)
            self._session.flush()
            order.id = row.id
            return

        # Items and recipient are fixed at creation; only the lifecycle moves.
        row = self._require_row(order.id)
        row.status = order.status.value
        row.updated_at = order.updated_at

    def delete(self, order: Order) -> None:
        self._session.delete(self._require_row(order.id))  # type: ignore[arg-type]

    # --- Serialization --------------------------------------------------------

    def _require_row(self, order_id: int) -> OrderRow:
        row = self._session.get(OrderRow, order_id)
        if row is None:
            raise EntityNotFoundError(f"Order #{order_id} vanished during the transaction")
        return row

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        recipient = order.recipient
        return OrderRow(
            status=order.status.value,
            recipient_name=recipient.name,
            recipient_phone=recipient.phone,
            recipient_street=recipient.street,
            recipient_city=recipient.city,
            recipient_zip_code=recipient.zip_code,
            recipient_email=recipient.email,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRow(
                    position=position,
                    book_id=item.book_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                )
                for position, item in enumerate(order.items)
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderLineItem(
                book_id=i.book_id,
                quantity=Quantity(i.quantity),
                unit_price=Money(Decimal(i.unit_price)),
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            recipient=Recipient(
                name=row.recipient_name,
                phone=row.recipient_phone,
                street=row.recipient_street,
                city=row.recipient_city,
                zip_code=row.recipient_zip_code,
                email=row.recipient_email,
            ),
            items=items,
            status=OrderStatus(row.status),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
