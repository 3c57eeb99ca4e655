"""Application service: Create Order use case.

Orchestrates the flow between the unit of work, the reservation domain
service and the Order aggregate.  Stock is reserved and the order is
inserted in one transaction: either both commit or neither does.
"""

from __future__ import annotations

import logging

from returns.pipeline import is_successful

from bos.application.dto import OrderItemSpec, RecipientDTO
from bos.domain.exceptions import ValidationError
from bos.domain.model.order import MAX_LINE_ITEMS, Order
from bos.domain.model.value_objects import Quantity, Recipient
from bos.domain.outcome import Failure, Outcome, Success
from bos.domain.repository.unit_of_work import UnitOfWork
from bos.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, recipient: RecipientDTO, item_specs: list[OrderItemSpec]
    ) -> Outcome[int]:
        """Place a new order and return its ID.

        Steps:
        1. Validate the recipient and the requested lines (no I/O).
        2. Lock, check and decrement every book (all or nothing).
        3. Build the Order with *current* prices (snapshot) in NEW.
        4. Persist and commit.
        """
        try:
            target = Recipient.of(
                name=recipient.name,
                phone=recipient.phone,
                street=recipient.street,
                city=recipient.city,
                zip_code=recipient.zip_code,
                email=recipient.email,
            )
            lines = self._merge_lines(item_specs)
        except ValidationError as exc:
            logger.info("Order rejected: %s", exc)
            return Failure(str(exc))

        if not lines:
            return Failure("Order must contain at least one item")
        if len(lines) > MAX_LINE_ITEMS:
            return Failure(f"Maximum {MAX_LINE_ITEMS} items per order")

        with self._uow as uow:
            svc = InventoryReservationService(uow.books)
            reserved = svc.reserve(lines)
            if not is_successful(reserved):
                logger.info("Order rejected: %s", reserved.failure())
                return Failure(reserved.failure())

            order = Order.create(recipient=target, items=reserved.unwrap())
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order #%s created: %d line(s), total %s",
            order.id,
            len(order.items),
            order.total,
        )
        return Success(order.id)  # type: ignore[arg-type]

    @staticmethod
    def _merge_lines(item_specs: list[OrderItemSpec]) -> list[tuple[int, Quantity]]:
        """Sum repeated book IDs, keeping first-occurrence order."""
        merged: dict[int, Quantity] = {}
        for spec in item_specs:
            quantity = Quantity(spec.quantity)
            if spec.book_id in merged:
                merged[spec.book_id] = merged[spec.book_id] + quantity
            else:
                merged[spec.book_id] = quantity
        return list(merged.items())
