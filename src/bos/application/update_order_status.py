"""Application service: Update Order Status use case.

Administrative operation.  The Order aggregate decides whether the
transition is legal under the configured policy; this handler adds the
stock side effect of cancelling an order that was never dispatched.
"""

from __future__ import annotations

import logging

from bos.application.dto import RichOrderDTO
from bos.application.projection import to_rich_order
from bos.domain.exceptions import ValidationError
from bos.domain.model.order_status import OrderStatus, StatusPolicy
from bos.domain.outcome import Failure, Outcome, Success
from bos.domain.repository.unit_of_work import UnitOfWork
from bos.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, policy: StatusPolicy) -> None:
        self._uow = uow
        self._policy = policy

    def handle(self, order_id: int, raw_status: str | None) -> Outcome[RichOrderDTO]:
        if raw_status is None or not raw_status.strip():
            return Failure("status incorrect input data")

        target = OrderStatus.parse(raw_status)
        if target is None:
            return Failure(f"Unknown order status: '{raw_status.strip()}'")

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                return Failure(f"Order #{order_id} not found")

            previous = order.status
            try:
                order.transition_to(target, self._policy)
            except ValidationError as exc:
                logger.info("Status change rejected: %s", exc)
                return Failure(str(exc))

            if target == OrderStatus.CANCELED and self._policy.restocks_on_cancel(previous):
                InventoryReservationService(uow.books).restock_for_order(order)

            uow.orders.save(order)
            view = to_rich_order(order, uow.books)
            uow.commit()

        logger.info(
            "Order #%s status changed %s -> %s", order_id, previous.value, target.value
        )
        return Success(view)
