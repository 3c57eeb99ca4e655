"""Application service: Delete Order use case.

A NEW order still holds reserved stock, so deleting it puts every line
quantity back on its book in the same transaction as the delete.
Orders past NEW are treated as dispatched and restock nothing.
Deleting an unknown ID is a no-op.
"""

from __future__ import annotations

import logging

from bos.domain.repository.unit_of_work import UnitOfWork
from bos.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                logger.info("Order #%s not found, nothing to delete", order_id)
                return

            restocked = order.is_new
            if restocked:
                InventoryReservationService(uow.books).restock_for_order(order)

            uow.orders.delete(order)
            uow.commit()

        logger.info(
            "Order #%s deleted (status=%s, restocked=%s)",
            order_id,
            order.status.value,
            restocked,
        )
