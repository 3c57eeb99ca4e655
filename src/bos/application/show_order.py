"""Application service: Show/List Orders use cases (queries)."""

from __future__ import annotations

from bos.application.dto import RichOrderDTO
from bos.application.projection import to_rich_order
from bos.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> RichOrderDTO | None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                return None
            return to_rich_order(order, uow.books)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[RichOrderDTO]:
        with self._uow as uow:
            return [to_rich_order(order, uow.books) for order in uow.orders.list_all()]
