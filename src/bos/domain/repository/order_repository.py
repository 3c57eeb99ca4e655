"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bos.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, ordered by ID."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order; assigns ``order.id`` if missing."""

    @abstractmethod
    def delete(self, order: Order) -> None:
        """Remove the order together with its line items."""
