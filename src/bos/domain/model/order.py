"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items and its
recipient.  All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bos.domain.exceptions import ValidationError
from bos.domain.model.order_status import INITIAL_STATUS, OrderStatus, StatusPolicy
from bos.domain.model.value_objects import Money, Quantity, Recipient


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the book id and its price at order-creation time.

    The order never follows a live book reference: later price
    changes on the book leave ``unit_price`` alone.
    """

    book_id: int
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for book orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    recipient: Recipient
    items: list[OrderLineItem]
    status: OrderStatus = INITIAL_STATUS
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(recipient: Recipient, items: list[OrderLineItem]) -> Order:
        """Create a new order in the initial status, enforcing all invariants."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        book_ids = [item.book_id for item in items]
        if len(set(book_ids)) != len(book_ids):
            raise ValidationError("Each book may appear only once per order")

        now = _utcnow()
        return Order(
            id=None,
            recipient=recipient,
            items=list(items),
            status=INITIAL_STATUS,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus, policy: StatusPolicy) -> None:
        """Move to *target* if *policy* has an edge from the current status."""
        if policy.is_terminal(self.status):
            raise ValidationError(
                f"Order #{self.id} is {self.status.value}; "
                f"no further status changes are allowed"
            )
        if not policy.can_transition(self.status, target):
            raise ValidationError(
                f"Cannot change order #{self.id} status "
                f"from {self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def is_new(self) -> bool:
        return self.status == INITIAL_STATUS

    @property
    def reserved_quantities(self) -> dict[int, int]:
        """book_id -> units this order holds, in line order."""
        return {item.book_id: item.quantity.value for item in self.items}
