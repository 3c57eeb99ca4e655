"""Order statuses and the policy deciding which transitions are legal.

The set of labels is fixed; which edges connect them is configuration.
``NEW`` is always the initial state and ``CANCELED`` always terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class OrderStatus(Enum):
    NEW = "NEW"
    ACCEPTED = "ACCEPTED"
    SENT = "SENT"
    CANCELED = "CANCELED"

    @classmethod
    def parse(cls, raw: str | None) -> OrderStatus | None:
        """Case-insensitive lookup; ``None`` for blank or unknown labels."""
        if raw is None:
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


INITIAL_STATUS = OrderStatus.NEW

DEFAULT_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NEW: frozenset({OrderStatus.ACCEPTED, OrderStatus.CANCELED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.SENT, OrderStatus.CANCELED}),
    OrderStatus.SENT: frozenset({OrderStatus.CANCELED}),
    OrderStatus.CANCELED: frozenset(),
}

# Goods in these states have not left the warehouse yet.
DEFAULT_RESTOCK_ON_CANCEL_FROM = frozenset({OrderStatus.NEW, OrderStatus.ACCEPTED})


@dataclass(frozen=True)
class StatusPolicy:
    """Allowed status edges plus the states from which a cancel restocks."""

    transitions: Mapping[OrderStatus, frozenset[OrderStatus]] = field(
        default_factory=lambda: dict(DEFAULT_TRANSITIONS)
    )
    restock_on_cancel_from: frozenset[OrderStatus] = DEFAULT_RESTOCK_ON_CANCEL_FROM

    def __post_init__(self) -> None:
        for source, targets in self.transitions.items():
            if INITIAL_STATUS in targets:
                raise ValueError(
                    f"{source.value} -> {INITIAL_STATUS.value}: "
                    f"no status may lead back to the initial state"
                )
        if self.transitions.get(OrderStatus.CANCELED):
            raise ValueError(f"{OrderStatus.CANCELED.value} must be terminal")
        if OrderStatus.CANCELED in self.restock_on_cancel_from:
            raise ValueError(
                f"Cannot restock when cancelling from {OrderStatus.CANCELED.value}"
            )

    def allowed_from(self, status: OrderStatus) -> frozenset[OrderStatus]:
        return self.transitions.get(status, frozenset())

    def can_transition(self, current: OrderStatus, target: OrderStatus) -> bool:
        return target in self.allowed_from(current)

    def is_terminal(self, status: OrderStatus) -> bool:
        return not self.allowed_from(status)

    def restocks_on_cancel(self, current: OrderStatus) -> bool:
        return current in self.restock_on_cancel_from

    @staticmethod
    def from_mapping(
        raw: Mapping[str, list[str]],
        restock_on_cancel_from: list[str] | None = None,
    ) -> StatusPolicy:
        """Build a policy from labels, e.g. parsed JSON configuration."""
        transitions: dict[OrderStatus, frozenset[OrderStatus]] = {
            status: frozenset() for status in OrderStatus
        }
        for source, targets in raw.items():
            transitions[_require_status(source)] = frozenset(
                _require_status(target) for target in targets
            )
        if restock_on_cancel_from is None:
            restock = DEFAULT_RESTOCK_ON_CANCEL_FROM
        else:
            restock = frozenset(_require_status(s) for s in restock_on_cancel_from)
        return StatusPolicy(transitions=transitions, restock_on_cancel_from=restock)


def _require_status(label: str) -> OrderStatus:
    status = OrderStatus.parse(label)
    if status is None:
        raise ValueError(f"Unknown order status in policy: {label!r}")
    return status
