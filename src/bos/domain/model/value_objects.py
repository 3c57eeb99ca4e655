"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from bos.domain.exceptions import ValidationError

_CENT = Decimal("0.01")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Money:
    """Fixed-point monetary amount in the store's single currency."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    @property
    def has_cents_precision(self) -> bool:
        """True if the amount needs no more than two decimal places."""
        return self.amount == self.amount.quantize(_CENT)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount.quantize(_CENT)}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Recipient:
    """Who receives the order.  Embedded in the order, never shared."""

    name: str
    phone: str
    street: str
    city: str
    zip_code: str
    email: str

    def __post_init__(self) -> None:
        missing = [
            label
            for label, value in (
                ("name", self.name),
                ("phone", self.phone),
                ("street", self.street),
                ("city", self.city),
                ("zip_code", self.zip_code),
                ("email", self.email),
            )
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(
                f"Recipient {', '.join(missing)} is required"
            )
        if not _EMAIL_RE.match(self.email.strip()):
            raise ValidationError(f"Recipient email is invalid: {self.email!r}")

    @staticmethod
    def of(
        name: str,
        phone: str,
        street: str,
        city: str,
        zip_code: str,
        email: str,
    ) -> Recipient:
        """Build a recipient with surrounding whitespace stripped."""
        recipient = Recipient(name, phone, street, city, zip_code, email)
        return Recipient(
            name=recipient.name.strip(),
            phone=recipient.phone.strip(),
            street=recipient.street.strip(),
            city=recipient.city.strip(),
            zip_code=recipient.zip_code.strip(),
            email=recipient.email.strip(),
        )
