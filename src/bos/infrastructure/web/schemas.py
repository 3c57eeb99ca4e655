"""Request bodies accepted by the HTTP API.

Pydantic only checks shape and types here.  Business rules (blank
recipient fields, non-positive quantities, unknown statuses) belong to
the application handlers, which report them as 400s with a message.
Field aliases keep the camelCase names older clients send.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bos.application.dto import OrderItemSpec, RecipientDTO


class RecipientPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    phone: str
    street: str
    city: str
    zip_code: str = Field(alias="zipCode")
    email: str

    def to_dto(self) -> RecipientDTO:
        return RecipientDTO(
            name=self.name,
            phone=self.phone,
            street=self.street,
            city=self.city,
            zip_code=self.zip_code,
            email=self.email,
        )


class OrderItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: int = Field(alias="bookId")
    quantity: int


class CreateOrderPayload(BaseModel):
    recipient: RecipientPayload
    items: list[OrderItemPayload]

    def item_specs(self) -> list[OrderItemSpec]:
        return [OrderItemSpec(book_id=i.book_id, quantity=i.quantity) for i in self.items]


class UpdateStatusPayload(BaseModel):
    status: Optional[str] = None


class CreateAuthorPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class CreateBookPayload(BaseModel):
    title: str
    year: int
    price: Decimal
    available: int
    authors: list[int] = Field(default_factory=list)


class UpdatePricePayload(BaseModel):
    price: Decimal
