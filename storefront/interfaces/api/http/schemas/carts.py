"""
===============================================================================
TARJETA CRC — schemas/carts.py
===============================================================================

Responsabilidades:
    - DTOs de carrito (items + cantidades) y requests de cantidad/checkout.

Notas:
    - quantity se recibe sin tipar estrictamente: el caso de uso responde
      "Invalid quantity value" con un mensaje estable en vez del detalle
      genérico de pydantic.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import Cart, PaymentMethod


class CartItemRes(BaseModel):
    product_id: UUID
    quantity: int


class CartRes(BaseModel):
    id: UUID
    owner_user_id: UUID
    items: list[CartItemRes] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, cart: Cart) -> "CartRes":
        return cls(
            id=cart.id,
            owner_user_id=cart.owner_user_id,
            items=[
                CartItemRes(product_id=i.product_id, quantity=i.quantity)
                for i in cart.items
            ],
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class CartEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str | None = None
    payload: CartRes


class QuantityReq(BaseModel):
    quantity: Any = None


class CheckoutReq(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.OTHER
    notes: str = Field(default="", max_length=500)


def coerce_quantity(value: Any, default: int | None = None) -> int:
    """int >= 1 o 0 (inválido). Acepta enteros y strings numéricos."""
    if value is None:
        return default if default is not None else 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0
