"""
===============================================================================
TARJETA CRC — schemas/orders.py
===============================================================================

Responsabilidades:
    - DTOs de órdenes (snapshot de items, totales, historial de estado).
    - Requests de creación y cambio de estado.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import Order, OrderStatus, PaymentMethod
from .users import AddressPayload


class OrderLineReq(BaseModel):
    product_id: UUID
    quantity: int = 1


class CreateOrderReq(BaseModel):
    items: list[OrderLineReq] = Field(default_factory=list, max_length=200)
    payment_method: PaymentMethod = PaymentMethod.OTHER
    shipping_address: AddressPayload | None = None
    notes: str = Field(default="", max_length=500)


class UpdateOrderStatusReq(BaseModel):
    status: str | None = None


class OrderItemRes(BaseModel):
    product_id: UUID
    title: str
    unit_price: float
    quantity: int
    subtotal: float


class OrderRes(BaseModel):
    id: UUID
    code: str
    owner_user_id: UUID
    items: list[OrderItemRes]
    total_amount: float
    status: OrderStatus
    previous_status: OrderStatus | None = None
    shipping_address: AddressPayload | None = None
    payment_method: PaymentMethod
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderRes":
        return cls(
            id=order.id,
            code=order.code,
            owner_user_id=order.owner_user_id,
            items=[
                OrderItemRes(
                    product_id=i.product_id,
                    title=i.title,
                    unit_price=i.unit_price,
                    quantity=i.quantity,
                    subtotal=i.subtotal,
                )
                for i in order.items
            ],
            total_amount=order.total_amount,
            status=order.status,
            previous_status=order.previous_status,
            shipping_address=AddressPayload.from_domain(order.shipping_address),
            payment_method=order.payment_method,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str | None = None
    payload: OrderRes


class OrdersListRes(BaseModel):
    status: Literal["success"] = "success"
    payload: list[OrderRes]
