"""
===============================================================================
USE CASE: Create Order
===============================================================================

Business Goal:
    Crear una orden para el usuario autenticado a partir de una lista de
    items (product_id + quantity).

Why (Context / Intención):
    - Los precios y títulos NO se toman del cliente: se snapshotean desde el
      catálogo al momento de crear la orden.
    - La dirección de envío, si no viene en el request, se copia del perfil.
    - El code es legible y único (índice único en el store).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateOrderUseCase

Responsibilities:
    - Validar items (no vacíos, cantidades >= 1).
    - Resolver productos y construir OrderItem snapshot.
    - Persistir la orden en estado pending.

Collaborators:
    - OrderRepository / ProductRepository / UserRepository
===============================================================================
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Sequence
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Product,
)
from ....domain.repositories import (
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from ....identity.users import Address
from .order_results import OrderError, OrderErrorCode, OrderResult

MSG_ITEMS_REQUIRED = "Cart items are required"
MSG_INVALID_QUANTITY = "Invalid quantity value"
MSG_PRODUCT_NOT_FOUND = "Product not found"


def generate_order_code(now: datetime | None = None) -> str:
    """ORD-<yyyymmdd>-<8 hex>: ordenable por fecha y sin colisiones prácticas."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d")
    return f"ORD-{stamp}-{secrets.token_hex(4).upper()}"


def build_order_items(
    lines: Sequence[tuple[UUID, int]], products: Sequence[Product]
) -> List[OrderItem]:
    """Snapshot de catálogo. Asume que todos los productos fueron resueltos."""
    by_id = {p.id: p for p in products}
    return [
        OrderItem(
            product_id=product_id,
            title=by_id[product_id].title,
            unit_price=by_id[product_id].price,
            quantity=quantity,
        )
        for product_id, quantity in lines
    ]


@dataclass(frozen=True)
class OrderLineInput:
    product_id: UUID
    quantity: int = 1


@dataclass(frozen=True)
class CreateOrderInput:
    owner_user_id: UUID
    items: List[OrderLineInput] = field(default_factory=list)
    payment_method: PaymentMethod = PaymentMethod.OTHER
    shipping_address: Address | None = None
    notes: str = ""


class CreateOrderUseCase:
    def __init__(
        self,
        *,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ) -> None:
        self._orders = order_repository
        self._products = product_repository
        self._users = user_repository

    def execute(self, input_data: CreateOrderInput) -> OrderResult:
        if not input_data.items:
            return self._error(OrderErrorCode.VALIDATION_ERROR, MSG_ITEMS_REQUIRED)
        if any(line.quantity < 1 for line in input_data.items):
            return self._error(OrderErrorCode.VALIDATION_ERROR, MSG_INVALID_QUANTITY)

        # R: líneas repetidas del mismo producto se consolidan.
        quantities: dict[UUID, int] = {}
        for line in input_data.items:
            quantities[line.product_id] = (
                quantities.get(line.product_id, 0) + line.quantity
            )

        products = self._products.get_products_by_ids(list(quantities))
        if {p.id for p in products} != set(quantities):
            return self._error(OrderErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_FOUND)

        shipping_address = input_data.shipping_address
        if shipping_address is None:
            owner = self._users.get_user(input_data.owner_user_id)
            shipping_address = owner.address if owner else None

        order = self._orders.create_order(
            Order(
                id=uuid4(),
                code=generate_order_code(),
                owner_user_id=input_data.owner_user_id,
                items=build_order_items(list(quantities.items()), products),
                status=OrderStatus.PENDING,
                shipping_address=shipping_address,
                payment_method=input_data.payment_method,
                notes=input_data.notes or "",
            )
        )
        logger.info(
            "Orden creada",
            extra={
                "order_id": str(order.id),
                "code": order.code,
                "user_id": str(order.owner_user_id),
            },
        )
        return OrderResult(order=order)

    @staticmethod
    def _error(code: OrderErrorCode, message: str) -> OrderResult:
        return OrderResult(error=OrderError(code=code, message=message))
