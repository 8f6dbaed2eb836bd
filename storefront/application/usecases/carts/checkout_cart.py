"""
===============================================================================
USE CASE: Checkout Cart (purchase)
===============================================================================

Business Goal:
    Convertir el contenido de un carrito en una orden pending y vaciar el
    carrito.

Why (Context / Intención):
    - El stock se VERIFICA pero no se descuenta: la reserva/decremento queda
      a cargo del flujo de fulfillment (fuera de este servicio).
    - Si algún producto no está disponible, no se crea nada y se devuelve la
      lista de product_id problemáticos para que el cliente la muestre.
    - La orden pertenece al owner del carrito (aunque el caller sea admin) y
      copia su dirección como dirección de envío.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CheckoutCartUseCase

Responsibilities:
    - Validar carrito existente y no vacío.
    - Verificar disponibilidad (activo + stock suficiente).
    - Crear la orden (snapshot de precios) y vaciar el carrito.

Collaborators:
    - CartRepository / ProductRepository / OrderRepository / UserRepository
    - usecases.orders.create_order (generate_order_code, build_order_items)

Concurrency:
    - create_order y save_cart son escrituras separadas: si la segunda falla,
      la orden existe y el carrito conserva los items (el cliente ve el error
      y puede reintentar vaciando el carrito).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Order, OrderStatus, PaymentMethod
from ....domain.repositories import (
    CartRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from ..orders.create_order import build_order_items, generate_order_code
from .cart_items import MSG_CART_NOT_FOUND
from .cart_results import CartError, CartErrorCode, CheckoutResult

MSG_EMPTY_CART = "Cart is empty"
MSG_PRODUCTS_NOT_AVAILABLE = "Some products are not available"


@dataclass(frozen=True)
class CheckoutCartInput:
    cart_id: UUID
    payment_method: PaymentMethod = PaymentMethod.OTHER
    notes: str = ""


class CheckoutCartUseCase:
    def __init__(
        self,
        *,
        cart_repository: CartRepository,
        product_repository: ProductRepository,
        order_repository: OrderRepository,
        user_repository: UserRepository,
    ) -> None:
        self._carts = cart_repository
        self._products = product_repository
        self._orders = order_repository
        self._users = user_repository

    def execute(self, input_data: CheckoutCartInput) -> CheckoutResult:
        cart = self._carts.get_cart(input_data.cart_id)
        if cart is None:
            return self._error(CartErrorCode.NOT_FOUND, MSG_CART_NOT_FOUND)
        if cart.is_empty:
            return self._error(CartErrorCode.VALIDATION_ERROR, MSG_EMPTY_CART)

        products = self._products.get_products_by_ids(
            [item.product_id for item in cart.items]
        )
        by_id = {p.id: p for p in products}

        unavailable = [
            {
                "product_id": str(item.product_id),
                "requested": item.quantity,
                "available": by_id[item.product_id].stock
                if item.product_id in by_id
                else 0,
            }
            for item in cart.items
            if item.product_id not in by_id
            or not by_id[item.product_id].has_stock_for(item.quantity)
        ]
        if unavailable:
            logger.warning(
                "Checkout rechazado: productos sin disponibilidad",
                extra={"cart_id": str(cart.id), "count": len(unavailable)},
            )
            return self._error(
                CartErrorCode.VALIDATION_ERROR,
                MSG_PRODUCTS_NOT_AVAILABLE,
                details=unavailable,
            )

        owner = self._users.get_user(cart.owner_user_id)
        order = self._orders.create_order(
            Order(
                id=uuid4(),
                code=generate_order_code(),
                owner_user_id=cart.owner_user_id,
                items=build_order_items(
                    [(item.product_id, item.quantity) for item in cart.items],
                    products,
                ),
                status=OrderStatus.PENDING,
                shipping_address=owner.address if owner else None,
                payment_method=input_data.payment_method,
                notes=input_data.notes or "",
            )
        )

        cart.clear()
        self._carts.save_cart(cart)

        logger.info(
            "Checkout completado",
            extra={
                "cart_id": str(cart.id),
                "order_id": str(order.id),
                "code": order.code,
                "total_amount": order.total_amount,
            },
        )
        return CheckoutResult(order=order)

    @staticmethod
    def _error(
        code: CartErrorCode, message: str, details: list | None = None
    ) -> CheckoutResult:
        return CheckoutResult(
            error=CartError(code=code, message=message, details=details)
        )
