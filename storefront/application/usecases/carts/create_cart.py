"""
===============================================================================
USE CASE: Create Cart
===============================================================================

Business Goal:
    Asegurar que el usuario autenticado tenga un carrito asignado.

Why (Context / Intención):
    - El registro ya crea el carrito; este caso de uso cubre usuarios sin
      carrito (admins, carritos borrados) y es idempotente: si el carrito
      asignado existe, se devuelve tal cual (created=False).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID, uuid4

from ....crosscutting.exceptions import UserNotFoundError
from ....crosscutting.logger import logger
from ....domain.entities import Cart
from ....domain.repositories import CartRepository, UserRepository
from .cart_results import CartResult


class CreateCartUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        cart_repository: CartRepository,
    ) -> None:
        self._users = user_repository
        self._carts = cart_repository

    def execute(self, user_id: UUID) -> CartResult:
        user = self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if user.cart_id is not None:
            existing = self._carts.get_cart(user.cart_id)
            if existing is not None:
                return CartResult(cart=existing, created=False)

        cart = self._carts.create_cart(Cart(id=uuid4(), owner_user_id=user.id))
        self._users.update_user_fields(user.id, {"cart_id": cart.id})

        logger.info(
            "Carrito creado",
            extra={"user_id": str(user.id), "cart_id": str(cart.id)},
        )
        return CartResult(cart=cart, created=True)
