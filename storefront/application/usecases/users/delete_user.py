"""
===============================================================================
USE CASE: Delete User (admin)
===============================================================================

Business Goal:
    Eliminar un usuario y su carrito asociado.

Notas:
    - Las órdenes NO se borran: son historial de compras.
    - Si el borrado del carrito falla luego de borrar el usuario, el carrito
      queda huérfano; no hay transacciones multi-documento.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import CartRepository, UserRepository
from .get_user import MSG_USER_NOT_FOUND
from .user_results import DeleteUserResult, UserError, UserErrorCode


class DeleteUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        cart_repository: CartRepository,
    ) -> None:
        self._users = user_repository
        self._carts = cart_repository

    def execute(self, user_id: UUID) -> DeleteUserResult:
        user = self._users.get_user(user_id)
        if user is None or not self._users.delete_user(user_id):
            return DeleteUserResult(
                deleted=False,
                error=UserError(
                    code=UserErrorCode.NOT_FOUND, message=MSG_USER_NOT_FOUND
                ),
            )

        if user.cart_id is not None:
            self._carts.delete_cart(user.cart_id)

        logger.info("Usuario eliminado", extra={"user_id": str(user_id)})
        return DeleteUserResult(deleted=True)
