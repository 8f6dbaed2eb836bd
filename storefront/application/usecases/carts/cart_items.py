"""
===============================================================================
USE CASES: Cart content (get / add / update quantity / remove / empty)
===============================================================================

Business Goal:
    Operar sobre el contenido de un carrito ya autorizado.

Why (Context / Intención):
    - Ownership y perfil completo se validan ANTES, en el borde HTTP, con los
      guards de identity.access_control. Estos casos de uso asumen que el
      caller ya puede operar sobre cart_id.
    - Agregar un producto existente acumula la cantidad; actualizar la
      reemplaza.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    GetCartUseCase, AddProductToCartUseCase, UpdateCartItemUseCase,
    RemoveCartItemUseCase, EmptyCartUseCase

Responsibilities:
    - Validar cantidades (>= 1).
    - Verificar existencia del carrito y del producto.
    - Mutar la entidad Cart y persistirla (save_cart).

Collaborators:
    - CartRepository
    - ProductRepository (solo para agregar)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Cart
from ....domain.repositories import CartRepository, ProductRepository
from .cart_results import CartError, CartErrorCode, CartResult

MSG_CART_NOT_FOUND = "Cart not found"
MSG_PRODUCT_NOT_FOUND = "Product not found"
MSG_PRODUCT_NOT_IN_CART = "Product not found in cart"
MSG_INVALID_QUANTITY = "Invalid quantity value"


def _error(code: CartErrorCode, message: str) -> CartResult:
    return CartResult(error=CartError(code=code, message=message))


def _cart_not_found() -> CartResult:
    return _error(CartErrorCode.NOT_FOUND, MSG_CART_NOT_FOUND)


def _is_valid_quantity(quantity: object) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


class _CartUseCase:
    def __init__(self, *, cart_repository: CartRepository) -> None:
        self._carts = cart_repository

    def _save(self, cart: Cart) -> CartResult:
        saved = self._carts.save_cart(cart)
        if saved is None:
            return _cart_not_found()
        return CartResult(cart=saved)


class GetCartUseCase(_CartUseCase):
    def execute(self, cart_id: UUID) -> CartResult:
        cart = self._carts.get_cart(cart_id)
        if cart is None:
            return _cart_not_found()
        return CartResult(cart=cart)


class AddProductToCartUseCase(_CartUseCase):
    def __init__(
        self,
        *,
        cart_repository: CartRepository,
        product_repository: ProductRepository,
    ) -> None:
        super().__init__(cart_repository=cart_repository)
        self._products = product_repository

    def execute(self, cart_id: UUID, product_id: UUID, quantity: int = 1) -> CartResult:
        if not _is_valid_quantity(quantity):
            return _error(CartErrorCode.VALIDATION_ERROR, MSG_INVALID_QUANTITY)

        cart = self._carts.get_cart(cart_id)
        if cart is None:
            return _cart_not_found()

        product = self._products.get_product(product_id)
        if product is None or not product.is_active:
            return _error(CartErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_FOUND)

        cart.add_product(product_id, quantity)
        logger.info(
            "Producto agregado al carrito",
            extra={
                "cart_id": str(cart_id),
                "product_id": str(product_id),
                "quantity": quantity,
            },
        )
        return self._save(cart)


class UpdateCartItemUseCase(_CartUseCase):
    def execute(self, cart_id: UUID, product_id: UUID, quantity: int) -> CartResult:
        if not _is_valid_quantity(quantity):
            return _error(CartErrorCode.VALIDATION_ERROR, MSG_INVALID_QUANTITY)

        cart = self._carts.get_cart(cart_id)
        if cart is None:
            return _cart_not_found()
        if not cart.set_quantity(product_id, quantity):
            return _error(CartErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_IN_CART)
        return self._save(cart)


class RemoveCartItemUseCase(_CartUseCase):
    def execute(self, cart_id: UUID, product_id: UUID) -> CartResult:
        cart = self._carts.get_cart(cart_id)
        if cart is None:
            return _cart_not_found()
        if not cart.remove_product(product_id):
            return _error(CartErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_IN_CART)
        return self._save(cart)


class EmptyCartUseCase(_CartUseCase):
    def execute(self, cart_id: UUID) -> CartResult:
        cart = self._carts.get_cart(cart_id)
        if cart is None:
            return _cart_not_found()
        cart.clear()
        return self._save(cart)
