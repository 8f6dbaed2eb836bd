"""Cart use cases."""

from .cart_items import (
    AddProductToCartUseCase,
    EmptyCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from .cart_results import CartError, CartErrorCode, CartResult, CheckoutResult
from .checkout_cart import CheckoutCartInput, CheckoutCartUseCase
from .create_cart import CreateCartUseCase

__all__ = [
    "AddProductToCartUseCase",
    "CartError",
    "CartErrorCode",
    "CartResult",
    "CheckoutCartInput",
    "CheckoutCartUseCase",
    "CheckoutResult",
    "CreateCartUseCase",
    "EmptyCartUseCase",
    "GetCartUseCase",
    "RemoveCartItemUseCase",
    "UpdateCartItemUseCase",
]
