"""
===============================================================================
CART USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - CartErrorCode / CartError (con detalles opcionales, ej: productos sin
      stock en el checkout).
    - CartResult (carrito + flag created) y CheckoutResult (orden generada).

Collaborators:
    - domain.entities.Cart / Order
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ....domain.entities import Cart, Order


class CartErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class CartError:
    code: CartErrorCode
    message: str
    details: list[dict[str, Any]] | None = None


@dataclass
class CartResult:
    cart: Cart | None = None
    created: bool = False
    error: CartError | None = None


@dataclass
class CheckoutResult:
    order: Order | None = None
    error: CartError | None = None
