"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP envelope)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message [+ details]).
  - El mensaje del caso de uso se propaga tal cual: es el contrato con el
    frontend (ej: "Email already in use", "Product not found in cart").

Colaboradores:
  - application.usecases.* (AuthErrorCode, UserErrorCode, CartErrorCode, ...)
  - crosscutting.error_responses (validation_error, forbidden, etc.)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ....application.usecases import (
    AuthError,
    AuthErrorCode,
    CartError,
    CartErrorCode,
    OrderError,
    OrderErrorCode,
    ProductError,
    ProductErrorCode,
    QuestionError,
    QuestionErrorCode,
    UserError,
    UserErrorCode,
)
from ....crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    forbidden,
    internal_error,
    unauthorized,
    validation_error,
)


def _not_found(message: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, message)


def raise_auth_error(error: AuthError) -> NoReturn:
    if error.code == AuthErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == AuthErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == AuthErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    # Fallback defensivo (no debería ocurrir)
    raise internal_error(error.message)


def raise_user_error(error: UserError) -> NoReturn:
    if error.code == UserErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == UserErrorCode.NOT_FOUND:
        raise _not_found(error.message)
    raise internal_error(error.message)


def raise_cart_error(error: CartError) -> NoReturn:
    if error.code == CartErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, errors=error.details)
    if error.code == CartErrorCode.NOT_FOUND:
        raise _not_found(error.message)
    raise internal_error(error.message)


def raise_order_error(error: OrderError) -> NoReturn:
    if error.code == OrderErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == OrderErrorCode.NOT_FOUND:
        raise _not_found(error.message)
    raise internal_error(error.message)


def raise_product_error(error: ProductError) -> NoReturn:
    if error.code == ProductErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ProductErrorCode.NOT_FOUND:
        raise _not_found(error.message)
    raise internal_error(error.message)


def raise_question_error(error: QuestionError) -> NoReturn:
    if error.code == QuestionErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == QuestionErrorCode.NOT_FOUND:
        raise _not_found(error.message)
    raise internal_error(error.message)
