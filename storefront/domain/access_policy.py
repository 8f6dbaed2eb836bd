"""
===============================================================================
TARJETA CRC — domain/access_policy.py
===============================================================================

Módulo:
    Política de acceso por rol y ownership (usuarios, carritos, órdenes)

Responsabilidades:
    - Definir reglas puras de acceso (sin DB, sin FastAPI).
    - Devolver AccessDecision (allowed + código + motivo) para que el borde
      HTTP traduzca a 401/403/404 sin reinterpretar.
    - Fijar el orden de chequeos que define los códigos observables.

Colaboradores:
    - identity.users: AuthenticatedPrincipal, UserRole
    - identity.access_control: guards que ejecutan estas reglas y levantan
      errores HTTP.

Reglas:
    - Sin principal => UNAUTHORIZED, siempre antes que rol/ownership.
    - Admin puede todo (salvo que el recurso no exista, en órdenes).
    - Guest no transacciona con el carrito => INCOMPLETE_PROFILE.
    - Carrito: ownership antes que existencia.
    - Orden: existencia antes que ownership, y "no es tuya" se reporta igual
      que "no existe".
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable
from uuid import UUID

from ..identity.users import AuthenticatedPrincipal, UserRole


class DenialCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INCOMPLETE_PROFILE = "INCOMPLETE_PROFILE"
    NOT_FOUND = "NOT_FOUND"


MSG_AUTH_REQUIRED = "Authentication required"
MSG_ROLE_NOT_ALLOWED = "You do not have permission to perform this action"
MSG_NOT_SELF = "You can only access your own profile"
MSG_NO_CART = "You do not have a cart assigned"
MSG_WRONG_CART = "You can only access your own cart"
MSG_INCOMPLETE_PROFILE = "Please complete your profile before using the cart"
MSG_ORDER_NOT_FOUND = "Order not found"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    allowed: bool
    code: DenialCode | None = None
    reason: str = ""

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, code: DenialCode, reason: str) -> "AccessDecision":
        return cls(allowed=False, code=code, reason=reason)


_UNAUTHENTICATED = AccessDecision.deny(DenialCode.UNAUTHORIZED, MSG_AUTH_REQUIRED)


def check_role(
    principal: AuthenticatedPrincipal | None, allowed_roles: Iterable[UserRole]
) -> AccessDecision:
    if principal is None:
        return _UNAUTHENTICATED
    if principal.role not in set(allowed_roles):
        return AccessDecision.deny(DenialCode.FORBIDDEN, MSG_ROLE_NOT_ALLOWED)
    return AccessDecision.allow()


def check_self_or_admin(
    principal: AuthenticatedPrincipal | None, target_user_id: UUID
) -> AccessDecision:
    if principal is None:
        return _UNAUTHENTICATED
    if principal.is_admin or principal.user_id == target_user_id:
        return AccessDecision.allow()
    return AccessDecision.deny(DenialCode.FORBIDDEN, MSG_NOT_SELF)


def check_cart_owner_or_admin(
    principal: AuthenticatedPrincipal | None,
    cart_owner_id: UUID | None,
) -> AccessDecision:
    """
    cart_owner_id es el owner resuelto (None si el carrito no existe).
    El caller no debe resolverlo si el principal no tiene carrito.
    """
    if principal is None:
        return _UNAUTHENTICATED
    if principal.is_admin:
        return AccessDecision.allow()
    if principal.cart_id is None:
        return AccessDecision.deny(DenialCode.FORBIDDEN, MSG_NO_CART)
    if cart_owner_id is None or cart_owner_id != principal.user_id:
        return AccessDecision.deny(DenialCode.FORBIDDEN, MSG_WRONG_CART)
    return AccessDecision.allow()


def check_order_owner_or_admin(
    principal: AuthenticatedPrincipal | None,
    order_owner_id: UUID | None,
) -> AccessDecision:
    if principal is None:
        return _UNAUTHENTICATED
    if order_owner_id is None:
        return AccessDecision.deny(DenialCode.NOT_FOUND, MSG_ORDER_NOT_FOUND)
    if principal.is_admin or order_owner_id == principal.user_id:
        return AccessDecision.allow()
    # R: mismo código y mensaje que "no existe".
    return AccessDecision.deny(DenialCode.NOT_FOUND, MSG_ORDER_NOT_FOUND)


def check_complete_profile(principal: AuthenticatedPrincipal | None) -> AccessDecision:
    if principal is None:
        return _UNAUTHENTICATED
    if principal.role == UserRole.GUEST:
        return AccessDecision.deny(
            DenialCode.INCOMPLETE_PROFILE, MSG_INCOMPLETE_PROFILE
        )
    return AccessDecision.allow()
