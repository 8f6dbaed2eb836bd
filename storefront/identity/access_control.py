"""
===============================================================================
TARJETA CRC — identity/access_control.py
===============================================================================

Módulo:
    Guards de autorización (rol / ownership / perfil completo)

Responsabilidades:
    - Ejecutar las reglas puras de domain.access_policy.
    - Traducir cada AccessDecision denegada a exactamente un error HTTP:
      401 UNAUTHORIZED, 403 FORBIDDEN, 403 INCOMPLETE_PROFILE, 404 NOT_FOUND.
    - Resolver owners vía callables inyectados (sin conocer repositorios).

Colaboradores:
    - domain.access_policy (decisiones)
    - crosscutting.error_responses (factories de error)
    - interfaces/api/http/routers/* (invocan los guards con el principal)

Notas:
    - El carrito de un principal sin carrito no se resuelve contra el store.
    - En órdenes se resuelve siempre el owner primero (existencia antes que
      ownership).
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Iterable
from uuid import UUID

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    forbidden,
    incomplete_profile,
    unauthorized,
)
from ..domain.access_policy import (
    AccessDecision,
    DenialCode,
    check_cart_owner_or_admin,
    check_complete_profile,
    check_order_owner_or_admin,
    check_role,
    check_self_or_admin,
)
from .users import AuthenticatedPrincipal, UserRole

OwnerResolver = Callable[[UUID], UUID | None]


def _to_http_error(decision: AccessDecision) -> AppHTTPException:
    if decision.code == DenialCode.UNAUTHORIZED:
        return unauthorized(decision.reason)
    if decision.code == DenialCode.INCOMPLETE_PROFILE:
        return incomplete_profile(decision.reason)
    if decision.code == DenialCode.NOT_FOUND:
        return AppHTTPException(404, ErrorCode.NOT_FOUND, decision.reason)
    return forbidden(decision.reason)


def enforce(decision: AccessDecision) -> None:
    """Levanta el error correspondiente si la decisión es deny."""
    if not decision.allowed:
        raise _to_http_error(decision)


def require_role(
    principal: AuthenticatedPrincipal | None, allowed_roles: Iterable[UserRole]
) -> AuthenticatedPrincipal:
    enforce(check_role(principal, allowed_roles))
    return principal


def require_self_or_admin(
    principal: AuthenticatedPrincipal | None, target_user_id: UUID
) -> AuthenticatedPrincipal:
    enforce(check_self_or_admin(principal, target_user_id))
    return principal


def require_cart_owner_or_admin(
    principal: AuthenticatedPrincipal | None,
    cart_id: UUID,
    resolve_cart_owner: OwnerResolver,
) -> AuthenticatedPrincipal:
    owner_id: UUID | None = None
    if principal is not None and not principal.is_admin and principal.cart_id:
        owner_id = resolve_cart_owner(cart_id)
    enforce(check_cart_owner_or_admin(principal, owner_id))
    return principal


def require_order_owner_or_admin(
    principal: AuthenticatedPrincipal | None,
    order_id: UUID,
    resolve_order_owner: OwnerResolver,
) -> AuthenticatedPrincipal:
    if principal is None:
        enforce(check_order_owner_or_admin(None, None))
    owner_id = resolve_order_owner(order_id)
    enforce(check_order_owner_or_admin(principal, owner_id))
    return principal


def require_complete_profile(
    principal: AuthenticatedPrincipal | None,
) -> AuthenticatedPrincipal:
    enforce(check_complete_profile(principal))
    return principal
