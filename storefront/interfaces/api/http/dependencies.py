"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * parseo de ids de path con mensaje estable ("Invalid ... ID format")
      * guards de carrito (ownership + perfil completo) como dependencies
      * guard de órdenes (existencia antes que ownership)

Orden de chequeos (define los códigos observables):
  - Carrito: auth -> perfil completo (si aplica) -> ownership -> existencia
    (la existencia la verifica el caso de uso => 404).
  - Orden: auth -> existencia -> ownership (no-owner se ve como 404).

Colaboradores:
  - identity.auth_dependencies.require_principal
  - identity.access_control (guards puros)
  - container (repos para resolver owners)
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import UUID

from fastapi import Depends

from ....container import get_cart_repository, get_order_repository
from ....crosscutting.error_responses import validation_error
from ....domain.repositories import CartRepository, OrderRepository
from ....identity.access_control import (
    require_cart_owner_or_admin,
    require_complete_profile,
    require_order_owner_or_admin,
)
from ....identity.auth_dependencies import require_principal
from ....identity.users import AuthenticatedPrincipal


def parse_uuid(value: str, label: str) -> UUID:
    """Parsea un id de path; 400 con mensaje estable si no es un UUID."""
    try:
        return UUID(str(value).strip())
    except (ValueError, AttributeError):
        raise validation_error(f"Invalid {label} ID format") from None


def require_cart_access(*, complete_profile: bool = False) -> Callable:
    """
    Dependency: el caller puede operar sobre {cid}.

    complete_profile=True para operaciones transaccionales (agregar, cambiar
    cantidad, checkout): un guest recibe INCOMPLETE_PROFILE antes que
    cualquier chequeo de ownership.
    """

    def dependency(
        cid: str,
        principal: AuthenticatedPrincipal = Depends(require_principal()),
        carts: CartRepository = Depends(get_cart_repository),
    ) -> AuthenticatedPrincipal:
        if complete_profile:
            require_complete_profile(principal)
        cart_id = parse_uuid(cid, "cart")
        return require_cart_owner_or_admin(principal, cart_id, carts.get_cart_owner)

    return dependency


def require_order_access() -> Callable:
    """Dependency: {oid} existe y el caller es su owner (o admin)."""

    def dependency(
        oid: str,
        principal: AuthenticatedPrincipal = Depends(require_principal()),
        orders: OrderRepository = Depends(get_order_repository),
    ) -> AuthenticatedPrincipal:
        order_id = parse_uuid(oid, "order")
        return require_order_owner_or_admin(
            principal, order_id, orders.get_order_owner
        )

    return dependency
