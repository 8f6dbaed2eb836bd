"""
===============================================================================
TARJETA CRC — identity/auth_dependencies.py
===============================================================================

Módulo:
    Dependencies FastAPI de autenticación y rol

Responsabilidades:
    - Extraer el token (Authorization: Bearer o cookie) y resolver el
      AuthenticatedPrincipal con el AuthenticationResolver inyectado.
    - Exponer require_roles()/require_admin() montados sobre los guards puros.

Colaboradores:
    - identity.auth_users (extract_access_token, AuthenticationResolver)
    - identity.access_control (require_role)
    - container.get_authentication_resolver (override-able en tests)

Notas:
    - Dependencies sync: el resolver JWT hace I/O bloqueante (recarga del
      usuario) y FastAPI las corre en su threadpool.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_authentication_resolver
from ..crosscutting.error_responses import unauthorized
from .access_control import require_role
from .auth_users import AuthenticationResolver, extract_access_token
from .users import AuthenticatedPrincipal, UserRole


def require_principal() -> Callable:
    """Dependency FastAPI: requiere un principal autenticado."""

    def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        resolver: AuthenticationResolver = Depends(get_authentication_resolver),
    ) -> AuthenticatedPrincipal:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Missing bearer token")

        return resolver.resolve(token)

    return dependency


def require_roles(*roles: UserRole) -> Callable:
    """Dependency FastAPI: requiere principal con uno de los roles."""
    allowed = frozenset(UserRole(r) for r in roles)

    def dependency(
        principal: AuthenticatedPrincipal = Depends(require_principal()),
    ) -> AuthenticatedPrincipal:
        return require_role(principal, allowed)

    return dependency


def require_admin() -> Callable:
    return require_roles(UserRole.ADMIN)
