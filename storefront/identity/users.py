"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario y Principal autenticado

Responsabilidades:
    - Definir el enum de roles (guest/user/admin) y su orden de promoción.
    - Definir Address y User (credenciales + perfil + rol + carrito).
    - Definir AuthenticatedPrincipal: identidad inmutable del caller por request.

Colaboradores:
    - domain/profile.py: evalúa completitud sobre User.
    - application/role_promotion.py: única vía automática para cambiar el rol.
    - identity/auth_users.py: construye principals a partir del token.
    - infrastructure/repositories/*: persisten/mapean User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
    - La completitud del perfil NO se guarda acá; siempre se recalcula.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados. guest -> user es la única transición automática."""

    GUEST = "guest"
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Address:
    """Dirección postal. Solo cuenta como completa si todos los campos tienen valor."""

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (credenciales + perfil)."""

    id: UUID
    email: str
    password_hash: str
    role: UserRole = UserRole.GUEST

    # Grupo A: datos personales
    first_name: str | None = None
    last_name: str | None = None
    identification_number: str | None = None
    birth_date: str | None = None
    activity_type: str | None = None
    activity_number: str | None = None
    phone: str | None = None

    # Grupo B: dirección
    address: Address | None = None

    cart_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class AuthenticatedPrincipal:
    """Caller autenticado del request actual. Se pasa explícito; nunca se persiste."""

    user_id: UUID
    email: str
    role: UserRole
    cart_id: UUID | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedPrincipal":
        return cls(
            user_id=user.id, email=user.email, role=user.role, cart_id=user.cart_id
        )
