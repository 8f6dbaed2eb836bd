"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para sesiones y usuarios

Responsabilidades:
    - DTOs de request (registro, login, alta de admin, update de perfil).
    - DTOs de response con envelope {"status": "success", ...} y los flags
      user_is_completed / address_is_completed.
    - NUNCA exponer password_hash.

Notas:
    - Los requests aceptan strings opcionales: los mensajes de "campo
      requerido" los produce el caso de uso, no pydantic.
    - role en el update se acepta y se ignora (no hay escalada por payload).

Colaboradores:
    - identity.users (User, Address, UserRole)
    - domain.profile.ProfileCompleteness
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .....domain.profile import ProfileCompleteness
from .....identity.users import Address, User, UserRole


# -----------------------------------------------------------------------------
# Shared
# -----------------------------------------------------------------------------
class AddressPayload(BaseModel):
    """Dirección (todos los campos opcionales en el payload)."""

    street: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)

    @classmethod
    def from_domain(cls, address: Address | None) -> "AddressPayload | None":
        if address is None:
            return None
        return cls(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        )


class MessageRes(BaseModel):
    status: Literal["success"] = "success"
    message: str


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegisterReq(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, max_length=256)
    identification_number: str | None = Field(default=None, max_length=50)
    birth_date: str | None = Field(default=None, max_length=20)
    activity_type: str | None = Field(default=None, max_length=100)
    activity_number: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=30)
    address: AddressPayload | None = None


class LoginReq(BaseModel):
    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, max_length=256)


class CreateAdminReq(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, max_length=256)


class ForgotPasswordReq(BaseModel):
    email: str | None = Field(default=None, max_length=254)


class ResetPasswordReq(BaseModel):
    password: str | None = Field(default=None, max_length=256)


class UpdateUserReq(BaseModel):
    """Update parcial: solo se aplican las claves enviadas."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    identification_number: str | None = Field(default=None, max_length=50)
    birth_date: str | None = Field(default=None, max_length=20)
    activity_type: str | None = Field(default=None, max_length=100)
    activity_number: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=30)
    address: AddressPayload | None = None
    role: str | None = Field(default=None, description="Ignorado")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRes(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: UserRole
    first_name: str | None = None
    last_name: str | None = None
    identification_number: str | None = None
    birth_date: str | None = None
    activity_type: str | None = None
    activity_number: str | None = None
    phone: str | None = None
    address: AddressPayload | None = None
    cart_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            identification_number=user.identification_number,
            birth_date=user.birth_date,
            activity_type=user.activity_type,
            activity_number=user.activity_number,
            phone=user.phone,
            address=AddressPayload.from_domain(user.address),
            cart_id=user.cart_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserDetailRes(BaseModel):
    """Usuario + flags de completitud (recalculados en cada request)."""

    status: Literal["success"] = "success"
    message: str | None = None
    user: UserRes
    user_is_completed: bool
    address_is_completed: bool

    @classmethod
    def build(
        cls,
        user: User,
        completeness: ProfileCompleteness,
        *,
        message: str | None = None,
    ) -> "UserDetailRes":
        return cls(
            message=message,
            user=UserRes.from_domain(user),
            user_is_completed=completeness.personal_complete,
            address_is_completed=completeness.address_complete,
        )


class AuthRes(UserDetailRes):
    """Respuesta de register/login/admin: incluye el token emitido."""

    token: str
    expires_in: int


class ResetTokenRes(MessageRes):
    """Token de reset válido: devuelve el email para mostrarlo en el form."""

    email: str


class UsersListRes(BaseModel):
    status: Literal["success"] = "success"
    payload: list[UserRes]
