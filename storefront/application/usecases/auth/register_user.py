"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Dar de alta un usuario nuevo como guest, con su carrito asignado, y
    devolver un token de acceso listo para usar.

Why (Context / Intención):
    - El registro solo exige el set básico (nombre, apellido, email, password).
      El resto del perfil puede completarse después; mientras tanto el usuario
      queda como guest y no puede transaccionar con el carrito.
    - El rol NUNCA se toma del payload: siempre nace guest.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Normalizar y validar email / password / teléfono / dirección.
    - Rechazar emails ya registrados.
    - Persistir el usuario, crear su carrito y vincularlo (cart_id).
    - Compensar (borrar el usuario) si el carrito no puede crearse.
    - Emitir el token y calcular los flags de completitud.

Collaborators:
    - UserRepository / CartRepository
    - password_hasher / token_issuer (inyectados desde identity)
    - domain.profile.evaluate_completeness

-------------------------------------------------------------------------------
INPUTS / OUTPUTS (Contrato del caso de uso)
-------------------------------------------------------------------------------
Inputs:
    RegisterUserInput (campos de perfil opcionales + address como mapping)

Outputs:
    AuthResult (user + token + completeness) o AuthError VALIDATION_ERROR
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from uuid import uuid4

from ....crosscutting.exceptions import DatabaseError, DuplicateEmailError
from ....crosscutting.logger import logger
from ....domain.entities import Cart
from ....domain.profile import (
    DEFAULT_REQUIREMENTS,
    ProfileRequirements,
    evaluate_completeness,
)
from ....domain.repositories import CartRepository, UserRepository
from ....identity.users import User, UserRole
from ...validators import (
    MSG_INCOMPLETE_ADDRESS,
    MSG_INVALID_EMAIL,
    MSG_INVALID_PHONE,
    MSG_SHORT_PASSWORD,
    address_from_mapping,
    clean_text,
    is_valid_email,
    is_valid_password,
    is_valid_phone,
    missing_address_fields,
    normalize_email,
)
from .auth_results import AuthError, AuthErrorCode, AuthResult

MSG_REQUIRED_FIELDS = (
    "Please provide all required fields: first_name, last_name, email, password"
)
MSG_EMAIL_IN_USE = "Email already in use"

PasswordHasher = Callable[[str], str]
TokenIssuer = Callable[[User], tuple[str, int]]


@dataclass(frozen=True)
class RegisterUserInput:
    email: str | None
    password: str | None
    first_name: str | None = None
    last_name: str | None = None
    identification_number: str | None = None
    birth_date: str | None = None
    activity_type: str | None = None
    activity_number: str | None = None
    phone: str | None = None
    address: Mapping[str, Any] | None = field(default=None)


def _validation_error(message: str) -> AuthResult:
    return AuthResult(
        error=AuthError(code=AuthErrorCode.VALIDATION_ERROR, message=message)
    )


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        cart_repository: CartRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        requirements: ProfileRequirements = DEFAULT_REQUIREMENTS,
    ) -> None:
        self._users = user_repository
        self._carts = cart_repository
        self._hash_password = password_hasher
        self._issue_token = token_issuer
        self._requirements = requirements

    def execute(self, input_data: RegisterUserInput) -> AuthResult:
        # 1) Set básico obligatorio.
        email = normalize_email(input_data.email)
        first_name = clean_text(input_data.first_name)
        last_name = clean_text(input_data.last_name)
        password = input_data.password or ""
        if not (email and first_name and last_name and password.strip()):
            return _validation_error(MSG_REQUIRED_FIELDS)

        # 2) Formatos.
        if not is_valid_email(email):
            return _validation_error(MSG_INVALID_EMAIL)
        if not is_valid_password(password):
            return _validation_error(MSG_SHORT_PASSWORD)

        phone = clean_text(input_data.phone)
        if phone is not None and not is_valid_phone(phone):
            return _validation_error(MSG_INVALID_PHONE)

        address = address_from_mapping(input_data.address)
        if address is not None and missing_address_fields(address):
            return _validation_error(MSG_INCOMPLETE_ADDRESS)

        # 3) Unicidad. El pre-check da el caso común; la carrera la resuelve el
        #    índice único (DuplicateEmailError en create_user).
        if self._users.get_user_by_email(email) is not None:
            logger.warning("Registro rechazado: email en uso", extra={"email": email})
            return _validation_error(MSG_EMAIL_IN_USE)

        # 4) Persistir usuario (siempre guest) + carrito.
        new_user = User(
            id=uuid4(),
            email=email,
            password_hash=self._hash_password(password),
            role=UserRole.GUEST,
            first_name=first_name,
            last_name=last_name,
            identification_number=clean_text(input_data.identification_number),
            birth_date=clean_text(input_data.birth_date),
            activity_type=clean_text(input_data.activity_type),
            activity_number=clean_text(input_data.activity_number),
            phone=phone,
            address=address,
        )
        try:
            user = self._users.create_user(new_user)
        except DuplicateEmailError:
            logger.warning(
                "Registro rechazado: email en uso (carrera)", extra={"email": email}
            )
            return _validation_error(MSG_EMAIL_IN_USE)

        cart = None
        try:
            cart = self._carts.create_cart(Cart(id=uuid4(), owner_user_id=user.id))
            user = self._users.update_user_fields(user.id, {"cart_id": cart.id}) or user
        except DatabaseError as exc:
            # R: sin carrito el usuario no puede operar; se deshace el alta.
            logger.error(
                "Registro revertido: no se pudo crear el carrito",
                extra={"user_id": str(user.id), "error_id": exc.error_id},
            )
            if cart is not None:
                self._carts.delete_cart(cart.id)
            self._users.delete_user(user.id)
            raise

        token, expires_in = self._issue_token(user)
        logger.info(
            "Usuario registrado",
            extra={"user_id": str(user.id), "cart_id": str(cart.id)},
        )
        return AuthResult(
            user=user,
            token=token,
            expires_in=expires_in,
            completeness=evaluate_completeness(user, self._requirements),
        )
