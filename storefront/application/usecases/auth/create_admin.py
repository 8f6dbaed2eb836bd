"""
===============================================================================
USE CASE: Create Admin
===============================================================================

Business Goal:
    Permitir que un administrador dé de alta otro administrador.

Why (Context / Intención):
    - El rol admin nunca se obtiene por promoción automática: solo por este
      caso de uso (actor admin) o por el seed de desarrollo.
    - No existe bypass por entorno: en tests se inyecta un principal admin.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateAdminUseCase

Responsibilities:
    - Validar que el actor sea admin (FORBIDDEN si no).
    - Validar campos requeridos y formato de email/password.
    - Persistir el usuario con role=admin y emitir su token.

Collaborators:
    - UserRepository
    - password_hasher / token_issuer
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateEmailError
from ....crosscutting.logger import logger
from ....domain.profile import (
    DEFAULT_REQUIREMENTS,
    ProfileRequirements,
    evaluate_completeness,
)
from ....domain.repositories import UserRepository
from ....identity.users import AuthenticatedPrincipal, User, UserRole
from ...validators import (
    MSG_INVALID_EMAIL,
    MSG_SHORT_PASSWORD,
    clean_text,
    is_valid_email,
    is_valid_password,
    normalize_email,
)
from .auth_results import AuthError, AuthErrorCode, AuthResult
from .register_user import MSG_EMAIL_IN_USE, MSG_REQUIRED_FIELDS

MSG_ADMIN_ONLY = "Only admins can create admin users"


@dataclass(frozen=True)
class CreateAdminInput:
    actor: AuthenticatedPrincipal | None
    email: str | None
    password: str | None
    first_name: str | None
    last_name: str | None


class CreateAdminUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_hasher: Callable[[str], str],
        token_issuer: Callable[[User], tuple[str, int]],
        requirements: ProfileRequirements = DEFAULT_REQUIREMENTS,
    ) -> None:
        self._users = user_repository
        self._hash_password = password_hasher
        self._issue_token = token_issuer
        self._requirements = requirements

    def execute(self, input_data: CreateAdminInput) -> AuthResult:
        actor = input_data.actor
        if actor is None or not actor.is_admin:
            return self._error(AuthErrorCode.FORBIDDEN, MSG_ADMIN_ONLY)

        email = normalize_email(input_data.email)
        first_name = clean_text(input_data.first_name)
        last_name = clean_text(input_data.last_name)
        password = input_data.password or ""
        if not (email and first_name and last_name and password.strip()):
            return self._error(AuthErrorCode.VALIDATION_ERROR, MSG_REQUIRED_FIELDS)
        if not is_valid_email(email):
            return self._error(AuthErrorCode.VALIDATION_ERROR, MSG_INVALID_EMAIL)
        if not is_valid_password(password):
            return self._error(AuthErrorCode.VALIDATION_ERROR, MSG_SHORT_PASSWORD)
        if self._users.get_user_by_email(email) is not None:
            return self._error(AuthErrorCode.VALIDATION_ERROR, MSG_EMAIL_IN_USE)

        try:
            admin = self._users.create_user(
                User(
                    id=uuid4(),
                    email=email,
                    password_hash=self._hash_password(password),
                    role=UserRole.ADMIN,
                    first_name=first_name,
                    last_name=last_name,
                )
            )
        except DuplicateEmailError:
            return self._error(AuthErrorCode.VALIDATION_ERROR, MSG_EMAIL_IN_USE)

        token, expires_in = self._issue_token(admin)

        logger.info(
            "Admin creado",
            extra={"user_id": str(admin.id), "created_by": str(actor.user_id)},
        )
        return AuthResult(
            user=admin,
            token=token,
            expires_in=expires_in,
            completeness=evaluate_completeness(admin, self._requirements),
        )

    @staticmethod
    def _error(code: AuthErrorCode, message: str) -> AuthResult:
        return AuthResult(error=AuthError(code=code, message=message))
