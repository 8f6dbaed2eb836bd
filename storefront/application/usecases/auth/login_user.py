"""
===============================================================================
USE CASE: Login User
===============================================================================

Business Goal:
    Autenticar por email + password, disparar la promoción guest -> user y
    emitir el token de acceso.

Why (Context / Intención):
    - Email inexistente y password incorrecto devuelven el MISMO error para no
      filtrar qué emails están registrados.
    - La promoción corre antes de emitir el token para que el claim de rol
      refleje el estado vigente.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    LoginUserUseCase

Responsibilities:
    - Validar presencia de credenciales.
    - Verificar password (sin loguear secretos).
    - Ejecutar RolePromotionService.maybe_promote.
    - Emitir token y devolver flags de completitud.

Collaborators:
    - UserRepository
    - RolePromotionService
    - password_verifier / token_issuer (inyectados desde identity)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.users import User
from ...role_promotion import RolePromotionService
from ...validators import normalize_email
from .auth_results import AuthError, AuthErrorCode, AuthResult

MSG_CREDENTIALS_REQUIRED = "Email and password are required"
MSG_INVALID_CREDENTIALS = "Invalid credentials"

PasswordVerifier = Callable[[str, str], bool]
TokenIssuer = Callable[[User], tuple[str, int]]


@dataclass(frozen=True)
class LoginUserInput:
    email: str | None
    password: str | None


class LoginUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        promotion_service: RolePromotionService,
        password_verifier: PasswordVerifier,
        token_issuer: TokenIssuer,
    ) -> None:
        self._users = user_repository
        self._promotion = promotion_service
        self._verify_password = password_verifier
        self._issue_token = token_issuer

    def execute(self, input_data: LoginUserInput) -> AuthResult:
        email = normalize_email(input_data.email)
        password = input_data.password or ""
        if not email or not password:
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.VALIDATION_ERROR,
                    message=MSG_CREDENTIALS_REQUIRED,
                )
            )

        user = self._users.get_user_by_email(email)
        if user is None or not self._verify_password(password, user.password_hash):
            logger.warning("Login fallido", extra={"email": email})
            return AuthResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHORIZED, message=MSG_INVALID_CREDENTIALS
                )
            )

        outcome = self._promotion.maybe_promote(user.id)
        token, expires_in = self._issue_token(outcome.user)

        logger.info(
            "Login exitoso",
            extra={"user_id": str(user.id), "promoted": outcome.promoted},
        )
        return AuthResult(
            user=outcome.user,
            token=token,
            expires_in=expires_in,
            completeness=outcome.completeness,
            promoted=outcome.promoted,
        )
