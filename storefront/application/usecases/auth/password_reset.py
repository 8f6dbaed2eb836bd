"""
===============================================================================
USE CASES: Password Reset (request / verify / reset)
===============================================================================

Business Goal:
    Permitir que un usuario que olvidó su contraseña la restablezca con un
    token de un solo uso, sin revelar qué emails están registrados.

Why (Context / Intención):
    - El pedido de reset siempre responde igual: un atacante no puede
      enumerar cuentas con este endpoint.
    - Se persiste solo el hash SHA-256 del token; el token en claro viaja una
      única vez hacia el notificador.
    - Emitir un token nuevo invalida los anteriores del mismo usuario.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    RequestPasswordResetUseCase / VerifyResetTokenUseCase / ResetPasswordUseCase

Responsibilities:
    - Emitir token (TTL desde Settings) y avisar por el notificador.
    - Verificar que el token exista, no esté usado ni vencido.
    - Consumir el token (atómico) y guardar el nuevo hash de contraseña.
    - Rechazar la misma contraseña actual.

Collaborators:
    - UserRepository / PasswordResetTokenRepository
    - domain.services.PasswordResetNotifier
    - password_hasher / password_verifier (inyectados desde identity)
===============================================================================
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import PasswordResetToken
from ....domain.repositories import PasswordResetTokenRepository, UserRepository
from ....domain.services import PasswordResetNotifier
from ....identity.users import User
from ...validators import MSG_SHORT_PASSWORD, is_valid_password, normalize_email
from .auth_results import AuthError, AuthErrorCode

MSG_EMAIL_REQUIRED = "Email is required"
MSG_RESET_REQUESTED = (
    "If your email is registered, password reset instructions have been sent"
)
MSG_TOKEN_VALID = "Token is valid"
MSG_INVALID_RESET_TOKEN = "Password reset token is invalid or has expired"
MSG_PASSWORD_REQUIRED = "New password is required"
MSG_SAME_PASSWORD = "New password cannot be the same as your current password"
MSG_PASSWORD_RESET = "Password has been successfully reset"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass
class PasswordResetResult:
    """error is None => operación aceptada (email solo si hay usuario)."""

    email: str | None = None
    error: AuthError | None = None


def _invalid_token() -> PasswordResetResult:
    return PasswordResetResult(
        error=AuthError(
            code=AuthErrorCode.VALIDATION_ERROR, message=MSG_INVALID_RESET_TOKEN
        )
    )


def _validation_error(message: str) -> PasswordResetResult:
    return PasswordResetResult(
        error=AuthError(code=AuthErrorCode.VALIDATION_ERROR, message=message)
    )


class RequestPasswordResetUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        token_repository: PasswordResetTokenRepository,
        notifier: PasswordResetNotifier,
        ttl_minutes: int = 60,
        token_factory: Callable[[], str] = lambda: secrets.token_hex(32),
        clock: Clock = _utcnow,
    ) -> None:
        self._users = user_repository
        self._tokens = token_repository
        self._notifier = notifier
        self._ttl = timedelta(minutes=ttl_minutes)
        self._new_token = token_factory
        self._now = clock

    def execute(
        self, email: str | None, build_reset_url: Callable[[str], str]
    ) -> PasswordResetResult:
        email = normalize_email(email)
        if not email:
            return _validation_error(MSG_EMAIL_REQUIRED)

        user = self._users.get_user_by_email(email)
        if user is None:
            logger.warning("Reset pedido para email inexistente", extra={"email": email})
            return PasswordResetResult()

        raw_token = self._new_token()
        self._tokens.create_token(
            PasswordResetToken(
                id=uuid4(),
                user_id=user.id,
                token_hash=hash_reset_token(raw_token),
                expires_at=self._now() + self._ttl,
            )
        )
        self._notifier.send_reset_link(user.email, raw_token, build_reset_url(raw_token))

        logger.info("Reset de contraseña emitido", extra={"user_id": str(user.id)})
        return PasswordResetResult(email=user.email)


def _resolve(
    users: UserRepository,
    tokens: PasswordResetTokenRepository,
    raw_token: str | None,
    now: datetime,
) -> tuple[PasswordResetToken, User] | None:
    raw_token = (raw_token or "").strip()
    if not raw_token:
        return None
    token = tokens.find_valid_token(hash_reset_token(raw_token), now)
    if token is None:
        return None
    user = users.get_user(token.user_id)
    if user is None:
        return None
    return token, user


class VerifyResetTokenUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        token_repository: PasswordResetTokenRepository,
        clock: Clock = _utcnow,
    ) -> None:
        self._users = user_repository
        self._tokens = token_repository
        self._now = clock

    def execute(self, raw_token: str | None) -> PasswordResetResult:
        resolved = _resolve(self._users, self._tokens, raw_token, self._now())
        if resolved is None:
            return _invalid_token()
        _, user = resolved
        return PasswordResetResult(email=user.email)


class ResetPasswordUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        token_repository: PasswordResetTokenRepository,
        notifier: PasswordResetNotifier,
        password_hasher: Callable[[str], str],
        password_verifier: Callable[[str, str], bool],
        clock: Clock = _utcnow,
    ) -> None:
        self._users = user_repository
        self._tokens = token_repository
        self._notifier = notifier
        self._hash_password = password_hasher
        self._verify_password = password_verifier
        self._now = clock

    def execute(
        self, raw_token: str | None, new_password: str | None
    ) -> PasswordResetResult:
        password = new_password or ""
        if not password.strip():
            return _validation_error(MSG_PASSWORD_REQUIRED)
        if not is_valid_password(password):
            return _validation_error(MSG_SHORT_PASSWORD)

        resolved = _resolve(self._users, self._tokens, raw_token, self._now())
        if resolved is None:
            return _invalid_token()
        token, user = resolved

        if self._verify_password(password, user.password_hash):
            return _validation_error(MSG_SAME_PASSWORD)

        # R: el token se consume antes de escribir; dos resets concurrentes con
        # el mismo token => solo uno gana.
        if not self._tokens.mark_used(token.id):
            return _invalid_token()

        updated = self._users.update_user_fields(
            user.id, {"password_hash": self._hash_password(password)}
        )
        if updated is None:
            return _invalid_token()

        self._notifier.send_reset_confirmation(updated.email)
        logger.info("Contraseña restablecida", extra={"user_id": str(user.id)})
        return PasswordResetResult(email=updated.email)
