"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (Argon2 + JWT) y resolución del principal

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Emitir JWT de acceso con expiración.
    - Decodificar y validar JWT (firma, exp, claims mínimos).
    - Definir el contrato AuthenticationResolver (token -> principal) y sus
      implementaciones: JWT (runtime) y estática (tests / herramientas).
    - Extraer token desde Authorization: Bearer o cookie.

Colaboradores:
    - crosscutting.config.get_settings: secretos, TTL, cookie.
    - crosscutting.error_responses: unauthorized estándar.
    - domain.repositories.UserRepository: recarga el usuario por request.
    - identity.users: User / UserRole / AuthenticatedPrincipal.

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - El rol del principal sale del store, no del claim: un guest promovido
      no necesita token nuevo para operar como user.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Protocol
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .users import AuthenticatedPrincipal, User, UserRole

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"

_password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Contratos internos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Payload mínimo que esperamos de un access token."""

    user_id: str
    email: str
    role: UserRole


def get_auth_settings() -> AuthSettings:
    """Construye un snapshot de settings de auth."""
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
        jwt_cookie_secure=s.jwt_cookie_secure,
    )


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado. Retorna (token, expires_in_seconds)."""
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(user.id),
        CLAIM_EMAIL: user.email,
        CLAIM_ROLE: user.role.value,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Decodifica y valida un JWT de acceso (401 si expiró o es inválido)."""
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid token") from exc

    user_id = payload.get(CLAIM_SUB)
    email = payload.get(CLAIM_EMAIL)
    role_value = payload.get(CLAIM_ROLE)
    token_type = payload.get(CLAIM_TYP)

    if not user_id or not email or not role_value:
        raise unauthorized("Invalid token")

    if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
        raise unauthorized("Invalid token type")

    try:
        role = UserRole(str(role_value))
    except ValueError as exc:
        raise unauthorized("Invalid token") from exc

    return TokenPayload(user_id=str(user_id), email=str(email), role=role)


# ---------------------------------------------------------------------------
# Resolución del principal (estrategia inyectable)
# ---------------------------------------------------------------------------


class AuthenticationResolver(Protocol):
    """Contrato: token -> AuthenticatedPrincipal, o AppHTTPException 401."""

    def resolve(self, token: str) -> AuthenticatedPrincipal:
        ...


class JwtAuthenticationResolver:
    """Valida el JWT y recarga el usuario para obtener rol y carrito vigentes."""

    def __init__(
        self,
        user_repository: UserRepository,
        settings: AuthSettings | None = None,
    ) -> None:
        self._users = user_repository
        self._settings = settings

    def resolve(self, token: str) -> AuthenticatedPrincipal:
        payload = decode_access_token(token, self._settings)

        try:
            user_id = UUID(payload.user_id)
        except ValueError as exc:
            raise unauthorized("Invalid token") from exc

        user = self._users.get_user(user_id)
        if user is None:
            logger.warning(
                "Auth falló: token de usuario inexistente",
                extra={"user_id": payload.user_id},
            )
            raise unauthorized("Invalid token")
        return AuthenticatedPrincipal.from_user(user)


class StaticAuthenticationResolver:
    """Resolver de tabla fija (tests, scripts). Mismo contrato que el JWT."""

    def __init__(self, principals: Mapping[str, AuthenticatedPrincipal]) -> None:
        self._principals = dict(principals)

    def resolve(self, token: str) -> AuthenticatedPrincipal:
        principal = self._principals.get(token)
        if principal is None:
            raise unauthorized("Invalid token")
        return principal


# ---------------------------------------------------------------------------
# Extracción de token (header/cookie)
# ---------------------------------------------------------------------------


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def access_token_cookie_name() -> str:
    return (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token
    return request.cookies.get(access_token_cookie_name())
