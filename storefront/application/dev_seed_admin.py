"""
===============================================================================
TASK: Dev Seed Admin (bootstrap del primer administrador)
===============================================================================

Qué es:
    Asegura que exista un usuario admin cuando DEV_SEED_ADMIN está activo.
    Es la única vía de crear el PRIMER admin: el endpoint de alta de admins
    exige un principal admin.

Seguridad:
    - Guard estricto: solo corre con app_env en {development, local}.
    - Settings además rechaza DEV_SEED_ADMIN=true en production.

Patrones:
    - Task orchestration (seed)
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (ensure-create / optional reset)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Asegurar usuario (create, o reset de password/rol si force_reset)
    Collaborators:
      - UserRepository
      - password_hasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Final
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole
from .validators import normalize_email

_ALLOWED_ENVS: Final[frozenset[str]] = frozenset({"development", "local"})


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env not in _ALLOWED_ENVS:
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' "
            f"(must be one of {sorted(_ALLOWED_ENVS)}). "
            "Safety guard prevents accidental overrides."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> None:
    """
    Ensure a development admin user exists if configured.

    Behavior:
      - If disabled: no-op
      - If enabled:
          - Create user if missing
          - If force_reset: update password and role
          - Otherwise: skip if exists
    """
    if not settings.dev_seed_admin:
        return

    _assert_allowed_environment(settings)

    email = normalize_email(settings.dev_seed_admin_email)
    password = settings.dev_seed_admin_password or ""
    if not email or not password:
        raise ValueError("Dev seed admin is enabled but email/password are empty")

    logger.info(
        "Dev seed admin: asegurando usuario admin",
        extra={"email": email, "force_reset": settings.dev_seed_admin_force_reset},
    )

    existing = user_repo.get_user_by_email(email)

    if existing is None:
        user_repo.create_user(
            User(
                id=uuid4(),
                email=email,
                password_hash=password_hasher(password),
                role=UserRole.ADMIN,
                first_name="Admin",
                last_name="Local",
            )
        )
        logger.info("Dev seed admin: usuario creado", extra={"email": email})
        return

    if settings.dev_seed_admin_force_reset:
        user_repo.update_user_fields(
            existing.id, {"password_hash": password_hasher(password)}
        )
        user_repo.update_role(existing.id, UserRole.ADMIN)
        logger.info("Dev seed admin: reset aplicado", extra={"email": email})
        return

    logger.info("Dev seed admin: el usuario existe; se omite", extra={"email": email})
