"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/users.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev).
  - Garantizar unicidad de email (igual que el índice único de Mongo).
  - Aplicar updates parciales sobre entidades inmutables (dataclasses.replace).

Collaborators:
  - identity.users.User / UserRole
  - domain.repositories.UserRepository (contrato)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Orden determinístico: created_at ASC, email ASC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....crosscutting.exceptions import DuplicateEmailError
from ....domain.repositories import USER_MUTABLE_FIELDS
from ....identity.users import User, UserRole


class InMemoryUserRepository:
    def __init__(self, users: List[User] | None = None) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {u.id: u for u in (users or [])}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def get_user(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    def list_users(self) -> List[User]:
        with self._lock:
            values = list(self._users.values())
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(values, key=lambda u: (u.created_at or epoch, u.email))

    def create_user(self, user: User) -> User:
        with self._lock:
            if any(u.email == user.email for u in self._users.values()):
                raise DuplicateEmailError(user.email)
            now = self._now()
            stored = replace(
                user, created_at=user.created_at or now, updated_at=now
            )
            self._users[stored.id] = stored
            return stored

    def update_user_fields(
        self, user_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[User]:
        unknown = set(fields) - USER_MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported user fields: {sorted(unknown)}")

        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(current, **dict(fields), updated_at=self._now())
            self._users[user_id] = updated
            return updated

    def update_role(self, user_id: UUID, role: UserRole) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(current, role=role, updated_at=self._now())
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: UUID) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None
