"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/password_resets.py
============================================================
Class: InMemoryPasswordResetTokenRepository

Responsibilities:
  - Almacenar tokens de reset en memoria (tests / local dev).
  - Invalidar tokens previos del usuario al emitir uno nuevo.
  - Descartar tokens vencidos o usados (equivalente al índice TTL de Mongo).

Constraints / Notes:
  - Thread-safe + copias defensivas.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import PasswordResetToken


class InMemoryPasswordResetTokenRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._tokens: Dict[UUID, PasswordResetToken] = {}

    def create_token(self, token: PasswordResetToken) -> PasswordResetToken:
        now = datetime.now(timezone.utc)
        stored = deepcopy(token)
        stored.created_at = stored.created_at or now
        with self._lock:
            self._tokens = {
                k: t
                for k, t in self._tokens.items()
                if not t.used and t.expires_at > now
            }
            for existing in self._tokens.values():
                if existing.user_id == token.user_id:
                    existing.used = True
            self._tokens[stored.id] = stored
        return deepcopy(stored)

    def find_valid_token(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        with self._lock:
            for token in self._tokens.values():
                if token.token_hash == token_hash and token.is_usable(now):
                    return deepcopy(token)
        return None

    def mark_used(self, token_id: UUID) -> bool:
        with self._lock:
            token = self._tokens.get(token_id)
            if token is None or token.used:
                return False
            token.used = True
            return True
