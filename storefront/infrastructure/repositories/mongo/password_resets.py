"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/password_resets.py
============================================================
Class: MongoPasswordResetTokenRepository

Responsibilities:
  - Persistir tokens de reset en la colección `password_reset_tokens`.
  - Invalidar tokens previos del usuario al emitir uno nuevo.
  - Consumir el token de forma atómica (used: false -> true).

Collaborators:
  - pymongo.database.Database (inyectada)
  - domain.entities.PasswordResetToken

Constraints / Notes:
  - Solo se guarda el hash del token (índice único en token_hash).
  - Los vencidos los borra el índice TTL sobre expires_at
    (ver infrastructure/db/client.py).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional
from uuid import UUID

from pymongo.database import Database

from ....domain.entities import PasswordResetToken
from ._common import run_store_op


def _as_utc(value: datetime) -> datetime:
    # R: naive => UTC (clientes sin tz_aware=True leen datetimes naive).
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _doc_to_token(doc: Mapping[str, Any]) -> PasswordResetToken:
    return PasswordResetToken(
        id=doc["_id"],
        user_id=doc["user_id"],
        token_hash=doc["token_hash"],
        expires_at=_as_utc(doc["expires_at"]),
        used=bool(doc.get("used", False)),
        created_at=doc.get("created_at"),
    )


class MongoPasswordResetTokenRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.password_reset_tokens

    def create_token(self, token: PasswordResetToken) -> PasswordResetToken:
        doc = {
            "_id": token.id,
            "user_id": token.user_id,
            "token_hash": token.token_hash,
            "expires_at": token.expires_at,
            "used": False,
            "created_at": token.created_at or datetime.now(timezone.utc),
        }

        def _rotate_and_insert():
            self._collection.update_many(
                {"user_id": token.user_id, "used": False}, {"$set": {"used": True}}
            )
            self._collection.insert_one(doc)

        run_store_op(
            _rotate_and_insert,
            log_msg="Error creando token de reset",
            log_extra={"user_id": str(token.user_id)},
        )
        return _doc_to_token(doc)

    def find_valid_token(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        doc = run_store_op(
            lambda: self._collection.find_one(
                {"token_hash": token_hash, "used": False, "expires_at": {"$gt": now}}
            ),
            log_msg="Error cargando token de reset",
            log_extra={},
        )
        return _doc_to_token(doc) if doc else None

    def mark_used(self, token_id: UUID) -> bool:
        result = run_store_op(
            lambda: self._collection.update_one(
                {"_id": token_id, "used": False}, {"$set": {"used": True}}
            ),
            log_msg="Error consumiendo token de reset",
            log_extra={"token_id": str(token_id)},
        )
        return result.modified_count > 0
