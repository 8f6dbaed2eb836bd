"""
===============================================================================
CRC CARD — infrastructure/db/client.py
===============================================================================

Componente:
  Cliente MongoDB (singleton por proceso)

Responsabilidades:
  - Inicializar, exponer y cerrar el MongoClient (incluye su pool interno).
  - Crear los índices que sostienen invariantes (email y code únicos).
  - Ping para /healthz.

Colaboradores:
  - pymongo.MongoClient
  - infrastructure/repositories/mongo/* (usan get_database())

Principios:
  - Fail-fast (doble init, uso sin init)
  - Encapsulación (cliente global único)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ...crosscutting.logger import logger
from .errors import ClientAlreadyInitializedError, ClientNotInitializedError

_client: Optional[MongoClient] = None
_database: Optional[Database] = None
_client_lock = threading.Lock()


def init_client(mongo_uri: str, db_name: str, timeout_ms: int = 5000) -> Database:
    """Inicializa el cliente (una vez por proceso) y devuelve la base."""
    global _client, _database

    with _client_lock:
        if _client is not None:
            raise ClientAlreadyInitializedError("El cliente Mongo ya fue inicializado.")

        logger.info("Inicializando cliente Mongo", extra={"db_name": db_name})

        # R: uuidRepresentation="standard" para guardar UUID nativos en BSON.
        _client = MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            uuidRepresentation="standard",
            tz_aware=True,
        )
        _database = _client[db_name]
        return _database


def get_database() -> Database:
    """Retorna la base del cliente singleton."""
    if _database is None:
        raise ClientNotInitializedError(
            "Cliente Mongo no inicializado. Llamar init_client() primero."
        )
    return _database


def close_client() -> None:
    """Cierra el cliente (idempotente)."""
    global _client, _database

    with _client_lock:
        if _client is not None:
            logger.info("Cerrando cliente Mongo")
            try:
                _client.close()
            finally:
                _client = None
                _database = None


def ensure_indexes(database: Database) -> None:
    """Crea índices idempotentemente (create_index no falla si ya existen)."""
    database.users.create_index([("email", ASCENDING)], unique=True)
    database.carts.create_index([("owner_user_id", ASCENDING)])
    database.orders.create_index([("code", ASCENDING)], unique=True)
    database.orders.create_index(
        [("owner_user_id", ASCENDING), ("created_at", DESCENDING)]
    )
    database.products.create_index([("category", ASCENDING), ("price", ASCENDING)])
    database.product_questions.create_index(
        [("product_id", ASCENDING), ("created_at", DESCENDING)]
    )
    database.password_reset_tokens.create_index(
        [("token_hash", ASCENDING)], unique=True
    )
    database.password_reset_tokens.create_index(
        [("expires_at", ASCENDING)], expireAfterSeconds=0
    )
    logger.info("Índices Mongo asegurados", extra={"db_name": database.name})


def ping() -> bool:
    """True si el servidor responde."""
    try:
        get_database().command("ping")
        return True
    except (PyMongoError, ClientNotInitializedError) as exc:
        logger.warning("Ping Mongo falló", extra={"error": str(exc)})
        return False
