"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/users.py
============================================================
Class: MongoUserRepository

Responsibilities:
  - Persistir usuarios en la colección `users`.
  - Updates parciales atómicos por documento ($set + ReturnDocument.AFTER).
  - Mapear documentos -> entidad User y validar UserRole.

Collaborators:
  - pymongo.database.Database (inyectada)
  - identity.users.User / UserRole / Address
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Retorna None cuando no existe el recurso.
  - Rol inválido persistido -> DatabaseError (protege contra drift de datos).
  - Email único garantizado por índice (ver infrastructure/db/client.py);
    la violación del índice se traduce a DuplicateEmailError.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID

from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from ....crosscutting.exceptions import DatabaseError, DuplicateEmailError
from ....domain.repositories import USER_MUTABLE_FIELDS
from ....identity.users import User, UserRole
from ._common import address_from_doc, address_to_doc, run_store_op

_PROFILE_KEYS = (
    "first_name",
    "last_name",
    "identification_number",
    "birth_date",
    "activity_type",
    "activity_number",
    "phone",
)


def _doc_to_user(doc: Mapping[str, Any]) -> User:
    try:
        role = UserRole(doc.get("role"))
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {doc.get('role')}") from exc

    return User(
        id=doc["_id"],
        email=doc["email"],
        password_hash=doc["password_hash"],
        role=role,
        address=address_from_doc(doc.get("address")),
        cart_id=doc.get("cart_id"),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
        **{key: doc.get(key) for key in _PROFILE_KEYS},
    )


def _user_to_doc(user: User) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "_id": user.id,
        "email": user.email,
        "password_hash": user.password_hash,
        "role": user.role.value,
        "address": address_to_doc(user.address),
        "cart_id": user.cart_id,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }
    doc.update({key: getattr(user, key) for key in _PROFILE_KEYS})
    return doc


class MongoUserRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.users

    def get_user(self, user_id: UUID) -> Optional[User]:
        doc = run_store_op(
            lambda: self._collection.find_one({"_id": user_id}),
            log_msg="Error cargando usuario",
            log_extra={"user_id": str(user_id)},
        )
        return _doc_to_user(doc) if doc else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        doc = run_store_op(
            lambda: self._collection.find_one({"email": email}),
            log_msg="Error cargando usuario por email",
            log_extra={"email": email},
        )
        return _doc_to_user(doc) if doc else None

    def list_users(self) -> List[User]:
        docs = run_store_op(
            lambda: list(
                self._collection.find().sort(
                    [("created_at", ASCENDING), ("email", ASCENDING)]
                )
            ),
            log_msg="Error listando usuarios",
            log_extra={},
        )
        return [_doc_to_user(d) for d in docs]

    def create_user(self, user: User) -> User:
        now = datetime.now(timezone.utc)
        doc = _user_to_doc(user)
        doc["created_at"] = user.created_at or now
        doc["updated_at"] = now

        def _insert():
            try:
                return self._collection.insert_one(doc)
            except DuplicateKeyError as exc:
                raise DuplicateEmailError(user.email, original_error=exc) from exc

        run_store_op(
            _insert,
            log_msg="Error creando usuario",
            log_extra={"email": user.email},
        )
        return _doc_to_user(doc)

    def update_user_fields(
        self, user_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[User]:
        unknown = set(fields) - USER_MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported user fields: {sorted(unknown)}")

        changes = dict(fields)
        if "address" in changes:
            changes["address"] = address_to_doc(changes["address"])
        changes["updated_at"] = datetime.now(timezone.utc)

        doc = run_store_op(
            lambda: self._collection.find_one_and_update(
                {"_id": user_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            ),
            log_msg="Error actualizando usuario",
            log_extra={"user_id": str(user_id), "fields": sorted(fields)},
        )
        return _doc_to_user(doc) if doc else None

    def update_role(self, user_id: UUID, role: UserRole) -> Optional[User]:
        doc = run_store_op(
            lambda: self._collection.find_one_and_update(
                {"_id": user_id},
                {"$set": {"role": role.value, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            ),
            log_msg="Error actualizando rol",
            log_extra={"user_id": str(user_id), "role": role.value},
        )
        return _doc_to_user(doc) if doc else None

    def delete_user(self, user_id: UUID) -> bool:
        result = run_store_op(
            lambda: self._collection.delete_one({"_id": user_id}),
            log_msg="Error eliminando usuario",
            log_extra={"user_id": str(user_id)},
        )
        return result.deleted_count > 0
