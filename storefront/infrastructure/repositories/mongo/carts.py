"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/carts.py
============================================================
Class: MongoCartRepository

Responsibilities:
  - Persistir carritos en la colección `carts` (items embebidos).
  - Resolver owner_user_id con una proyección mínima (guard de ownership).

Collaborators:
  - pymongo.database.Database (inyectada)
  - domain.entities.Cart / CartItem
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional
from uuid import UUID

from pymongo import ReturnDocument
from pymongo.database import Database

from ....domain.entities import Cart, CartItem
from ._common import run_store_op


def _doc_to_cart(doc: Mapping[str, Any]) -> Cart:
    return Cart(
        id=doc["_id"],
        owner_user_id=doc["owner_user_id"],
        items=[
            CartItem(product_id=i["product_id"], quantity=int(i["quantity"]))
            for i in doc.get("items", [])
        ],
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _items_to_doc(cart: Cart) -> list[dict[str, Any]]:
    return [{"product_id": i.product_id, "quantity": i.quantity} for i in cart.items]


class MongoCartRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.carts

    def create_cart(self, cart: Cart) -> Cart:
        now = datetime.now(timezone.utc)
        doc = {
            "_id": cart.id,
            "owner_user_id": cart.owner_user_id,
            "items": _items_to_doc(cart),
            "created_at": cart.created_at or now,
            "updated_at": now,
        }
        run_store_op(
            lambda: self._collection.insert_one(doc),
            log_msg="Error creando carrito",
            log_extra={"owner_user_id": str(cart.owner_user_id)},
        )
        return _doc_to_cart(doc)

    def get_cart(self, cart_id: UUID) -> Optional[Cart]:
        doc = run_store_op(
            lambda: self._collection.find_one({"_id": cart_id}),
            log_msg="Error cargando carrito",
            log_extra={"cart_id": str(cart_id)},
        )
        return _doc_to_cart(doc) if doc else None

    def get_cart_owner(self, cart_id: UUID) -> Optional[UUID]:
        doc = run_store_op(
            lambda: self._collection.find_one(
                {"_id": cart_id}, projection={"owner_user_id": 1}
            ),
            log_msg="Error resolviendo owner de carrito",
            log_extra={"cart_id": str(cart_id)},
        )
        return doc.get("owner_user_id") if doc else None

    def save_cart(self, cart: Cart) -> Optional[Cart]:
        doc = run_store_op(
            lambda: self._collection.find_one_and_update(
                {"_id": cart.id},
                {
                    "$set": {
                        "items": _items_to_doc(cart),
                        "updated_at": datetime.now(timezone.utc),
                    }
                },
                return_document=ReturnDocument.AFTER,
            ),
            log_msg="Error guardando carrito",
            log_extra={"cart_id": str(cart.id)},
        )
        return _doc_to_cart(doc) if doc else None

    def delete_cart(self, cart_id: UUID) -> bool:
        result = run_store_op(
            lambda: self._collection.delete_one({"_id": cart_id}),
            log_msg="Error eliminando carrito",
            log_extra={"cart_id": str(cart_id)},
        )
        return result.deleted_count > 0
