"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/orders.py
============================================================
Class: MongoOrderRepository

Responsibilities:
  - Persistir órdenes en la colección `orders` (items embebidos como snapshot).
  - Resolver owner_user_id (guard: existencia antes que ownership).
  - Listar con filtros por owner/estado, más recientes primero.

Collaborators:
  - pymongo.database.Database (inyectada)
  - domain.entities.Order / OrderItem / OrderStatus / PaymentMethod
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Order, OrderItem, OrderStatus, PaymentMethod
from ._common import address_from_doc, address_to_doc, run_store_op


def _doc_to_order(doc: Mapping[str, Any]) -> Order:
    try:
        status = OrderStatus(doc.get("status"))
        previous = doc.get("previous_status")
        previous_status = OrderStatus(previous) if previous else None
        payment_method = PaymentMethod(doc.get("payment_method") or "other")
    except ValueError as exc:
        raise DatabaseError(f"Invalid order enum value in database: {exc}") from exc

    return Order(
        id=doc["_id"],
        code=doc["code"],
        owner_user_id=doc["owner_user_id"],
        items=[
            OrderItem(
                product_id=i["product_id"],
                title=i["title"],
                unit_price=float(i["unit_price"]),
                quantity=int(i["quantity"]),
            )
            for i in doc.get("items", [])
        ],
        status=status,
        previous_status=previous_status,
        shipping_address=address_from_doc(doc.get("shipping_address")),
        payment_method=payment_method,
        notes=doc.get("notes") or "",
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _order_to_doc(order: Order) -> dict[str, Any]:
    return {
        "_id": order.id,
        "code": order.code,
        "owner_user_id": order.owner_user_id,
        "items": [
            {
                "product_id": i.product_id,
                "title": i.title,
                "unit_price": i.unit_price,
                "quantity": i.quantity,
            }
            for i in order.items
        ],
        # R: total denormalizado para reportes; la entidad lo deriva de items.
        "total_amount": order.total_amount,
        "status": order.status.value,
        "previous_status": order.previous_status.value if order.previous_status else None,
        "shipping_address": address_to_doc(order.shipping_address),
        "payment_method": order.payment_method.value,
        "notes": order.notes,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


class MongoOrderRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.orders

    def create_order(self, order: Order) -> Order:
        now = datetime.now(timezone.utc)
        doc = _order_to_doc(order)
        doc["created_at"] = order.created_at or now
        doc["updated_at"] = now
        run_store_op(
            lambda: self._collection.insert_one(doc),
            log_msg="Error creando orden",
            log_extra={"code": order.code},
        )
        return _doc_to_order(doc)

    def get_order(self, order_id: UUID) -> Optional[Order]:
        doc = run_store_op(
            lambda: self._collection.find_one({"_id": order_id}),
            log_msg="Error cargando orden",
            log_extra={"order_id": str(order_id)},
        )
        return _doc_to_order(doc) if doc else None

    def get_order_owner(self, order_id: UUID) -> Optional[UUID]:
        doc = run_store_op(
            lambda: self._collection.find_one(
                {"_id": order_id}, projection={"owner_user_id": 1}
            ),
            log_msg="Error resolviendo owner de orden",
            log_extra={"order_id": str(order_id)},
        )
        return doc.get("owner_user_id") if doc else None

    def list_orders(
        self,
        *,
        owner_user_id: UUID | None = None,
        status: OrderStatus | None = None,
    ) -> List[Order]:
        query: dict[str, Any] = {}
        if owner_user_id is not None:
            query["owner_user_id"] = owner_user_id
        if status is not None:
            query["status"] = status.value

        docs = run_store_op(
            lambda: list(
                self._collection.find(query).sort(
                    [("created_at", DESCENDING), ("code", ASCENDING)]
                )
            ),
            log_msg="Error listando órdenes",
            log_extra={"filter": {k: str(v) for k, v in query.items()}},
        )
        return [_doc_to_order(d) for d in docs]

    def save_order(self, order: Order) -> Optional[Order]:
        doc = _order_to_doc(order)
        doc.pop("_id")
        doc.pop("created_at")
        doc["updated_at"] = datetime.now(timezone.utc)
        result = run_store_op(
            lambda: self._collection.update_one({"_id": order.id}, {"$set": doc}),
            log_msg="Error guardando orden",
            log_extra={"order_id": str(order.id)},
        )
        if result.matched_count == 0:
            return None
        return self.get_order(order.id)
