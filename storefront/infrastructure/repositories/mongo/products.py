"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/products.py
============================================================
Class: MongoProductRepository

Responsibilities:
  - Persistir el catálogo en la colección `products`.
  - Traducir ProductQuery -> filtro Mongo + sort + skip/limit.
  - Contar el total para la paginación.

Collaborators:
  - pymongo.database.Database (inyectada)
  - domain.repositories.ProductQuery / ProductPage
============================================================
"""

from __future__ import annotations

import re
from dataclasses import fields as dataclass_fields
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database

from ....domain.entities import Product
from ....domain.repositories import ProductPage, ProductQuery
from ._common import run_store_op

_PRODUCT_FIELDS = [f.name for f in dataclass_fields(Product) if f.name != "id"]


def _doc_to_product(doc: Mapping[str, Any]) -> Product:
    values = {name: doc.get(name) for name in _PRODUCT_FIELDS if name in doc}
    values["tags"] = list(doc.get("tags") or [])
    values["image_paths"] = list(doc.get("image_paths") or [])
    return Product(id=doc["_id"], **values)


def _product_to_doc(product: Product) -> dict[str, Any]:
    doc = {name: getattr(product, name) for name in _PRODUCT_FIELDS}
    doc["_id"] = product.id
    return doc


def _build_filter(query: ProductQuery) -> dict[str, Any]:
    mongo_filter: dict[str, Any] = {}
    if not query.include_inactive:
        mongo_filter["is_active"] = True
    if query.category is not None:
        mongo_filter["category"] = query.category
    if query.sub_category is not None:
        mongo_filter["sub_category"] = query.sub_category
    if query.brand is not None:
        mongo_filter["brand"] = {
            "$regex": f"^{re.escape(query.brand)}$",
            "$options": "i",
        }
    if query.is_offer is not None:
        mongo_filter["is_offer"] = query.is_offer

    price: dict[str, float] = {}
    if query.min_price is not None:
        price["$gte"] = query.min_price
    if query.max_price is not None:
        price["$lte"] = query.max_price
    if price:
        mongo_filter["price"] = price

    return mongo_filter


class MongoProductRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.products

    def create_product(self, product: Product) -> Product:
        now = datetime.now(timezone.utc)
        doc = _product_to_doc(product)
        doc["created_at"] = product.created_at or now
        doc["updated_at"] = now
        run_store_op(
            lambda: self._collection.insert_one(doc),
            log_msg="Error creando producto",
            log_extra={"title": product.title},
        )
        return _doc_to_product(doc)

    def get_product(self, product_id: UUID) -> Optional[Product]:
        doc = run_store_op(
            lambda: self._collection.find_one({"_id": product_id}),
            log_msg="Error cargando producto",
            log_extra={"product_id": str(product_id)},
        )
        return _doc_to_product(doc) if doc else None

    def get_products_by_ids(self, product_ids: List[UUID]) -> List[Product]:
        if not product_ids:
            return []
        docs = run_store_op(
            lambda: list(self._collection.find({"_id": {"$in": list(product_ids)}})),
            log_msg="Error cargando productos",
            log_extra={"count": len(product_ids)},
        )
        return [_doc_to_product(d) for d in docs]

    def list_products(self, query: ProductQuery) -> ProductPage:
        mongo_filter = _build_filter(query)
        if query.sort_field:
            direction = DESCENDING if query.sort_descending else ASCENDING
            sort = [(query.sort_field, direction), ("_id", ASCENDING)]
        else:
            sort = [("created_at", DESCENDING), ("title", ASCENDING)]

        def _page() -> tuple[int, list]:
            total = self._collection.count_documents(mongo_filter)
            cursor = (
                self._collection.find(mongo_filter)
                .sort(sort)
                .skip((query.page - 1) * query.limit)
                .limit(query.limit)
            )
            return total, list(cursor)

        total, docs = run_store_op(
            _page,
            log_msg="Error listando productos",
            log_extra={"page": query.page, "limit": query.limit},
        )
        return ProductPage(
            items=[_doc_to_product(d) for d in docs],
            total=total,
            page=query.page,
            limit=query.limit,
        )

    def update_product(
        self, product_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[Product]:
        unknown = set(fields) - set(_PRODUCT_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported product fields: {sorted(unknown)}")

        changes = {**fields, "updated_at": datetime.now(timezone.utc)}
        doc = run_store_op(
            lambda: self._collection.find_one_and_update(
                {"_id": product_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            ),
            log_msg="Error actualizando producto",
            log_extra={"product_id": str(product_id), "fields": sorted(fields)},
        )
        return _doc_to_product(doc) if doc else None

    def delete_product(self, product_id: UUID) -> bool:
        result = run_store_op(
            lambda: self._collection.delete_one({"_id": product_id}),
            log_msg="Error eliminando producto",
            log_extra={"product_id": str(product_id)},
        )
        return result.deleted_count > 0
