"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/products.py
============================================================
Class: InMemoryProductRepository

Responsibilities:
  - Almacenar productos en memoria (tests / local dev).
  - Replicar filtros, orden y paginación del repositorio Mongo.

Constraints / Notes:
  - Thread-safe + copias defensivas.
  - Orden por defecto: created_at DESC, title ASC.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import fields as dataclass_fields
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....domain.entities import Product
from ....domain.repositories import ProductPage, ProductQuery

_PRODUCT_FIELDS = {f.name for f in dataclass_fields(Product)} - {"id", "created_at"}


class InMemoryProductRepository:
    def __init__(self, products: List[Product] | None = None) -> None:
        self._lock = Lock()
        self._products: Dict[UUID, Product] = {
            p.id: deepcopy(p) for p in (products or [])
        }

    def create_product(self, product: Product) -> Product:
        now = datetime.now(timezone.utc)
        stored = deepcopy(product)
        stored.created_at = stored.created_at or now
        stored.updated_at = now
        with self._lock:
            self._products[stored.id] = stored
        return deepcopy(stored)

    def get_product(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return deepcopy(product) if product is not None else None

    def get_products_by_ids(self, product_ids: List[UUID]) -> List[Product]:
        wanted = set(product_ids)
        with self._lock:
            return [deepcopy(p) for pid, p in self._products.items() if pid in wanted]

    @staticmethod
    def _matches(product: Product, query: ProductQuery) -> bool:
        if not query.include_inactive and not product.is_active:
            return False
        if query.category is not None and product.category != query.category:
            return False
        if query.sub_category is not None and product.sub_category != query.sub_category:
            return False
        if query.brand is not None and product.brand.lower() != query.brand.lower():
            return False
        if query.is_offer is not None and product.is_offer != query.is_offer:
            return False
        if query.min_price is not None and product.price < query.min_price:
            return False
        if query.max_price is not None and product.price > query.max_price:
            return False
        return True

    def list_products(self, query: ProductQuery) -> ProductPage:
        with self._lock:
            values = [deepcopy(p) for p in self._products.values()]

        matched = [p for p in values if self._matches(p, query)]

        epoch = datetime.min.replace(tzinfo=timezone.utc)
        if query.sort_field:
            matched.sort(
                key=lambda p: getattr(p, query.sort_field),
                reverse=query.sort_descending,
            )
        else:
            matched.sort(key=lambda p: p.title)
            matched.sort(key=lambda p: p.created_at or epoch, reverse=True)

        start = (query.page - 1) * query.limit
        return ProductPage(
            items=matched[start : start + query.limit],
            total=len(matched),
            page=query.page,
            limit=query.limit,
        )

    def update_product(
        self, product_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[Product]:
        unknown = set(fields) - _PRODUCT_FIELDS
        if unknown:
            raise ValueError(f"Unsupported product fields: {sorted(unknown)}")

        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None
            for name, value in fields.items():
                setattr(current, name, deepcopy(value))
            current.updated_at = datetime.now(timezone.utc)
            return deepcopy(current)

    def delete_product(self, product_id: UUID) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None
