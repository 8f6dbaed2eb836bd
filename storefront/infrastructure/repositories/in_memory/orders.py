"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/orders.py
============================================================
Class: InMemoryOrderRepository

Responsibilities:
  - Almacenar órdenes en memoria (tests / local dev).
  - Garantizar unicidad de code (igual que el índice único de Mongo).
  - Resolver el owner de una orden para el guard (None si no existe).

Constraints / Notes:
  - Thread-safe + copias defensivas.
  - Orden determinístico: created_at DESC, code ASC.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Order, OrderStatus


class InMemoryOrderRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._orders: Dict[UUID, Order] = {}

    def create_order(self, order: Order) -> Order:
        now = datetime.now(timezone.utc)
        stored = deepcopy(order)
        stored.created_at = stored.created_at or now
        stored.updated_at = now
        with self._lock:
            if any(o.code == stored.code for o in self._orders.values()):
                raise DatabaseError(f"Duplicate order code: {stored.code}")
            self._orders[stored.id] = stored
        return deepcopy(stored)

    def get_order(self, order_id: UUID) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return deepcopy(order) if order is not None else None

    def get_order_owner(self, order_id: UUID) -> Optional[UUID]:
        with self._lock:
            order = self._orders.get(order_id)
            return order.owner_user_id if order is not None else None

    def list_orders(
        self,
        *,
        owner_user_id: UUID | None = None,
        status: OrderStatus | None = None,
    ) -> List[Order]:
        with self._lock:
            values = [deepcopy(o) for o in self._orders.values()]

        if owner_user_id is not None:
            values = [o for o in values if o.owner_user_id == owner_user_id]
        if status is not None:
            values = [o for o in values if o.status == status]

        epoch = datetime.min.replace(tzinfo=timezone.utc)
        values.sort(key=lambda o: o.code)
        values.sort(key=lambda o: o.created_at or epoch, reverse=True)
        return values

    def save_order(self, order: Order) -> Optional[Order]:
        with self._lock:
            if order.id not in self._orders:
                return None
            stored = deepcopy(order)
            stored.updated_at = datetime.now(timezone.utc)
            self._orders[order.id] = stored
            return deepcopy(stored)
