"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/carts.py
============================================================
Class: InMemoryCartRepository

Responsibilities:
  - Almacenar carritos en memoria (tests / local dev).
  - Resolver el owner de un carrito para el guard de ownership.

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: Cart es mutable, nunca se comparte la instancia guardada.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import Cart


class InMemoryCartRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._carts: Dict[UUID, Cart] = {}

    def create_cart(self, cart: Cart) -> Cart:
        now = datetime.now(timezone.utc)
        stored = deepcopy(cart)
        stored.created_at = stored.created_at or now
        stored.updated_at = now
        with self._lock:
            self._carts[stored.id] = stored
        return deepcopy(stored)

    def get_cart(self, cart_id: UUID) -> Optional[Cart]:
        with self._lock:
            cart = self._carts.get(cart_id)
            return deepcopy(cart) if cart is not None else None

    def get_cart_owner(self, cart_id: UUID) -> Optional[UUID]:
        with self._lock:
            cart = self._carts.get(cart_id)
            return cart.owner_user_id if cart is not None else None

    def save_cart(self, cart: Cart) -> Optional[Cart]:
        with self._lock:
            current = self._carts.get(cart.id)
            if current is None:
                return None
            current.items = deepcopy(cart.items)
            current.updated_at = datetime.now(timezone.utc)
            return deepcopy(current)

    def delete_cart(self, cart_id: UUID) -> bool:
        with self._lock:
            return self._carts.pop(cart_id, None) is not None
