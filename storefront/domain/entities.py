"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Product, Cart, Order, ProductQuestion,
    PasswordResetToken)

Responsabilidades:
    - Definir estructuras centrales del catálogo y las compras.
    - Brindar helpers mínimos (métodos) para mantener invariantes simples
      (cantidades >= 1, totales derivados, historial de estado).

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - User/Address viven en identity.users (contrato de auth).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID

from ..identity.users import Address


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


@dataclass
class Product:
    """Producto del catálogo."""

    id: UUID
    title: str
    description: str
    brand: str
    price: float
    stock: int = 0
    model: Optional[str] = None
    iva: float = 21.0
    is_offer: bool = False
    category: str = "other"
    sub_category: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    image_paths: List[str] = field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_stock_for(self, quantity: int) -> bool:
        return self.is_active and self.stock >= quantity


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------


@dataclass
class CartItem:
    """Línea del carrito (producto + cantidad >= 1)."""

    product_id: UUID
    quantity: int = 1


@dataclass
class Cart:
    """
    Carrito de un usuario.

    owner_user_id es la fuente de verdad para la ownership (resolve_cart_owner).
    """

    id: UUID
    owner_user_id: UUID
    items: List[CartItem] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, product_id: UUID) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_product(self, product_id: UUID, quantity: int = 1) -> None:
        """Agrega o acumula cantidad si el producto ya estaba."""
        if quantity < 1:
            raise ValueError("quantity must be >= 1")
        existing = self.find_item(product_id)
        if existing is not None:
            existing.quantity += quantity
        else:
            self.items.append(CartItem(product_id=product_id, quantity=quantity))
        self.updated_at = _utcnow()

    def set_quantity(self, product_id: UUID, quantity: int) -> bool:
        """Reemplaza la cantidad. False si el producto no está en el carrito."""
        if quantity < 1:
            raise ValueError("quantity must be >= 1")
        existing = self.find_item(product_id)
        if existing is None:
            return False
        existing.quantity = quantity
        self.updated_at = _utcnow()
        return True

    def remove_product(self, product_id: UUID) -> bool:
        before = len(self.items)
        self.items = [i for i in self.items if i.product_id != product_id]
        if len(self.items) == before:
            return False
        self.updated_at = _utcnow()
        return True

    def clear(self) -> None:
        self.items = []
        self.updated_at = _utcnow()


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    CANCELED = "canceled"
    DELIVERED = "delivered"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    TRANSFER = "transfer"
    OTHER = "other"


@dataclass
class OrderItem:
    """Snapshot del producto al momento de la compra."""

    product_id: UUID
    title: str
    unit_price: float
    quantity: int

    @property
    def subtotal(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@dataclass
class Order:
    """Orden de compra de un usuario."""

    id: UUID
    code: str
    owner_user_id: UUID
    items: List[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    previous_status: Optional[OrderStatus] = None
    shipping_address: Optional[Address] = None
    payment_method: PaymentMethod = PaymentMethod.OTHER
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def total_amount(self) -> float:
        return round(sum(item.subtotal for item in self.items), 2)

    def change_status(self, status: OrderStatus) -> None:
        """Cambia el estado guardando el anterior."""
        self.previous_status = self.status
        self.status = status
        self.updated_at = _utcnow()


# ---------------------------------------------------------------------------
# ProductQuestion
# ---------------------------------------------------------------------------


@dataclass
class ProductQuestion:
    """Pregunta pública sobre un producto (respondida por un admin)."""

    id: UUID
    product_id: UUID
    user_id: UUID
    question: str
    answer: Optional[str] = None
    answered_by: Optional[UUID] = None
    answered_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_answered(self) -> bool:
        return self.answer is not None

    def record_answer(self, answer: str, *, admin_id: UUID) -> None:
        self.answer = answer
        self.answered_by = admin_id
        self.answered_at = _utcnow()


@dataclass
class PasswordResetToken:
    """
    Token de un solo uso para restablecer la contraseña.

    Solo se persiste el hash (token_hash); el token en claro viaja una única
    vez hacia el notificador.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    used: bool = False
    created_at: Optional[datetime] = None

    def is_usable(self, now: datetime | None = None) -> bool:
        return not self.used and self.expires_at > (now or _utcnow())
