"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep application/domain independent from the document store (MongoDB, in-memory).
- Expose the ownership lookups the authorization guard needs
  (get_cart_owner / get_order_owner).

Collaborators
- identity.users: User, UserRole
- domain.entities: Product, Cart, Order, OrderStatus, ProductQuestion,
  PasswordResetToken
- infrastructure.repositories: mongo_*, in_memory_* implementations

Constraints
- Pure interfaces only: no side effects, no driver imports.
- "Not found" is None / False, never an exception.
- Store failures surface as crosscutting.exceptions.DatabaseError.

Notes
- Writes are single-document; no multi-document transactions are assumed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional, Protocol
from uuid import UUID

from ..identity.users import User, UserRole
from .entities import (
    Cart,
    Order,
    OrderStatus,
    PasswordResetToken,
    Product,
    ProductQuestion,
)

# Campos de User que update_user_fields acepta (role tiene su propio método).
USER_MUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "first_name",
        "last_name",
        "identification_number",
        "birth_date",
        "activity_type",
        "activity_number",
        "phone",
        "address",
        "cart_id",
        "password_hash",
    }
)

PRODUCT_SORTABLE_FIELDS: frozenset[str] = frozenset(
    {"price", "title", "stock", "created_at", "brand", "category"}
)


@dataclass(frozen=True)
class ProductQuery:
    """Filtros + paginación para el listado del catálogo."""

    page: int = 1
    limit: int = 10
    category: Optional[str] = None
    sub_category: Optional[str] = None
    brand: Optional[str] = None
    is_offer: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_field: Optional[str] = None
    sort_descending: bool = False
    include_inactive: bool = False


@dataclass
class ProductPage:
    items: List[Product] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


class UserRepository(Protocol):
    """R: Interface for user persistence."""

    def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: email ya normalizado (trim + lower)."""
        ...

    def list_users(self) -> List[User]:
        """R: Orden estable: created_at ASC."""
        ...

    def create_user(self, user: User) -> User:
        ...

    def update_user_fields(
        self, user_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[User]:
        """
        R: Partial update (single document). Keys must be in USER_MUTABLE_FIELDS.

        Returns the updated user or None if it does not exist.
        """
        ...

    def update_role(self, user_id: UUID, role: UserRole) -> Optional[User]:
        ...

    def delete_user(self, user_id: UUID) -> bool:
        ...


class CartRepository(Protocol):
    """R: Interface for cart persistence."""

    def create_cart(self, cart: Cart) -> Cart:
        ...

    def get_cart(self, cart_id: UUID) -> Optional[Cart]:
        ...

    def get_cart_owner(self, cart_id: UUID) -> Optional[UUID]:
        """R: Owner lookup for the authorization guard (None if absent)."""
        ...

    def save_cart(self, cart: Cart) -> Optional[Cart]:
        """R: Replace items of an existing cart. None if it vanished."""
        ...

    def delete_cart(self, cart_id: UUID) -> bool:
        ...


class OrderRepository(Protocol):
    """R: Interface for order persistence."""

    def create_order(self, order: Order) -> Order:
        ...

    def get_order(self, order_id: UUID) -> Optional[Order]:
        ...

    def get_order_owner(self, order_id: UUID) -> Optional[UUID]:
        ...

    def list_orders(
        self,
        *,
        owner_user_id: UUID | None = None,
        status: OrderStatus | None = None,
    ) -> List[Order]:
        """R: Orden estable: created_at DESC."""
        ...

    def save_order(self, order: Order) -> Optional[Order]:
        ...


class ProductRepository(Protocol):
    """R: Interface for catalog persistence."""

    def create_product(self, product: Product) -> Product:
        ...

    def get_product(self, product_id: UUID) -> Optional[Product]:
        ...

    def get_products_by_ids(self, product_ids: List[UUID]) -> List[Product]:
        """R: Omits unknown ids; order not guaranteed."""
        ...

    def list_products(self, query: ProductQuery) -> ProductPage:
        ...

    def update_product(
        self, product_id: UUID, fields: Mapping[str, Any]
    ) -> Optional[Product]:
        ...

    def delete_product(self, product_id: UUID) -> bool:
        ...


class ProductQuestionRepository(Protocol):
    """R: Interface for product Q&A persistence."""

    def create_question(self, question: ProductQuestion) -> ProductQuestion:
        ...

    def get_question(self, question_id: UUID) -> Optional[ProductQuestion]:
        ...

    def list_questions(
        self,
        *,
        product_id: UUID | None = None,
        user_id: UUID | None = None,
        answered: bool | None = None,
    ) -> List[ProductQuestion]:
        """R: Orden estable: created_at DESC."""
        ...

    def save_question(self, question: ProductQuestion) -> Optional[ProductQuestion]:
        ...


class PasswordResetTokenRepository(Protocol):
    """R: Interface for password reset tokens (stored by hash, single use)."""

    def create_token(self, token: PasswordResetToken) -> PasswordResetToken:
        """R: Invalidates the user's previous unused tokens before inserting."""
        ...

    def find_valid_token(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """R: Unused and not expired at `now`, else None."""
        ...

    def mark_used(self, token_id: UUID) -> bool:
        """R: Atomic: only flips unused tokens. False if already used/missing."""
        ...
