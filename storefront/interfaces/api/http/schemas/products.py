"""
===============================================================================
TARJETA CRC — schemas/products.py
===============================================================================

Responsabilidades:
    - DTOs del catálogo y del listado paginado (payload + metadata de páginas).
    - Requests de alta y update parcial (solo admin).

Colaboradores:
    - domain.entities.Product
    - domain.repositories.ProductPage
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.entities import Product
from .....domain.repositories import ProductPage


class CreateProductReq(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    brand: str | None = Field(default=None, max_length=100)
    price: float | None = None
    stock: int = 0
    model: str | None = Field(default=None, max_length=100)
    iva: float = 21.0
    is_offer: bool = False
    category: str = Field(default="other", max_length=100)
    sub_category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list, max_length=50)
    image_paths: list[str] = Field(default_factory=list, max_length=20)
    is_active: bool = True


class UpdateProductReq(BaseModel):
    """Update parcial: solo se aplican las claves enviadas."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    brand: str | None = Field(default=None, max_length=100)
    price: float | None = None
    stock: int | None = None
    model: str | None = Field(default=None, max_length=100)
    iva: float | None = None
    is_offer: bool | None = None
    category: str | None = Field(default=None, max_length=100)
    sub_category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = Field(default=None, max_length=50)
    image_paths: list[str] | None = Field(default=None, max_length=20)
    is_active: bool | None = None


class ProductRes(BaseModel):
    id: UUID
    title: str
    description: str
    brand: str
    price: float
    stock: int
    model: str | None = None
    iva: float
    is_offer: bool
    category: str
    sub_category: str | None = None
    tags: list[str] = Field(default_factory=list)
    image_paths: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductRes":
        return cls(
            id=product.id,
            title=product.title,
            description=product.description,
            brand=product.brand,
            price=product.price,
            stock=product.stock,
            model=product.model,
            iva=product.iva,
            is_offer=product.is_offer,
            category=product.category,
            sub_category=product.sub_category,
            tags=list(product.tags),
            image_paths=list(product.image_paths),
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str | None = None
    payload: ProductRes


class ProductsPageRes(BaseModel):
    status: Literal["success"] = "success"
    payload: list[ProductRes]
    total: int
    total_pages: int
    page: int
    limit: int
    prev_page: int | None = None
    next_page: int | None = None
    has_prev_page: bool
    has_next_page: bool

    @classmethod
    def from_page(cls, page: ProductPage) -> "ProductsPageRes":
        return cls(
            payload=[ProductRes.from_domain(p) for p in page.items],
            total=page.total,
            total_pages=page.total_pages,
            page=page.page,
            limit=page.limit,
            prev_page=page.page - 1 if page.has_prev_page else None,
            next_page=page.page + 1 if page.has_next_page else None,
            has_prev_page=page.has_prev_page,
            has_next_page=page.has_next_page,
        )
