"""
===============================================================================
USE CASES: Product CRUD (admin) + Get Product (público)
===============================================================================

Business Goal:
    Administrar el catálogo: alta, lectura, modificación parcial y baja.

Why (Context / Intención):
    - Las validaciones de negocio (textos requeridos, precio/stock no
      negativos) viven acá y no en el schema HTTP, para que cualquier
      adaptador (API, scripts) las comparta.
    - La autorización (solo admin) se aplica en el borde HTTP.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateProductUseCase, GetProductUseCase, UpdateProductUseCase,
    DeleteProductUseCase

Collaborators:
    - ProductRepository
    - application.validators.clean_text
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Product
from ....domain.repositories import ProductRepository
from ...validators import clean_text
from .product_results import (
    DeleteProductResult,
    ProductError,
    ProductErrorCode,
    ProductResult,
)

MSG_PRODUCT_NOT_FOUND = "Product not found"
MSG_REQUIRED_FIELDS = "Required fields are missing: title, description, brand, price"
MSG_INVALID_PRICE = "Price must be a non-negative number"
MSG_INVALID_STOCK = "Stock must be a non-negative integer"
MSG_INVALID_IVA = "IVA must be between 0 and 100"
MSG_NO_FIELDS = "No fields provided for update"

_TEXT_FIELDS = ("title", "description", "brand", "model", "sub_category")
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "description",
        "brand",
        "price",
        "stock",
        "model",
        "iva",
        "is_offer",
        "category",
        "sub_category",
        "tags",
        "image_paths",
        "is_active",
    }
)


@dataclass(frozen=True)
class CreateProductInput:
    title: str | None
    description: str | None
    brand: str | None
    price: float | None
    stock: int = 0
    model: str | None = None
    iva: float = 21.0
    is_offer: bool = False
    category: str = "other"
    sub_category: str | None = None
    tags: List[str] = field(default_factory=list)
    image_paths: List[str] = field(default_factory=list)
    is_active: bool = True


def _clean_list(values: Any) -> List[str]:
    cleaned: List[str] = []
    for value in values or []:
        text = clean_text(value)
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned


def _numeric_error(values: Mapping[str, Any]) -> str | None:
    price = values.get("price")
    if price is not None and price < 0:
        return MSG_INVALID_PRICE
    stock = values.get("stock")
    if stock is not None and stock < 0:
        return MSG_INVALID_STOCK
    iva = values.get("iva")
    if iva is not None and not 0 <= iva <= 100:
        return MSG_INVALID_IVA
    return None


def _error(code: ProductErrorCode, message: str) -> ProductResult:
    return ProductResult(error=ProductError(code=code, message=message))


class CreateProductUseCase:
    def __init__(self, *, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, input_data: CreateProductInput) -> ProductResult:
        title = clean_text(input_data.title)
        description = clean_text(input_data.description)
        brand = clean_text(input_data.brand)
        if not (title and description and brand) or input_data.price is None:
            return _error(ProductErrorCode.VALIDATION_ERROR, MSG_REQUIRED_FIELDS)

        message = _numeric_error(
            {
                "price": input_data.price,
                "stock": input_data.stock,
                "iva": input_data.iva,
            }
        )
        if message:
            return _error(ProductErrorCode.VALIDATION_ERROR, message)

        product = self._products.create_product(
            Product(
                id=uuid4(),
                title=title,
                description=description,
                brand=brand,
                price=float(input_data.price),
                stock=int(input_data.stock),
                model=clean_text(input_data.model),
                iva=float(input_data.iva),
                is_offer=bool(input_data.is_offer),
                category=(clean_text(input_data.category) or "other").lower(),
                sub_category=clean_text(input_data.sub_category),
                tags=_clean_list(input_data.tags),
                image_paths=_clean_list(input_data.image_paths),
                is_active=bool(input_data.is_active),
            )
        )
        logger.info(
            "Producto creado",
            extra={"product_id": str(product.id), "title": product.title},
        )
        return ProductResult(product=product)


class GetProductUseCase:
    def __init__(self, *, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, product_id: UUID) -> ProductResult:
        product = self._products.get_product(product_id)
        if product is None:
            return _error(ProductErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_FOUND)
        return ProductResult(product=product)


class UpdateProductUseCase:
    def __init__(self, *, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, product_id: UUID, changes: Mapping[str, Any]) -> ProductResult:
        fields: Dict[str, Any] = {
            k: v for k, v in (changes or {}).items() if k in UPDATABLE_FIELDS
        }
        if not fields:
            return _error(ProductErrorCode.VALIDATION_ERROR, MSG_NO_FIELDS)

        for name in _TEXT_FIELDS:
            if name in fields:
                fields[name] = clean_text(fields[name])
        # R: title/description/brand no pueden quedar vacíos.
        required = ("title", "description", "brand", "price")
        if any(name in fields and fields[name] is None for name in required):
            return _error(ProductErrorCode.VALIDATION_ERROR, MSG_REQUIRED_FIELDS)
        for name in ("stock", "iva", "is_offer", "is_active"):
            if name in fields and fields[name] is None:
                fields.pop(name)
        if not fields:
            return _error(ProductErrorCode.VALIDATION_ERROR, MSG_NO_FIELDS)
        if "category" in fields:
            fields["category"] = (clean_text(fields["category"]) or "other").lower()
        for name in ("tags", "image_paths"):
            if name in fields:
                fields[name] = _clean_list(fields[name])

        message = _numeric_error(fields)
        if message:
            return _error(ProductErrorCode.VALIDATION_ERROR, message)

        updated = self._products.update_product(product_id, fields)
        if updated is None:
            return _error(ProductErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_FOUND)

        logger.info(
            "Producto actualizado",
            extra={"product_id": str(product_id), "fields": sorted(fields)},
        )
        return ProductResult(product=updated)


class DeleteProductUseCase:
    def __init__(self, *, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, product_id: UUID) -> DeleteProductResult:
        if not self._products.delete_product(product_id):
            return DeleteProductResult(
                deleted=False,
                error=ProductError(
                    code=ProductErrorCode.NOT_FOUND, message=MSG_PRODUCT_NOT_FOUND
                ),
            )
        logger.info("Producto eliminado", extra={"product_id": str(product_id)})
        return DeleteProductResult(deleted=True)
