"""
===============================================================================
CATALOG USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - ProductErrorCode / ProductError.
    - ProductResult, ProductPageResult (listado paginado), DeleteProductResult.

Collaborators:
    - domain.entities.Product
    - domain.repositories.ProductPage
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import Product
from ....domain.repositories import ProductPage


class ProductErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ProductError:
    code: ProductErrorCode
    message: str


@dataclass
class ProductResult:
    product: Product | None = None
    error: ProductError | None = None


@dataclass
class ProductPageResult:
    page: ProductPage | None = None
    error: ProductError | None = None


@dataclass
class DeleteProductResult:
    deleted: bool
    error: ProductError | None = None
