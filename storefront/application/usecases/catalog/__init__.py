"""Catalog use cases."""

from .list_products import ListProductsInput, ListProductsUseCase, parse_sort
from .manage_products import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    UpdateProductUseCase,
)
from .product_results import (
    DeleteProductResult,
    ProductError,
    ProductErrorCode,
    ProductPageResult,
    ProductResult,
)

__all__ = [
    "CreateProductInput",
    "CreateProductUseCase",
    "DeleteProductResult",
    "DeleteProductUseCase",
    "GetProductUseCase",
    "ListProductsInput",
    "ListProductsUseCase",
    "ProductError",
    "ProductErrorCode",
    "ProductPageResult",
    "ProductResult",
    "UpdateProductUseCase",
    "parse_sort",
]
