"""
===============================================================================
USE CASE: List Products (catálogo paginado)
===============================================================================

Business Goal:
    Listar productos activos con filtros, orden y paginación page/limit.

Why (Context / Intención):
    - Los límites de página vienen de Settings (default y máximo) para que el
      catálogo no pueda pedirse entero en un solo request.
    - sort acepta "campo:asc|desc" o solo "asc|desc" (ordena por precio).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListProductsUseCase

Responsibilities:
    - Validar page/limit/rango de precios/sort.
    - Construir ProductQuery y delegar en ProductRepository.list_products.

Collaborators:
    - ProductRepository
    - domain.repositories.ProductQuery / PRODUCT_SORTABLE_FIELDS
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.repositories import (
    PRODUCT_SORTABLE_FIELDS,
    ProductQuery,
    ProductRepository,
)
from .product_results import ProductError, ProductErrorCode, ProductPageResult

MSG_INVALID_PAGE = "Invalid page value"
MSG_INVALID_LIMIT = "Invalid limit value"
MSG_INVALID_SORT = "Invalid sort value"
MSG_INVALID_PRICE_RANGE = "Invalid price range"

_DEFAULT_SORT_FIELD = "price"


@dataclass(frozen=True)
class ListProductsInput:
    page: int = 1
    limit: int | None = None
    category: str | None = None
    sub_category: str | None = None
    brand: str | None = None
    is_offer: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort: str | None = None
    include_inactive: bool = False


def parse_sort(sort: str | None) -> tuple[str | None, bool] | None:
    """
    Devuelve (campo, descending) o None si el valor es inválido.

    "" / None => (None, False): orden por defecto del repositorio.
    """
    raw = (sort or "").strip().lower()
    if not raw:
        return None, False

    field_name, _, direction = raw.partition(":")
    if not direction and field_name in {"asc", "desc"}:
        field_name, direction = _DEFAULT_SORT_FIELD, field_name
    direction = direction or "asc"

    if field_name not in PRODUCT_SORTABLE_FIELDS or direction not in {"asc", "desc"}:
        return None
    return field_name, direction == "desc"


class ListProductsUseCase:
    def __init__(
        self,
        *,
        product_repository: ProductRepository,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> None:
        self._products = product_repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    def execute(self, input_data: ListProductsInput) -> ProductPageResult:
        if input_data.page < 1:
            return self._validation_error(MSG_INVALID_PAGE)

        limit = input_data.limit if input_data.limit is not None else self._default_limit
        if limit < 1 or limit > self._max_limit:
            return self._validation_error(MSG_INVALID_LIMIT)

        if (
            input_data.min_price is not None
            and input_data.max_price is not None
            and input_data.min_price > input_data.max_price
        ):
            return self._validation_error(MSG_INVALID_PRICE_RANGE)

        sort = parse_sort(input_data.sort)
        if sort is None:
            return self._validation_error(MSG_INVALID_SORT)
        sort_field, sort_descending = sort

        query = ProductQuery(
            page=input_data.page,
            limit=limit,
            category=input_data.category,
            sub_category=input_data.sub_category,
            brand=input_data.brand,
            is_offer=input_data.is_offer,
            min_price=input_data.min_price,
            max_price=input_data.max_price,
            sort_field=sort_field,
            sort_descending=sort_descending,
            include_inactive=input_data.include_inactive,
        )
        return ProductPageResult(page=self._products.list_products(query))

    @staticmethod
    def _validation_error(message: str) -> ProductPageResult:
        return ProductPageResult(
            error=ProductError(code=ProductErrorCode.VALIDATION_ERROR, message=message)
        )
