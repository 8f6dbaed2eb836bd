"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/products.py
===============================================================================

Class/Module:
    Products Router (catálogo)

Responsibilities:
    - Listado público paginado con filtros y sort.
    - Lectura pública por id.
    - Alta / update parcial / baja restringidos a admin.

Collaborators:
    - application.usecases.catalog
    - identity.auth_dependencies.require_admin
    - schemas.products
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsInput,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from .....container import (
    get_create_product_use_case,
    get_delete_product_use_case,
    get_get_product_use_case,
    get_list_products_use_case,
    get_update_product_use_case,
)
from .....identity.auth_dependencies import require_admin
from .....identity.users import AuthenticatedPrincipal
from ..dependencies import parse_uuid
from ..error_mapping import raise_product_error
from ..schemas.products import (
    CreateProductReq,
    ProductEnvelope,
    ProductRes,
    ProductsPageRes,
    UpdateProductReq,
)
from ..schemas.users import MessageRes

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductsPageRes)
def list_products(
    page: int = Query(1),
    limit: int | None = Query(None),
    category: str | None = Query(None),
    sub_category: str | None = Query(None),
    brand: str | None = Query(None),
    is_offer: bool | None = Query(None),
    min_price: float | None = Query(None),
    max_price: float | None = Query(None),
    sort: str | None = Query(None, description="campo:asc|desc o asc|desc"),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
):
    result = use_case.execute(
        ListProductsInput(
            page=page,
            limit=limit,
            category=category,
            sub_category=sub_category,
            brand=brand,
            is_offer=is_offer,
            min_price=min_price,
            max_price=max_price,
            sort=sort,
        )
    )
    if result.error is not None:
        raise_product_error(result.error)
    return ProductsPageRes.from_page(result.page)


@router.get("/{pid}", response_model=ProductEnvelope)
def get_product(
    pid: str,
    use_case: GetProductUseCase = Depends(get_get_product_use_case),
):
    result = use_case.execute(parse_uuid(pid, "product"))
    if result.error is not None:
        raise_product_error(result.error)
    return ProductEnvelope(payload=ProductRes.from_domain(result.product))


@router.post("", response_model=ProductEnvelope, status_code=201)
def create_product(
    req: CreateProductReq,
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
):
    result = use_case.execute(CreateProductInput(**req.model_dump()))
    if result.error is not None:
        raise_product_error(result.error)
    return ProductEnvelope(
        message="Product created successfully",
        payload=ProductRes.from_domain(result.product),
    )


@router.put("/{pid}", response_model=ProductEnvelope)
def update_product(
    pid: str,
    req: UpdateProductReq,
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
):
    result = use_case.execute(
        parse_uuid(pid, "product"), req.model_dump(exclude_unset=True)
    )
    if result.error is not None:
        raise_product_error(result.error)
    return ProductEnvelope(
        message="Product updated successfully",
        payload=ProductRes.from_domain(result.product),
    )


@router.delete("/{pid}", response_model=MessageRes)
def delete_product(
    pid: str,
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
):
    result = use_case.execute(parse_uuid(pid, "product"))
    if result.error is not None:
        raise_product_error(result.error)
    return MessageRes(message="Product deleted successfully")
