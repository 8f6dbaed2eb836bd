"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/orders.py
===============================================================================

Class/Module:
    Orders Router

Responsibilities:
    - Crear órdenes, listar las propias, leer una orden, listado admin y
      cambio de estado.
    - Guard de órdenes: existencia antes que ownership; una orden ajena se
      responde igual que una inexistente (404).

Collaborators:
    - application.usecases.orders
    - interfaces.api.http.dependencies (require_order_access, parse_uuid)
    - schemas.orders

Notes:
    - /orders/user se declara antes que /orders/{oid}.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreateOrderInput,
    CreateOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    OrderLineInput,
    UpdateOrderStatusUseCase,
)
from .....application.validators import address_from_mapping
from .....container import (
    get_create_order_use_case,
    get_get_order_use_case,
    get_list_orders_use_case,
    get_update_order_status_use_case,
)
from .....identity.auth_dependencies import require_admin, require_principal
from .....identity.users import AuthenticatedPrincipal
from ..dependencies import parse_uuid, require_order_access
from ..error_mapping import raise_order_error
from ..schemas.orders import (
    CreateOrderReq,
    OrderEnvelope,
    OrderRes,
    OrdersListRes,
    UpdateOrderStatusReq,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderEnvelope, status_code=201)
def create_order(
    req: CreateOrderReq,
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
):
    result = use_case.execute(
        CreateOrderInput(
            owner_user_id=principal.user_id,
            items=[
                OrderLineInput(product_id=line.product_id, quantity=line.quantity)
                for line in req.items
            ],
            payment_method=req.payment_method,
            shipping_address=address_from_mapping(
                req.shipping_address.model_dump() if req.shipping_address else None
            ),
            notes=req.notes,
        )
    )
    if result.error is not None:
        raise_order_error(result.error)
    return OrderEnvelope(
        message="Order created successfully", payload=OrderRes.from_domain(result.order)
    )


@router.get("/user", response_model=OrdersListRes)
def my_orders(
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    result = use_case.execute(owner_user_id=principal.user_id)
    return OrdersListRes(payload=[OrderRes.from_domain(o) for o in result.orders])


@router.get("", response_model=OrdersListRes)
def all_orders(
    status: str | None = Query(None),
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
):
    result = use_case.execute(status=status)
    if result.error is not None:
        raise_order_error(result.error)
    return OrdersListRes(payload=[OrderRes.from_domain(o) for o in result.orders])


@router.get("/{oid}", response_model=OrderEnvelope)
def get_order(
    oid: str,
    _principal: AuthenticatedPrincipal = Depends(require_order_access()),
    use_case: GetOrderUseCase = Depends(get_get_order_use_case),
):
    result = use_case.execute(parse_uuid(oid, "order"))
    if result.error is not None:
        raise_order_error(result.error)
    return OrderEnvelope(payload=OrderRes.from_domain(result.order))


@router.patch("/{oid}/status", response_model=OrderEnvelope)
def update_status(
    oid: str,
    req: UpdateOrderStatusReq,
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),
):
    result = use_case.execute(parse_uuid(oid, "order"), req.status)
    if result.error is not None:
        raise_order_error(result.error)
    return OrderEnvelope(
        message="Order status updated", payload=OrderRes.from_domain(result.order)
    )
