"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/carts.py
===============================================================================

Class/Module:
    Carts Router

Responsibilities:
    - Exponer creación, lectura, edición de items, vaciado y checkout.
    - Aplicar los guards de carrito como dependencies:
        * lectura / quitar / vaciar: owner-or-admin
        * agregar / cambiar cantidad / checkout: perfil completo + owner-or-admin

Collaborators:
    - application.usecases.carts
    - interfaces.api.http.dependencies (require_cart_access, parse_uuid)
    - schemas.carts / schemas.orders

Notes:
    - Un carrito inexistente se reporta como FORBIDDEN a no-admins (el guard
      compara contra el carrito propio) y como NOT_FOUND a admins.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response

from .....application.usecases import (
    AddProductToCartUseCase,
    CheckoutCartInput,
    CheckoutCartUseCase,
    CreateCartUseCase,
    EmptyCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from .....container import (
    get_add_product_to_cart_use_case,
    get_checkout_cart_use_case,
    get_create_cart_use_case,
    get_empty_cart_use_case,
    get_get_cart_use_case,
    get_remove_cart_item_use_case,
    get_update_cart_item_use_case,
)
from .....identity.auth_dependencies import require_principal
from .....identity.users import AuthenticatedPrincipal
from ..dependencies import parse_uuid, require_cart_access
from ..error_mapping import raise_cart_error
from ..schemas.carts import (
    CartEnvelope,
    CartRes,
    CheckoutReq,
    QuantityReq,
    coerce_quantity,
)
from ..schemas.orders import OrderEnvelope, OrderRes

router = APIRouter(prefix="/carts", tags=["carts"])


def _cart_envelope(result, message: str | None = None) -> CartEnvelope:
    if result.error is not None:
        raise_cart_error(result.error)
    return CartEnvelope(message=message, payload=CartRes.from_domain(result.cart))


@router.post("", response_model=CartEnvelope, status_code=201)
def create_cart(
    response: Response,
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: CreateCartUseCase = Depends(get_create_cart_use_case),
):
    result = use_case.execute(principal.user_id)
    if not result.created:
        response.status_code = 200
        return _cart_envelope(result, "Cart already exists")
    return _cart_envelope(result, "Cart created successfully")


@router.get("/{cid}", response_model=CartEnvelope)
def get_cart(
    cid: str,
    _principal: AuthenticatedPrincipal = Depends(require_cart_access()),
    use_case: GetCartUseCase = Depends(get_get_cart_use_case),
):
    return _cart_envelope(use_case.execute(parse_uuid(cid, "cart")))


@router.post("/{cid}/products/{pid}", response_model=CartEnvelope)
def add_product(
    cid: str,
    pid: str,
    req: QuantityReq | None = Body(default=None),
    _principal: AuthenticatedPrincipal = Depends(
        require_cart_access(complete_profile=True)
    ),
    use_case: AddProductToCartUseCase = Depends(get_add_product_to_cart_use_case),
):
    quantity = coerce_quantity(req.quantity if req else None, default=1)
    result = use_case.execute(
        parse_uuid(cid, "cart"), parse_uuid(pid, "product"), quantity
    )
    return _cart_envelope(result, "Product added to cart")


@router.put("/{cid}/products/{pid}", response_model=CartEnvelope)
def update_quantity(
    cid: str,
    pid: str,
    req: QuantityReq | None = Body(default=None),
    _principal: AuthenticatedPrincipal = Depends(
        require_cart_access(complete_profile=True)
    ),
    use_case: UpdateCartItemUseCase = Depends(get_update_cart_item_use_case),
):
    quantity = coerce_quantity(req.quantity if req else None)
    result = use_case.execute(
        parse_uuid(cid, "cart"), parse_uuid(pid, "product"), quantity
    )
    return _cart_envelope(result, "Product quantity updated")


@router.delete("/{cid}/products/{pid}", response_model=CartEnvelope)
def remove_product(
    cid: str,
    pid: str,
    _principal: AuthenticatedPrincipal = Depends(require_cart_access()),
    use_case: RemoveCartItemUseCase = Depends(get_remove_cart_item_use_case),
):
    result = use_case.execute(parse_uuid(cid, "cart"), parse_uuid(pid, "product"))
    return _cart_envelope(result, "Product removed from cart")


@router.delete("/{cid}", response_model=CartEnvelope)
def empty_cart(
    cid: str,
    _principal: AuthenticatedPrincipal = Depends(require_cart_access()),
    use_case: EmptyCartUseCase = Depends(get_empty_cart_use_case),
):
    return _cart_envelope(use_case.execute(parse_uuid(cid, "cart")), "Cart emptied")


@router.post("/{cid}/purchase", response_model=OrderEnvelope, status_code=201)
def purchase(
    cid: str,
    req: CheckoutReq | None = Body(default=None),
    _principal: AuthenticatedPrincipal = Depends(
        require_cart_access(complete_profile=True)
    ),
    use_case: CheckoutCartUseCase = Depends(get_checkout_cart_use_case),
):
    options = req or CheckoutReq()
    result = use_case.execute(
        CheckoutCartInput(
            cart_id=parse_uuid(cid, "cart"),
            payment_method=options.payment_method,
            notes=options.notes,
        )
    )
    if result.error is not None:
        raise_cart_error(result.error)
    return OrderEnvelope(
        message="Purchase completed successfully",
        payload=OrderRes.from_domain(result.order),
    )
