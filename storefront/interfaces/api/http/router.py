"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses de error para OpenAPI.
  - Componer routers por feature.

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects.

Notas:
  - Este router se incluye desde storefront/api/main.py con prefix="/api".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.carts import router as carts_router
from .routers.orders import router as orders_router
from .routers.product_questions import router as product_questions_router
from .routers.products import router as products_router
from .routers.sessions import router as sessions_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz de la API."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(sessions_router)
    api_router.include_router(users_router)
    api_router.include_router(products_router)
    api_router.include_router(carts_router)
    api_router.include_router(orders_router)
    api_router.include_router(product_questions_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
