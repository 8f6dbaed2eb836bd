"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, request context, CORS)
  - Mount the store API under the /api prefix
  - Expose health and readiness endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: sessions, users, products, carts, orders, Q&A

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - In APP_ENV=test the Mongo client is never opened (in-memory repositories)

Notes:
  - Middleware order matters: BodyLimit → RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..identity.auth_users import hash_password
from ..infrastructure.db.client import close_client, ensure_indexes, init_client, ping
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and opens the Mongo client."""
    settings = get_settings()

    if settings.is_production():
        settings.validate_security_requirements()

    uses_mongo = not settings.is_test()
    if uses_mongo:
        # R: El cliente debe existir antes de cualquier uso de repositorios Mongo.
        database = init_client(
            settings.mongo_uri,
            settings.mongo_db_name,
            timeout_ms=settings.mongo_timeout_ms,
        )
        ensure_indexes(database)

    try:
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "Storefront API iniciando",
            extra={
                "app_env": settings.app_env,
                "mongo_db_name": settings.mongo_db_name,
                "profile_personal_fields": list(settings.get_personal_fields()),
                "dev_seed_admin": settings.dev_seed_admin,
            },
        )

        yield

    finally:
        if uses_mongo:
            close_client()
        logger.info("Storefront API apagándose")


def _get_allowed_origins() -> list[str]:
    return get_settings().get_allowed_origins_list()


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Storefront API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "sessions", "description": "Registro, login y sesión (JWT)"},
        {"name": "users", "description": "Perfiles de usuario"},
        {"name": "products", "description": "Catálogo"},
        {
            "name": "carts",
            "description": "Carrito (requiere perfil completo para modificar)",
        },
        {"name": "orders", "description": "Órdenes de compra"},
        {"name": "product-questions", "description": "Preguntas sobre productos"},
    ],
)


# R: Middleware order (bottom = first to execute):
# 1. BodyLimitMiddleware - rejects oversized bodies early
# 2. CORSMiddleware - handles preflight
# 3. RequestContextMiddleware - sets request_id
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=get_settings().cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "X-Request-Id",
    ],
)

app.add_middleware(BodyLimitMiddleware)

# R: Register store routes under /api
app.include_router(router, prefix="/api")

# R: Register exception handlers for structured error responses
register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """
    R: Health check for monitoring/orchestration.

    Returns:
        ok: True if the document store answers (always True in test env)
        db: "connected", "disconnected" or "in-memory"
        request_id: Correlation ID for this request
    """
    if get_settings().is_test():
        db_status = "in-memory"
    else:
        db_status = "connected" if ping() else "disconnected"

    return {
        "ok": db_status != "disconnected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }
