"""
===============================================================================
TARJETA CRC — storefront/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones internas a respuestas HTTP con el envelope
    {"status": "error", "message", "code"}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: StoreError y derivadas
  - crosscutting.config.get_settings (para decidir nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    StoreError,
    UpdateFailedError,
    UserNotFoundError,
)
from ..crosscutting.logger import logger


_HTTP_STATUS_CODES = {
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_store_error(
    request: Request,
    *,
    exc: StoreError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    """Helper común para errores tipados del store."""
    request_id = _request_id_from(request)

    if status_code >= 500:
        logger.error(
            "Error de servicio",
            extra={
                "code": code.value,
                "error_id": exc.error_id,
                "error_message": exc.message,
                "request_id": request_id,
                "original_error": repr(exc.original_error)
                if exc.original_error
                else None,
            },
        )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        error_id=exc.error_id if status_code >= 500 else None,
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_store_error(
        request, exc=exc, code=ErrorCode.DATABASE_ERROR, status_code=503
    )


async def user_not_found_handler(
    request: Request, exc: UserNotFoundError
) -> JSONResponse:
    return await _handle_store_error(
        request, exc=exc, code=ErrorCode.NOT_FOUND, status_code=404
    )


async def duplicate_email_handler(
    request: Request, exc: DuplicateEmailError
) -> JSONResponse:
    return await _handle_store_error(
        request, exc=exc, code=ErrorCode.VALIDATION_ERROR, status_code=400
    )


async def update_failed_handler(
    request: Request, exc: UpdateFailedError
) -> JSONResponse:
    return await _handle_store_error(
        request, exc=exc, code=ErrorCode.UPDATE_FAILED, status_code=500
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    # R: Errores base: tratamos como INTERNAL_ERROR por defecto.
    return await _handle_store_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de schema (pydantic) -> 400 VALIDATION_ERROR con detalle por campo."""
    errors = []
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(location), "msg": item.get("msg", "")})

    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Invalid request data",
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """HTTPException de framework (404 de ruta, 405) con el mismo envelope."""
    code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.VALIDATION_ERROR)
    if exc.status_code >= 500:
        code = ErrorCode.INTERNAL_ERROR
    app_exc = AppHTTPException(
        status_code=exc.status_code, code=code, detail=str(exc.detail)
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (evita filtrar internos).
    """
    request_id = _request_id_from(request)
    error_id = str(uuid4())
    settings = get_settings()

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error_id": error_id, "error": str(exc)},
    )

    # R: Fuera de producción ayudamos un poco más; en producción no filtramos detalles.
    detail = str(exc) if not settings.is_production() else "Internal server error"

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
        error_id=error_id,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException debe registrarse para respetar el envelope.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)
    app.add_exception_handler(UpdateFailedError, update_failed_handler)
    app.add_exception_handler(DuplicateEmailError, duplicate_email_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
