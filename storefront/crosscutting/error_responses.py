"""
===============================================================================
MÓDULO: Respuestas de error estándar (envelope {status, message, code})
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda manejar por "code" (ej: INCOMPLETE_PROFILE => pedir perfil)
- El backend pueda correlacionar por request_id / error_id
- Todas las respuestas compartan la forma {"status": "error", "message": ...}

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir el payload de error (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handler FastAPI para AppHTTPException

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
  - identity/access_control.py (guards que levantan estos errores)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INCOMPLETE_PROFILE = "INCOMPLETE_PROFILE"
    NOT_FOUND = "NOT_FOUND"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPDATE_FAILED = "UPDATE_FAILED"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    Envelope de error.

    Campos extra:
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"email","msg":"..."}])
    - error_id / request_id: correlación con logs (nunca stacktraces)
    """

    status: Literal["error"] = "error"
    message: str
    code: ErrorCode
    errors: list[dict[str, Any]] | None = None
    error_id: str | None = None
    request_id: str | None = None


OPENAPI_ERROR_RESPONSES = {
    "400": {"description": "Bad Request", "model": ErrorDetail},
    "401": {"description": "Unauthorized", "model": ErrorDetail},
    "403": {
        "description": "Forbidden (FORBIDDEN or INCOMPLETE_PROFILE)",
        "model": ErrorDetail,
    },
    "404": {"description": "Not Found", "model": ErrorDetail},
    "default": {"description": "Error", "model": ErrorDetail},
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[]) y error_id

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        error_id: str | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors
        self.error_id = error_id


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, f"{resource} not found")


def unauthorized(detail: str = "Authentication required") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Access denied") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def incomplete_profile(
    detail: str = "Please complete your profile before using the cart",
) -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.INCOMPLETE_PROFILE, detail)


def internal_error(detail: str = "Internal server error") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def update_failed(detail: str = "Update failed") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.UPDATE_FAILED, detail)


def database_error(detail: str = "Database unavailable") -> AppHTTPException:
    return AppHTTPException(503, ErrorCode.DATABASE_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def build_error_payload(
    request: Request,
    *,
    code: ErrorCode,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    error_id: str | None = None,
) -> dict[str, Any]:
    """Arma el envelope de error (sin claves vacías)."""
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    error = ErrorDetail(
        message=message,
        code=code,
        errors=errors or None,
        error_id=error_id,
        request_id=request_id,
    )
    return error.model_dump(mode="json", exclude_none=True)


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException (propaga headers opcionales)."""
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_payload(
            request,
            code=exc.code,
            message=str(exc.detail),
            errors=exc.errors,
            error_id=exc.error_id,
        ),
        headers=headers,
    )
