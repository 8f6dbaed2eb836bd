"""
===============================================================================
MÓDULO: Middlewares HTTP (contexto + límites de payload)
===============================================================================

Objetivo
--------
1) RequestContextMiddleware:
   - Generar/propagar X-Request-Id
   - Setear contextvars (method/path) para los logs
   - Log por request con latencia

2) BodyLimitMiddleware:
   - Rechazar payloads gigantes (Content-Length y chunked)

Colaboradores:
  - storefront/context.py
  - crosscutting/error_responses.py
===============================================================================
"""

from __future__ import annotations

import json
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import ErrorCode, ErrorDetail
from .logger import logger


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Genera/acepta X-Request-Id, setea contextvars y loguea cada request.
    Siempre llama clear_context() para evitar leaks entre requests.
    """

    _QUIET_PATHS = {"/healthz"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            latency = time.perf_counter() - start
            logger.exception(
                "request falló",
                extra={"status_code": 500, "latency_ms": round(latency * 1000, 2)},
            )
            raise
        finally:
            latency = time.perf_counter() - start
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        return bool(value) and len(value) <= 128


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    ASGI middleware: rechaza requests cuyo body exceda max_body_bytes.

    Funciona tanto con Content-Length como con transferencia chunked.
    """

    def __init__(self, app, max_body_bytes: int | None = None):
        from .config import get_settings

        self.app = app
        self._max_bytes = max_body_bytes or get_settings().max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {
            k.decode("latin-1").lower(): v.decode("latin-1")
            for k, v in scope.get("headers", [])
        }
        path = scope.get("path", "")

        content_length = headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self._max_bytes:
                logger.warning(
                    "payload demasiado grande (por content-length)",
                    extra={
                        "content_length": content_length,
                        "max_bytes": self._max_bytes,
                        "path": path,
                    },
                )
                await self._send_413(send)
                return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return message

        try:
            await self.app(scope, limited_receive, send)
        except _BodyTooLarge:
            logger.warning(
                "payload demasiado grande (streaming)",
                extra={"max_bytes": self._max_bytes, "path": path},
            )
            await self._send_413(send)

    async def _send_413(self, send) -> None:
        body = ErrorDetail(
            message=f"Request body exceeds the allowed maximum ({self._max_bytes} bytes)",
            code=ErrorCode.PAYLOAD_TOO_LARGE,
        ).model_dump(mode="json", exclude_none=True)
        raw = json.dumps(body).encode("utf-8")
        await send(
            {
                "type": "http.response.start",
                "status": 413,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(raw)).encode("ascii")),
                ],
            }
        )
        await send({"type": "http.response.body", "body": raw})
