"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  StoreError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - application/role_promotion.py (UserNotFoundError / UpdateFailedError)
  - infrastructure/repositories/mongo/* (DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class StoreError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      StoreError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "STORE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(StoreError):
    """Errores del document store (conexión, timeout, escritura rechazada)."""

    error_code: str = "DATABASE_ERROR"


class UserNotFoundError(StoreError):
    """El usuario pedido no existe (bug del caller en flujos internos)."""

    error_code: str = "NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__("User not found")
        self.user_id = user_id


class UpdateFailedError(StoreError):
    """La escritura del rol (u otro update crítico) no pudo persistirse."""

    error_code: str = "UPDATE_FAILED"


class DuplicateEmailError(StoreError):
    """El email ya está registrado (índice único del store)."""

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, email: str, original_error: Exception | None = None):
        super().__init__("Email already in use", original_error=original_error)
        self.email = email
