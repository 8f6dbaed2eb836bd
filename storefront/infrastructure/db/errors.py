"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del cliente MongoDB

Responsabilidades:
  - Evitar RuntimeError genéricos.
  - Dar semántica clara: "no inicializado", "ya inicializado".
===============================================================================
"""


class DatabaseClientError(Exception):
    """Base de errores del cliente de base de datos."""


class ClientAlreadyInitializedError(DatabaseClientError):
    """Se intentó inicializar el cliente más de una vez."""


class ClientNotInitializedError(DatabaseClientError):
    """Se intentó usar la base sin init_client()."""
