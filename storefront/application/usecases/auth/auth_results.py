"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Contrato común de resultados para registro, login, usuario actual y alta
    de administradores.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    auth_results models (module)

Responsibilities:
    - Definir AuthErrorCode (categorías estables, no mensajes).
    - Representar AuthError (code + message).
    - Representar AuthResult: usuario + token opcional + flags de completitud.

Collaborators:
    - identity.users.User
    - domain.profile.ProfileCompleteness
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.profile import ProfileCompleteness
from ....identity.users import User


class AuthErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass
class AuthResult:
    """
    Contrato:
      - error is None => user presente (token solo en register/login/admin).
      - completeness siempre recalculada; nunca leída del store.
    """

    user: User | None = None
    token: str | None = None
    expires_in: int | None = None
    completeness: ProfileCompleteness | None = None
    promoted: bool = False
    error: AuthError | None = None
