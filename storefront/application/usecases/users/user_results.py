"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - UserErrorCode / UserError: contrato de error de los casos de uso de
      gestión de usuarios.
    - UserResult (un usuario + flags), UserListResult, DeleteUserResult.

Collaborators:
    - identity.users.User
    - domain.profile.ProfileCompleteness
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.profile import ProfileCompleteness
from ....identity.users import User


class UserErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str


@dataclass
class UserResult:
    user: User | None = None
    completeness: ProfileCompleteness | None = None
    promoted: bool = False
    error: UserError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    error: UserError | None = None


@dataclass
class DeleteUserResult:
    deleted: bool
    error: UserError | None = None
