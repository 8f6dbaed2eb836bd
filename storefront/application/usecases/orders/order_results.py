"""
===============================================================================
ORDER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - OrderErrorCode / OrderError.
    - OrderResult (una orden) y OrderListResult.

Collaborators:
    - domain.entities.Order
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Order


class OrderErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class OrderError:
    code: OrderErrorCode
    message: str


@dataclass
class OrderResult:
    order: Order | None = None
    error: OrderError | None = None


@dataclass
class OrderListResult:
    orders: List[Order] = field(default_factory=list)
    error: OrderError | None = None
