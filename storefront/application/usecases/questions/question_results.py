"""
===============================================================================
PRODUCT Q&A USE CASE RESULTS
===============================================================================

Responsibilities:
    - QuestionErrorCode / QuestionError.
    - QuestionResult y QuestionListResult.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import ProductQuestion


class QuestionErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class QuestionError:
    code: QuestionErrorCode
    message: str


@dataclass
class QuestionResult:
    question: ProductQuestion | None = None
    error: QuestionError | None = None


@dataclass
class QuestionListResult:
    questions: List[ProductQuestion] = field(default_factory=list)
    error: QuestionError | None = None
