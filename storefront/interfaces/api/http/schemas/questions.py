"""
===============================================================================
TARJETA CRC — schemas/questions.py
===============================================================================

Responsabilidades:
    - DTOs de preguntas/respuestas sobre productos.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from .....domain.entities import ProductQuestion


class AskQuestionReq(BaseModel):
    product_id: UUID
    question: str | None = None


class AnswerQuestionReq(BaseModel):
    answer: str | None = None


class QuestionRes(BaseModel):
    id: UUID
    product_id: UUID
    user_id: UUID
    question: str
    answer: str | None = None
    is_answered: bool
    answered_by: UUID | None = None
    answered_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, q: ProductQuestion) -> "QuestionRes":
        return cls(
            id=q.id,
            product_id=q.product_id,
            user_id=q.user_id,
            question=q.question,
            answer=q.answer,
            is_answered=q.is_answered,
            answered_by=q.answered_by,
            answered_at=q.answered_at,
            created_at=q.created_at,
        )


class QuestionEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str | None = None
    payload: QuestionRes


class QuestionsListRes(BaseModel):
    status: Literal["success"] = "success"
    payload: list[QuestionRes]
