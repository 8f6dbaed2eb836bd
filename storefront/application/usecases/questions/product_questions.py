"""
===============================================================================
USE CASES: Product Q&A (ask / list / answer)
===============================================================================

Business Goal:
    Permitir que usuarios autenticados pregunten sobre un producto y que los
    administradores respondan. Las preguntas son públicas por producto.

Why (Context / Intención):
    - Preguntar no requiere perfil completo: es pre-venta.
    - Responder una pregunta ya respondida reemplaza la respuesta (edición).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    AskQuestionUseCase, ListQuestionsUseCase, AnswerQuestionUseCase

Collaborators:
    - ProductQuestionRepository
    - ProductRepository (existencia del producto)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import ProductQuestion
from ....domain.repositories import ProductQuestionRepository, ProductRepository
from ...validators import clean_text
from .question_results import (
    QuestionError,
    QuestionErrorCode,
    QuestionListResult,
    QuestionResult,
)

MSG_EMPTY_QUESTION = "Question cannot be empty"
MSG_EMPTY_ANSWER = "Answer cannot be empty"
MSG_QUESTION_NOT_FOUND = "Question not found"
MSG_PRODUCT_NOT_FOUND = "Product not found"
MAX_TEXT_LENGTH = 1000
MSG_TOO_LONG = f"Text cannot exceed {MAX_TEXT_LENGTH} characters"


def _error(code: QuestionErrorCode, message: str) -> QuestionResult:
    return QuestionResult(error=QuestionError(code=code, message=message))


@dataclass(frozen=True)
class AskQuestionInput:
    product_id: UUID
    user_id: UUID
    question: str | None


class AskQuestionUseCase:
    def __init__(
        self,
        *,
        question_repository: ProductQuestionRepository,
        product_repository: ProductRepository,
    ) -> None:
        self._questions = question_repository
        self._products = product_repository

    def execute(self, input_data: AskQuestionInput) -> QuestionResult:
        text = clean_text(input_data.question)
        if not text:
            return _error(QuestionErrorCode.VALIDATION_ERROR, MSG_EMPTY_QUESTION)
        if len(text) > MAX_TEXT_LENGTH:
            return _error(QuestionErrorCode.VALIDATION_ERROR, MSG_TOO_LONG)

        if self._products.get_product(input_data.product_id) is None:
            return _error(QuestionErrorCode.NOT_FOUND, MSG_PRODUCT_NOT_FOUND)

        question = self._questions.create_question(
            ProductQuestion(
                id=uuid4(),
                product_id=input_data.product_id,
                user_id=input_data.user_id,
                question=text,
            )
        )
        logger.info(
            "Pregunta creada",
            extra={
                "question_id": str(question.id),
                "product_id": str(question.product_id),
            },
        )
        return QuestionResult(question=question)


class ListQuestionsUseCase:
    """Listado filtrado: por producto (público), por autor o sin responder."""

    def __init__(self, *, question_repository: ProductQuestionRepository) -> None:
        self._questions = question_repository

    def execute(
        self,
        *,
        product_id: UUID | None = None,
        user_id: UUID | None = None,
        answered: bool | None = None,
    ) -> QuestionListResult:
        return QuestionListResult(
            questions=self._questions.list_questions(
                product_id=product_id, user_id=user_id, answered=answered
            )
        )


@dataclass(frozen=True)
class AnswerQuestionInput:
    question_id: UUID
    admin_id: UUID
    answer: str | None


class AnswerQuestionUseCase:
    def __init__(self, *, question_repository: ProductQuestionRepository) -> None:
        self._questions = question_repository

    def execute(self, input_data: AnswerQuestionInput) -> QuestionResult:
        text = clean_text(input_data.answer)
        if not text:
            return _error(QuestionErrorCode.VALIDATION_ERROR, MSG_EMPTY_ANSWER)
        if len(text) > MAX_TEXT_LENGTH:
            return _error(QuestionErrorCode.VALIDATION_ERROR, MSG_TOO_LONG)

        question = self._questions.get_question(input_data.question_id)
        if question is None:
            return _error(QuestionErrorCode.NOT_FOUND, MSG_QUESTION_NOT_FOUND)

        question.record_answer(text, admin_id=input_data.admin_id)
        saved = self._questions.save_question(question)
        if saved is None:
            return _error(QuestionErrorCode.NOT_FOUND, MSG_QUESTION_NOT_FOUND)

        logger.info(
            "Pregunta respondida",
            extra={
                "question_id": str(saved.id),
                "admin_id": str(input_data.admin_id),
            },
        )
        return QuestionResult(question=saved)
