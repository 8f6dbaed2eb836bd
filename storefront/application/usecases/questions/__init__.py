"""Product Q&A use cases."""

from .product_questions import (
    AnswerQuestionInput,
    AnswerQuestionUseCase,
    AskQuestionInput,
    AskQuestionUseCase,
    ListQuestionsUseCase,
)
from .question_results import (
    QuestionError,
    QuestionErrorCode,
    QuestionListResult,
    QuestionResult,
)

__all__ = [
    "AnswerQuestionInput",
    "AnswerQuestionUseCase",
    "AskQuestionInput",
    "AskQuestionUseCase",
    "ListQuestionsUseCase",
    "QuestionError",
    "QuestionErrorCode",
    "QuestionListResult",
    "QuestionResult",
]
