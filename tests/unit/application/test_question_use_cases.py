"""
Name: Product Q&A Use Case Tests

Responsibilities:
  - Ask: text required, product must exist
  - Answer: text required, records admin + timestamp, re-answer replaces
  - List filters by product / author / answered
"""

from uuid import uuid4

import pytest
from factories import make_product
from storefront.application.usecases import (
    AnswerQuestionInput,
    AnswerQuestionUseCase,
    AskQuestionInput,
    AskQuestionUseCase,
    ListQuestionsUseCase,
    QuestionErrorCode,
)
from storefront.infrastructure.repositories import (
    InMemoryProductQuestionRepository,
    InMemoryProductRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def product():
    return make_product()


@pytest.fixture
def questions():
    return InMemoryProductQuestionRepository()


@pytest.fixture
def ask(product, questions):
    use_case = AskQuestionUseCase(
        question_repository=questions,
        product_repository=InMemoryProductRepository([product]),
    )

    def _ask(text="¿Trae maletín?", user_id=None, product_id=None):
        return use_case.execute(
            AskQuestionInput(
                product_id=product_id or product.id,
                user_id=user_id or uuid4(),
                question=text,
            )
        )

    return _ask


def test_ask_question_trims_text(ask, product):
    result = ask("  ¿Trae maletín?  ")

    assert result.error is None
    assert result.question.question == "¿Trae maletín?"
    assert result.question.product_id == product.id
    assert result.question.is_answered is False


@pytest.mark.parametrize("text", [None, "", "   "])
def test_ask_question_requires_text(ask, text):
    result = ask(text)

    assert result.error.code == QuestionErrorCode.VALIDATION_ERROR
    assert result.error.message == "Question cannot be empty"


def test_ask_question_rejects_long_text(ask):
    result = ask("x" * 1001)

    assert result.error.code == QuestionErrorCode.VALIDATION_ERROR


def test_ask_question_about_unknown_product(ask):
    result = ask(product_id=uuid4())

    assert result.error.code == QuestionErrorCode.NOT_FOUND
    assert result.error.message == "Product not found"


def test_answer_records_admin(ask, questions):
    asked = ask().question
    admin_id = uuid4()

    result = AnswerQuestionUseCase(question_repository=questions).execute(
        AnswerQuestionInput(question_id=asked.id, admin_id=admin_id, answer="Sí")
    )

    assert result.error is None
    assert result.question.answer == "Sí"
    assert result.question.answered_by == admin_id
    assert result.question.answered_at is not None


def test_answer_again_replaces_answer(ask, questions):
    asked = ask().question
    use_case = AnswerQuestionUseCase(question_repository=questions)

    use_case.execute(
        AnswerQuestionInput(question_id=asked.id, admin_id=uuid4(), answer="Sí")
    )
    result = use_case.execute(
        AnswerQuestionInput(question_id=asked.id, admin_id=uuid4(), answer="No")
    )

    assert questions.get_question(asked.id).answer == "No"
    assert result.question.answer == "No"


def test_answer_requires_text(ask, questions):
    asked = ask().question

    result = AnswerQuestionUseCase(question_repository=questions).execute(
        AnswerQuestionInput(question_id=asked.id, admin_id=uuid4(), answer=" ")
    )

    assert result.error.message == "Answer cannot be empty"


def test_answer_missing_question(questions):
    result = AnswerQuestionUseCase(question_repository=questions).execute(
        AnswerQuestionInput(question_id=uuid4(), admin_id=uuid4(), answer="Sí")
    )

    assert result.error.code == QuestionErrorCode.NOT_FOUND
    assert result.error.message == "Question not found"


def test_list_questions_filters(ask, questions, product):
    author = uuid4()
    mine = ask(user_id=author).question
    other = ask().question
    AnswerQuestionUseCase(question_repository=questions).execute(
        AnswerQuestionInput(question_id=other.id, admin_id=uuid4(), answer="Sí")
    )
    use_case = ListQuestionsUseCase(question_repository=questions)

    by_product = use_case.execute(product_id=product.id).questions
    by_author = use_case.execute(user_id=author).questions
    unanswered = use_case.execute(answered=False).questions

    assert len(by_product) == 2
    assert [q.id for q in by_author] == [mine.id]
    assert [q.id for q in unanswered] == [mine.id]
