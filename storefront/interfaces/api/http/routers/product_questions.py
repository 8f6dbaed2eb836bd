"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/product_questions.py
===============================================================================

Class/Module:
    Product Questions Router (Q&A)

Responsibilities:
    - Listar preguntas de un producto (público) y las propias (auth).
    - Preguntar (auth) y responder / listar sin responder (admin).

Collaborators:
    - application.usecases.questions
    - identity.auth_dependencies
    - schemas.questions

Notes:
    - Rutas fijas (/user, /unanswered) antes que las parametrizadas.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....application.usecases import (
    AnswerQuestionInput,
    AnswerQuestionUseCase,
    AskQuestionInput,
    AskQuestionUseCase,
    ListQuestionsUseCase,
)
from .....container import (
    get_answer_question_use_case,
    get_ask_question_use_case,
    get_list_questions_use_case,
)
from .....identity.auth_dependencies import require_admin, require_principal
from .....identity.users import AuthenticatedPrincipal
from ..dependencies import parse_uuid
from ..error_mapping import raise_question_error
from ..schemas.questions import (
    AnswerQuestionReq,
    AskQuestionReq,
    QuestionEnvelope,
    QuestionRes,
    QuestionsListRes,
)

router = APIRouter(prefix="/product-questions", tags=["product-questions"])


def _list_res(questions) -> QuestionsListRes:
    return QuestionsListRes(payload=[QuestionRes.from_domain(q) for q in questions])


@router.get("/user", response_model=QuestionsListRes)
def my_questions(
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: ListQuestionsUseCase = Depends(get_list_questions_use_case),
):
    return _list_res(use_case.execute(user_id=principal.user_id).questions)


@router.get("/unanswered", response_model=QuestionsListRes)
def unanswered_questions(
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: ListQuestionsUseCase = Depends(get_list_questions_use_case),
):
    return _list_res(use_case.execute(answered=False).questions)


@router.get("/product/{pid}", response_model=QuestionsListRes)
def product_questions(
    pid: str,
    use_case: ListQuestionsUseCase = Depends(get_list_questions_use_case),
):
    product_id = parse_uuid(pid, "product")
    return _list_res(use_case.execute(product_id=product_id).questions)


@router.post("", response_model=QuestionEnvelope, status_code=201)
def ask_question(
    req: AskQuestionReq,
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: AskQuestionUseCase = Depends(get_ask_question_use_case),
):
    result = use_case.execute(
        AskQuestionInput(
            product_id=req.product_id,
            user_id=principal.user_id,
            question=req.question,
        )
    )
    if result.error is not None:
        raise_question_error(result.error)
    return QuestionEnvelope(
        message="Question created successfully",
        payload=QuestionRes.from_domain(result.question),
    )


@router.post("/{qid}/answer", response_model=QuestionEnvelope)
def answer_question(
    qid: str,
    req: AnswerQuestionReq,
    principal: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: AnswerQuestionUseCase = Depends(get_answer_question_use_case),
):
    result = use_case.execute(
        AnswerQuestionInput(
            question_id=parse_uuid(qid, "question"),
            admin_id=principal.user_id,
            answer=req.answer,
        )
    )
    if result.error is not None:
        raise_question_error(result.error)
    return QuestionEnvelope(
        message="Question answered successfully",
        payload=QuestionRes.from_domain(result.question),
    )
