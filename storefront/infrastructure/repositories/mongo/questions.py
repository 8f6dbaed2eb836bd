"""
============================================================
TARJETA CRC — infrastructure/repositories/mongo/questions.py
============================================================
Class: MongoProductQuestionRepository

Responsibilities:
  - Persistir preguntas en la colección `product_questions`.
  - Filtrar por producto, autor y estado de respuesta.

Collaborators:
  - pymongo.database.Database (inyectada)
  - domain.entities.ProductQuestion
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID

from pymongo import DESCENDING
from pymongo.database import Database

from ....domain.entities import ProductQuestion
from ._common import run_store_op


def _doc_to_question(doc: Mapping[str, Any]) -> ProductQuestion:
    return ProductQuestion(
        id=doc["_id"],
        product_id=doc["product_id"],
        user_id=doc["user_id"],
        question=doc["question"],
        answer=doc.get("answer"),
        answered_by=doc.get("answered_by"),
        answered_at=doc.get("answered_at"),
        created_at=doc.get("created_at"),
    )


def _question_to_doc(question: ProductQuestion) -> dict[str, Any]:
    return {
        "_id": question.id,
        "product_id": question.product_id,
        "user_id": question.user_id,
        "question": question.question,
        "answer": question.answer,
        "answered_by": question.answered_by,
        "answered_at": question.answered_at,
        "is_answered": question.is_answered,
        "created_at": question.created_at,
    }


class MongoProductQuestionRepository:
    def __init__(self, database: Database) -> None:
        self._collection = database.product_questions

    def create_question(self, question: ProductQuestion) -> ProductQuestion:
        doc = _question_to_doc(question)
        doc["created_at"] = question.created_at or datetime.now(timezone.utc)
        run_store_op(
            lambda: self._collection.insert_one(doc),
            log_msg="Error creando pregunta",
            log_extra={"product_id": str(question.product_id)},
        )
        return _doc_to_question(doc)

    def get_question(self, question_id: UUID) -> Optional[ProductQuestion]:
        doc = run_store_op(
            lambda: self._collection.find_one({"_id": question_id}),
            log_msg="Error cargando pregunta",
            log_extra={"question_id": str(question_id)},
        )
        return _doc_to_question(doc) if doc else None

    def list_questions(
        self,
        *,
        product_id: UUID | None = None,
        user_id: UUID | None = None,
        answered: bool | None = None,
    ) -> List[ProductQuestion]:
        query: dict[str, Any] = {}
        if product_id is not None:
            query["product_id"] = product_id
        if user_id is not None:
            query["user_id"] = user_id
        if answered is not None:
            query["is_answered"] = answered

        docs = run_store_op(
            lambda: list(self._collection.find(query).sort("created_at", DESCENDING)),
            log_msg="Error listando preguntas",
            log_extra={"filter": {k: str(v) for k, v in query.items()}},
        )
        return [_doc_to_question(d) for d in docs]

    def save_question(self, question: ProductQuestion) -> Optional[ProductQuestion]:
        doc = _question_to_doc(question)
        doc.pop("_id")
        result = run_store_op(
            lambda: self._collection.update_one({"_id": question.id}, {"$set": doc}),
            log_msg="Error guardando pregunta",
            log_extra={"question_id": str(question.id)},
        )
        return question if result.matched_count else None
