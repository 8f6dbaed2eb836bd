"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/questions.py
============================================================
Class: InMemoryProductQuestionRepository

Responsibilities:
  - Almacenar preguntas de productos en memoria (tests / local dev).
  - Filtrar por producto, autor y estado de respuesta.

Constraints / Notes:
  - Thread-safe + copias defensivas.
  - Orden determinístico: created_at DESC.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import ProductQuestion


class InMemoryProductQuestionRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._questions: Dict[UUID, ProductQuestion] = {}

    def create_question(self, question: ProductQuestion) -> ProductQuestion:
        stored = deepcopy(question)
        stored.created_at = stored.created_at or datetime.now(timezone.utc)
        with self._lock:
            self._questions[stored.id] = stored
        return deepcopy(stored)

    def get_question(self, question_id: UUID) -> Optional[ProductQuestion]:
        with self._lock:
            question = self._questions.get(question_id)
            return deepcopy(question) if question is not None else None

    def list_questions(
        self,
        *,
        product_id: UUID | None = None,
        user_id: UUID | None = None,
        answered: bool | None = None,
    ) -> List[ProductQuestion]:
        with self._lock:
            values = [deepcopy(q) for q in self._questions.values()]

        if product_id is not None:
            values = [q for q in values if q.product_id == product_id]
        if user_id is not None:
            values = [q for q in values if q.user_id == user_id]
        if answered is not None:
            values = [q for q in values if q.is_answered == answered]

        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(values, key=lambda q: q.created_at or epoch, reverse=True)

    def save_question(self, question: ProductQuestion) -> Optional[ProductQuestion]:
        with self._lock:
            if question.id not in self._questions:
                return None
            self._questions[question.id] = deepcopy(question)
            return deepcopy(question)
