from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from fastapi import Request

from app.quizzes.schemas import QuizDraft, QuizOut


class QuizStore:
    """
    Process-local quiz storage keyed by UUID4 string.

    Nothing survives a restart. Records are immutable once created.
    """

    def __init__(self) -> None:
        # dict preserves insertion order, which breaks createdAt ties in list_quizzes().
        self._quizzes: dict[str, QuizOut] = {}

    def create_quiz(self, draft: QuizDraft, *, now: datetime | None = None) -> QuizOut:
        quiz = QuizOut(
            **draft.model_dump(),
            id=str(uuid.uuid4()),
            created_at=now or datetime.now(UTC),
        )
        self._quizzes[quiz.id] = quiz
        return quiz

    def get_quiz(self, quiz_id: str) -> QuizOut | None:
        return self._quizzes.get(quiz_id)

    def list_quizzes(self) -> list[QuizOut]:
        # Newest first; reversing before a stable sort puts later inserts first on ties.
        newest_inserted_first = reversed(list(self._quizzes.values()))
        return sorted(newest_inserted_first, key=lambda q: q.created_at, reverse=True)


def init_store(*, app: Any) -> None:
    app.state.quiz_store = QuizStore()


def get_quiz_store(request: Request) -> QuizStore:
    return request.app.state.quiz_store
