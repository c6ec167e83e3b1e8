"""Unit tests: in-memory quiz store."""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime, timedelta

from app.quizzes.store import QuizStore
from app.quizzes.synthesis import build_quiz_draft
from tests.quizzes._helpers import quiz_payload


def _draft(topic: str = "Mortgage refinancing in Jakarta"):
    return build_quiz_draft(
        raw=json.dumps(quiz_payload()),
        topic=topic,
        difficulty_mode="medium",
        default_audience="99 Group employees",
    )


def test_create_assigns_uuid_and_utc_timestamp() -> None:
    store = QuizStore()
    quiz = store.create_quiz(_draft())

    assert uuid.UUID(quiz.id).version == 4
    assert quiz.created_at.tzinfo is not None
    assert quiz.topic == "Mortgage refinancing in Jakarta"
    assert store.list_quizzes() == [quiz]


def test_get_returns_stored_quiz_or_none() -> None:
    store = QuizStore()
    quiz = store.create_quiz(_draft())

    assert store.get_quiz(quiz.id) == quiz
    assert store.get_quiz(str(uuid.uuid4())) is None
    assert store.get_quiz("not-a-uuid") is None


def test_ids_are_unique() -> None:
    store = QuizStore()
    ids = {store.create_quiz(_draft()).id for _ in range(20)}
    assert len(ids) == 20


def test_list_is_sorted_newest_first() -> None:
    store = QuizStore()
    base = datetime(2026, 1, 1, tzinfo=UTC)
    middle = store.create_quiz(_draft("middle topic"), now=base + timedelta(minutes=1))
    oldest = store.create_quiz(_draft("oldest topic"), now=base)
    newest = store.create_quiz(_draft("newest topic"), now=base + timedelta(minutes=2))

    assert [q.id for q in store.list_quizzes()] == [newest.id, middle.id, oldest.id]


def test_list_breaks_timestamp_ties_by_latest_insertion() -> None:
    store = QuizStore()
    same = datetime(2026, 1, 1, tzinfo=UTC)
    first = store.create_quiz(_draft("first"), now=same)
    second = store.create_quiz(_draft("second"), now=same)

    assert [q.id for q in store.list_quizzes()] == [second.id, first.id]


def test_empty_store_lists_nothing() -> None:
    assert QuizStore().list_quizzes() == []
