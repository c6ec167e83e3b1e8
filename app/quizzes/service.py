from __future__ import annotations

import logging
import time
from collections.abc import Awaitable
from typing import TypeVar

from app.core.metrics import observe_llm_call, quizzes_stored_total
from app.core.settings import get_settings
from app.domain.exceptions import QuizGenerationError, TopicRejectedError
from app.quizzes.schemas import QuizConfig, QuizOut
from app.quizzes.store import QuizStore
from app.quizzes.synthesis import synthesize_quiz
from app.quizzes.topic_gate import LLMClient, validate_topic

logger = logging.getLogger("app.quiz_generation")

T = TypeVar("T")


class QuizGenerationService:
    """
    Topic gate -> quiz synthesis -> store.

    Each LLM stage is attempted once. Logs carry stage names and timings only;
    topics and model output stay out of the logs.
    """

    def __init__(self, *, llm_client: LLMClient, store: QuizStore, request_id: str | None = None):
        self._llm = llm_client
        self._store = store
        self._request_id = request_id

    async def _timed(self, stage: str, call: Awaitable[T]) -> T:
        started = time.perf_counter()
        outcome = "error"
        try:
            result = await call
            outcome = "ok"
            return result
        except QuizGenerationError:
            outcome = "invalid_output"
            raise
        finally:
            duration = time.perf_counter() - started
            observe_llm_call(stage=stage, outcome=outcome, duration_seconds=duration)
            logger.info(
                "LLM stage finished",
                extra={
                    "request_id": self._request_id,
                    "stage": stage,
                    "success": outcome == "ok",
                    "duration_ms": round(duration * 1000.0, 2),
                },
            )

    async def generate(self, config: QuizConfig) -> QuizOut:
        settings = get_settings()

        verdict = await self._timed(
            "topic_gate",
            validate_topic(
                llm=self._llm,
                topic=config.topic,
                max_tokens=int(settings.topic_gate_max_tokens),
            ),
        )
        if not verdict.is_valid:
            logger.info(
                "Topic rejected",
                extra={"request_id": self._request_id, "stage": "topic_gate", "success": False},
            )
            raise TopicRejectedError(verdict.reason)

        draft = await self._timed(
            "quiz_synthesis",
            synthesize_quiz(
                llm=self._llm,
                topic=config.topic,
                number_of_questions=config.number_of_questions,
                difficulty_mode=config.difficulty_mode,
                audience=settings.quiz_audience,
                max_tokens=int(settings.quiz_max_tokens),
            ),
        )

        quiz = self._store.create_quiz(draft)
        quizzes_stored_total.inc()
        logger.info(
            "Quiz stored",
            extra={
                "request_id": self._request_id,
                "quiz_id": quiz.id,
                "success": True,
            },
        )
        return quiz
