from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.schemas import ErrorOut
from app.core.llm.deps import get_llm_client
from app.core.llm.openai_client import LLMUnavailableError, OpenAIClient
from app.domain.exceptions import QuizNotFoundError
from app.quizzes.export import export_filename, format_quiz_as_plain_text
from app.quizzes.schemas import GenerateQuizOut, QuizConfig, QuizListOut, QuizOut
from app.quizzes.service import QuizGenerationService
from app.quizzes.store import QuizStore, get_quiz_store

router = APIRouter(prefix="/api", tags=["quizzes"])


def _lookup(store: QuizStore, quiz_id: str) -> QuizOut:
    quiz = store.get_quiz(quiz_id)
    if quiz is None:
        raise QuizNotFoundError(quiz_id)
    return quiz


@router.post(
    "/quiz/generate",
    response_model=GenerateQuizOut,
    summary="Generate and store a quiz",
    responses={
        400: {"model": ErrorOut, "description": "Invalid request body or rejected topic."},
        502: {"model": ErrorOut, "description": "LLM unavailable, failed, or produced bad output."},
    },
)
async def generate_quiz(
    payload: QuizConfig,
    request: Request,
    store: QuizStore = Depends(get_quiz_store),
    llm_client: OpenAIClient | None = Depends(get_llm_client),
) -> GenerateQuizOut:
    """
    Check the topic with the LLM, synthesize the quiz, validate it, and store it.

    One attempt per LLM call; a failed generation stores nothing.
    """

    if llm_client is None:
        raise LLMUnavailableError("LLM API token is not configured")

    svc = QuizGenerationService(
        llm_client=llm_client,
        store=store,
        request_id=getattr(request.state, "request_id", None),
    )
    quiz = await svc.generate(payload)
    return GenerateQuizOut(quiz=quiz)


@router.get(
    "/quiz/{quiz_id}",
    response_model=GenerateQuizOut,
    responses={404: {"model": ErrorOut}},
)
async def get_quiz(quiz_id: str, store: QuizStore = Depends(get_quiz_store)) -> GenerateQuizOut:
    return GenerateQuizOut(quiz=_lookup(store, quiz_id))


@router.get(
    "/quiz/{quiz_id}/export",
    response_class=PlainTextResponse,
    summary="Download a quiz with its answer key as plain text",
    responses={404: {"model": ErrorOut}},
)
async def export_quiz(
    quiz_id: str, store: QuizStore = Depends(get_quiz_store)
) -> PlainTextResponse:
    quiz = _lookup(store, quiz_id)
    return PlainTextResponse(
        content=format_quiz_as_plain_text(quiz),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(quiz)}"'},
    )


@router.get("/quizzes", response_model=QuizListOut)
async def list_quizzes(store: QuizStore = Depends(get_quiz_store)) -> QuizListOut:
    return QuizListOut(quizzes=store.list_quizzes())
