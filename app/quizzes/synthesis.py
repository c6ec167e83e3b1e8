from __future__ import annotations

from pydantic import ValidationError

from app.domain.exceptions import QuizGenerationError
from app.quizzes.llm_output import parse_json_object
from app.quizzes.prompt import build_quiz_prompts
from app.quizzes.schemas import DifficultyMode, QuizDraft, _LLMQuizJSON
from app.quizzes.topic_gate import LLMClient

PARSE_FAILED = "Failed to parse quiz response from AI. Please try again."
MALFORMED = "Generated quiz data is malformed. Please try again with a different topic."
COUNT_MISMATCH = "Generated quiz has mismatched questions and answers. Please try again."
NO_QUESTIONS = "No questions were generated. Please try a more specific topic."


def build_quiz_draft(
    *,
    raw: str,
    topic: str,
    difficulty_mode: DifficultyMode,
    default_audience: str,
) -> QuizDraft:
    """
    Validate raw synthesis output and turn it into a storable draft.

    Checks run in order: JSON parse, schema, question/answer parity, non-empty.
    `number_of_questions` reflects what the model produced, not what was requested.
    """

    try:
        payload = parse_json_object(raw)
    except ValueError as exc:
        raise QuizGenerationError(PARSE_FAILED) from exc

    try:
        parsed = _LLMQuizJSON.model_validate(payload)
    except ValidationError as exc:
        raise QuizGenerationError(MALFORMED) from exc

    if len(parsed.questions) != len(parsed.answers):
        raise QuizGenerationError(COUNT_MISMATCH)
    if not parsed.questions:
        raise QuizGenerationError(NO_QUESTIONS)

    return QuizDraft(
        topic=topic,
        learning_objective=parsed.learning_objective or f"Learn about {topic}",
        audience=parsed.audience or default_audience,
        number_of_questions=len(parsed.questions),
        difficulty_mode=difficulty_mode,
        questions=parsed.questions,
        answers=parsed.answers,
    )


async def synthesize_quiz(
    *,
    llm: LLMClient,
    topic: str,
    number_of_questions: int,
    difficulty_mode: DifficultyMode,
    audience: str,
    max_tokens: int,
) -> QuizDraft:
    system_prompt, user_prompt = build_quiz_prompts(
        topic=topic,
        number_of_questions=number_of_questions,
        difficulty_mode=difficulty_mode,
        audience=audience,
    )
    raw = await llm.complete(
        system_prompt=system_prompt, user_prompt=user_prompt, max_tokens=max_tokens
    )
    return build_quiz_draft(
        raw=raw, topic=topic, difficulty_mode=difficulty_mode, default_audience=audience
    )
