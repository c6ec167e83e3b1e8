"""Unit tests: quiz synthesis output validation."""

from __future__ import annotations

import asyncio
import json

import pytest

from app.domain.exceptions import QuizGenerationError
from app.quizzes.prompt import difficulty_instruction
from app.quizzes.synthesis import (
    COUNT_MISMATCH,
    MALFORMED,
    NO_QUESTIONS,
    PARSE_FAILED,
    build_quiz_draft,
    synthesize_quiz,
)
from tests.quizzes._helpers import VALID_TOPIC, ScriptedLLMClient, quiz_payload


def _draft(raw: str, **kwargs):
    return build_quiz_draft(
        raw=raw,
        topic=kwargs.get("topic", VALID_TOPIC),
        difficulty_mode=kwargs.get("difficulty_mode", "mixed"),
        default_audience=kwargs.get("default_audience", "99 Group employees"),
    )


def test_well_formed_payload_becomes_draft() -> None:
    draft = _draft(json.dumps(quiz_payload(count=4)), difficulty_mode="hard")

    assert draft.topic == VALID_TOPIC
    assert draft.difficulty_mode == "hard"
    assert draft.number_of_questions == 4
    assert draft.audience == "Property agents"
    assert draft.questions[0].type == "case_study"
    assert draft.questions[0].scenario == "A buyer asks about sinking funds."
    assert draft.questions[1].scenario is None
    assert draft.answers[2].correct_answer == "B"
    assert draft.answers[2].learning_note == "Learning note 3"


def test_number_of_questions_reflects_generated_count_not_requested() -> None:
    # The prompt asked for 10; the model returned 3 consistent pairs.
    draft = _draft(json.dumps(quiz_payload(count=3)))
    assert draft.number_of_questions == 3


def test_invalid_json_raises_parse_error() -> None:
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft('{"learningObjective": "x", "questions": [')
    assert excinfo.value.message == PARSE_FAILED


def test_top_level_array_raises_parse_error() -> None:
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft(json.dumps([quiz_payload()]))
    assert excinfo.value.message == PARSE_FAILED


def test_fenced_json_is_accepted() -> None:
    draft = _draft("```json\n" + json.dumps(quiz_payload()) + "\n```")
    assert draft.number_of_questions == 3


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.pop("learningObjective"),
        lambda p: p["questions"][0]["options"].pop(),
        lambda p: p["questions"][0].update(type="true_false"),
        lambda p: p["questions"][1].update(difficulty="expert"),
        lambda p: p["answers"][0].update(correctAnswer="E"),
        lambda p: p["answers"][0].pop("explanation"),
        lambda p: p.update(questions="not a list"),
        lambda p: p["questions"][0].update(id="1"),
        lambda p: p["answers"][0].update(questionId="1"),
    ],
)
def test_schema_violations_raise_malformed(mutate) -> None:
    payload = quiz_payload()
    mutate(payload)
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft(json.dumps(payload))
    assert excinfo.value.message == MALFORMED


def test_empty_output_is_reported_as_malformed() -> None:
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft("")
    assert excinfo.value.message == MALFORMED


def test_question_answer_count_mismatch_raises() -> None:
    payload = quiz_payload(count=3)
    payload["answers"].pop()
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft(json.dumps(payload))
    assert excinfo.value.message == COUNT_MISMATCH


def test_zero_questions_raises() -> None:
    with pytest.raises(QuizGenerationError) as excinfo:
        _draft(json.dumps(quiz_payload(count=0)))
    assert excinfo.value.message == NO_QUESTIONS


def test_missing_references_default_to_empty_list() -> None:
    payload = quiz_payload()
    del payload["answers"][0]["references"]
    draft = _draft(json.dumps(payload))
    assert draft.answers[0].references == []


def test_blank_objective_and_audience_fall_back() -> None:
    payload = quiz_payload(learningObjective="", audience="")
    draft = _draft(json.dumps(payload), default_audience="Leasing team")
    assert draft.learning_objective == f"Learn about {VALID_TOPIC}"
    assert draft.audience == "Leasing team"


def test_missing_audience_falls_back() -> None:
    payload = quiz_payload()
    del payload["audience"]
    draft = _draft(json.dumps(payload))
    assert draft.audience == "99 Group employees"


def test_difficulty_instruction() -> None:
    assert "mix of easy, medium, and hard" in difficulty_instruction("mixed")
    assert difficulty_instruction("hard") == "Generate all questions at hard difficulty level."


def test_synthesize_quiz_prompt_carries_request_parameters() -> None:
    llm = ScriptedLLMClient(json.dumps(quiz_payload()))

    draft = asyncio.run(
        synthesize_quiz(
            llm=llm,
            topic=VALID_TOPIC,
            number_of_questions=7,
            difficulty_mode="easy",
            audience="Property agents",
            max_tokens=8192,
        )
    )

    assert draft.difficulty_mode == "easy"
    call = llm.calls[0]
    assert call["max_tokens"] == 8192
    assert "NUMBER OF QUESTIONS: 7" in call["user_prompt"]
    assert "Generate all questions at easy difficulty level." in call["user_prompt"]
    assert VALID_TOPIC in call["user_prompt"]
    assert "valid JSON" in call["system_prompt"]
