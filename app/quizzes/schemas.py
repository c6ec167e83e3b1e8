from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DifficultyMode = Literal["mixed", "easy", "medium", "hard"]
DifficultyLevel = Literal["easy", "medium", "hard"]
QuestionType = Literal["multiple_choice", "case_study"]
OptionLetter = Literal["A", "B", "C", "D"]


class _CamelModel(BaseModel):
    """JSON field names are camelCase on the wire; attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuizConfig(_CamelModel):
    topic: str = Field(
        min_length=5,
        max_length=200,
        description="Property-industry topic the quiz should cover.",
        examples=["Strata title management in Singapore condominiums"],
    )
    number_of_questions: int = Field(
        default=10,
        strict=True,
        ge=3,
        le=20,
        description="Requested number of questions (the model may return a different count).",
        examples=[10],
    )
    difficulty_mode: DifficultyMode = Field(
        default="mixed",
        description="`mixed` spreads easy/medium/hard roughly evenly; otherwise one level.",
    )


class QuizOption(_CamelModel):
    letter: OptionLetter
    text: str


class QuizQuestion(_CamelModel):
    id: int = Field(strict=True)
    type: QuestionType
    difficulty: DifficultyLevel
    question: str
    scenario: str | None = Field(
        default=None, description="Case-study background; only set for case_study questions."
    )
    options: list[QuizOption] = Field(min_length=4, max_length=4)


class QuizAnswer(_CamelModel):
    question_id: int = Field(strict=True)
    correct_answer: OptionLetter
    explanation: str
    learning_note: str
    references: list[str] = Field(default_factory=list)


class QuizDraft(_CamelModel):
    """A validated quiz that has not been stored yet (no id, no timestamp)."""

    topic: str
    learning_objective: str
    audience: str
    number_of_questions: int
    difficulty_mode: DifficultyMode
    questions: list[QuizQuestion]
    answers: list[QuizAnswer]


class QuizOut(QuizDraft):
    id: str = Field(description="Quiz identifier (UUID4).")
    created_at: datetime = Field(description="Creation timestamp (UTC).")


class GenerateQuizOut(BaseModel):
    quiz: QuizOut


class QuizListOut(BaseModel):
    quizzes: list[QuizOut] = Field(description="Stored quizzes, newest first.")


class TopicVerdict(BaseModel):
    is_valid: bool
    reason: str | None = None


class _LLMQuizJSON(_CamelModel):
    """
    Internal schema for the quiz synthesis payload.

    Strict enums and exactly four options; extra keys are ignored.
    """

    learning_objective: str
    audience: str | None = None
    questions: list[QuizQuestion]
    answers: list[QuizAnswer]
