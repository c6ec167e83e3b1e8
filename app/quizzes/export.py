"""Plain-text rendering of a stored quiz, answer key included."""

from __future__ import annotations

import re

from app.quizzes.schemas import QuizOut

_RULE = "=" * 60
_SUBRULE = "-" * 40
_WHITESPACE = re.compile(r"\s+")


def _banner(title: str) -> list[str]:
    return [_RULE, title, _RULE, ""]


def format_quiz_as_plain_text(quiz: QuizOut) -> str:
    lines: list[str] = []

    lines += _banner("PROPERTY INDUSTRY QUIZ")

    lines += [
        "INTRODUCTION",
        _SUBRULE,
        f"Topic: {quiz.topic}",
        f"Learning Objective: {quiz.learning_objective}",
        f"Intended Audience: {quiz.audience}",
        f"Number of Questions: {quiz.number_of_questions}",
        f"Difficulty Mode: {quiz.difficulty_mode.capitalize()}",
        "",
    ]

    lines += _banner("QUIZ QUESTIONS")
    for index, question in enumerate(quiz.questions, start=1):
        case_study = " - CASE STUDY" if question.type == "case_study" else ""
        lines.append(f"QUESTION {index} [{question.difficulty.upper()}]{case_study}")
        lines.append(_SUBRULE)
        if question.scenario:
            lines += ["", "Scenario:", question.scenario, ""]
        lines += [question.question, ""]
        lines += [f"{option.letter}. {option.text}" for option in question.options]
        lines += ["", ""]

    questions_by_id = {q.id: q for q in quiz.questions}
    lines += _banner("ANSWER KEY & LEARNING SECTION")
    for answer in quiz.answers:
        question = questions_by_id.get(answer.question_id)
        correct_text = ""
        if question is not None:
            correct_text = next(
                (o.text for o in question.options if o.letter == answer.correct_answer), ""
            )

        lines += [
            f"QUESTION {answer.question_id}",
            _SUBRULE,
            f"Correct Answer: {answer.correct_answer}. {correct_text}",
            "",
            "Explanation:",
            answer.explanation,
            "",
            "Why This Matters (Practical Learning Note):",
            answer.learning_note,
        ]
        if answer.references:
            lines += ["", "References:"]
            lines += [f"{n}. {ref}" for n, ref in enumerate(answer.references, start=1)]
        lines += ["", ""]

    lines += [_RULE, "END OF QUIZ", _RULE, ""]
    lines += [
        "This quiz is for learning and assessment, not opinion or prediction.",
        "Accuracy, clarity, and relevance to the property industry are mandatory.",
        "",
        f"Generated: {quiz.created_at.strftime('%Y-%m-%d %H:%M:%S %Z')}",
    ]

    return "\n".join(lines)


def export_filename(quiz: QuizOut) -> str:
    slug = _WHITESPACE.sub("-", quiz.topic.lower())[:30]
    # Keep the header value ASCII and free of quotes/path separators.
    slug = re.sub(r"[^a-z0-9-]", "", slug) or "quiz"
    millis = int(quiz.created_at.timestamp() * 1000)
    return f"quiz-{slug}-{millis}.txt"
