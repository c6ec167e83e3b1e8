from __future__ import annotations

import copy
import json

from app.quizzes.schemas import DifficultyMode

_VALID_TOPIC_AREAS = (
    "Property market trends, updates, analysis",
    "Property agent skills, training, best practices",
    "Real estate transactions, processes, regulations",
    "Property valuation, pricing strategies",
    "Residential, commercial, industrial property",
    "Property investment, financing, mortgages",
    "Property laws, contracts, documentation",
    "Property marketing, sales techniques",
    "Property management, maintenance",
    "Urban development, zoning, land use",
    "Property technology (proptech)",
    "Regional property markets (Indonesia, Singapore, Malaysia, etc.)",
)

_INVALID_TOPIC_AREAS = (
    "Topics not related to property/real estate industry",
    'Too vague topics like just "property" or "real estate"',
    "Topics about specific individuals unless related to property industry",
    "Entertainment, sports, general news unrelated to property",
    "Personal advice or opinion-based topics",
)

# Shape shown to the model; the real contract lives in schemas._LLMQuizJSON.
_QUIZ_JSON_EXAMPLE = {
    "learningObjective": "string describing what the quiz teaches",
    "audience": "<audience>",
    "questions": [
        {
            "id": 1,
            "type": "multiple_choice | case_study",
            "difficulty": "easy | medium | hard",
            "question": "The question text",
            "scenario": "Optional scenario text for case studies only",
            "options": [
                {"letter": "A", "text": "Option A text"},
                {"letter": "B", "text": "Option B text"},
                {"letter": "C", "text": "Option C text"},
                {"letter": "D", "text": "Option D text"},
            ],
        }
    ],
    "answers": [
        {
            "questionId": 1,
            "correctAnswer": "A | B | C | D",
            "explanation": "Why this is correct",
            "learningNote": "Practical application in property work",
            "references": ["https://example.com/source1"],
        }
    ],
}


def build_topic_gate_prompts(*, topic: str) -> tuple[str, str]:
    """Create (system_prompt, user_prompt) for the topic classification call."""

    system_prompt = "\n".join(
        [
            "You are a topic validator for a property industry quiz generator. Your job is "
            "to determine if a topic is related to the property/real estate industry and is "
            "specific enough to generate a quiz.",
            "",
            "VALID topics include:",
            *(f"- {area}" for area in _VALID_TOPIC_AREAS),
            "",
            "INVALID topics include:",
            *(f"- {area}" for area in _INVALID_TOPIC_AREAS),
            "",
            'Respond with JSON in this format: { "isValid": boolean, "reason": string }',
            "If invalid, explain why briefly in the reason field.",
        ]
    )
    # json.dumps quotes and escapes the topic so it cannot close the quoted string.
    user_prompt = f"Topic: {json.dumps(topic, ensure_ascii=False)}"
    return system_prompt, user_prompt


def difficulty_instruction(difficulty_mode: DifficultyMode) -> str:
    if difficulty_mode == "mixed":
        return "Generate a mix of easy, medium, and hard questions (roughly equal distribution)."
    return f"Generate all questions at {difficulty_mode} difficulty level."


def build_quiz_prompts(
    *,
    topic: str,
    number_of_questions: int,
    difficulty_mode: DifficultyMode,
    audience: str,
) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for quiz synthesis.

    The system prompt stays fixed; everything request-specific goes in the user prompt.
    """

    system_prompt = (
        "You are an expert property industry knowledge quiz generator. You create factual, "
        "professional quizzes for corporate learning and assessment. Always respond with "
        "valid JSON."
    )

    example = copy.deepcopy(_QUIZ_JSON_EXAMPLE)
    example["audience"] = audience

    user_prompt = "\n".join(
        [
            "You are an automated quiz generation system for a leading property technology "
            "company in Southeast Asia.",
            "",
            "Generate a professional, factual, property-industry knowledge quiz based on the "
            "following topic:",
            "",
            f"TOPIC: {json.dumps(topic, ensure_ascii=False)}",
            f"NUMBER OF QUESTIONS: {number_of_questions}",
            f"DIFFICULTY MODE: {difficulty_mode}",
            difficulty_instruction(difficulty_mode),
            f"AUDIENCE: {audience}",
            "",
            "VALIDATION RULES (STRICT):",
            "- Do not speculate or make up facts",
            "- Do not use outdated information",
            "- All content must be factual and evidence-based",
            "- Align terminology with professional property industry standards",
            "- Focus on Indonesia/Southeast Asia context where relevant, but include global "
            "best practices",
            "",
            "QUIZ STRUCTURE:",
            "1. Provide a brief learning objective (1-2 sentences)",
            f"2. Generate {number_of_questions} questions using:",
            "   - Multiple choice questions (standard format)",
            '   - Scenario-based questions labeled as "case_study" (about 30% of questions)',
            "3. Each question must have exactly 4 options (A, B, C, D)",
            "4. For each question, provide:",
            "   - The correct answer",
            "   - A clear explanation",
            "   - A practical learning note (why this matters in real property work)",
            "   - 1-2 reference links to credible sources when possible",
            "",
            "Respond with JSON in this exact format:",
            json.dumps(example, indent=2, ensure_ascii=False),
        ]
    )

    return system_prompt, user_prompt
