from __future__ import annotations

from typing import Protocol

from app.quizzes.llm_output import parse_json_object
from app.quizzes.prompt import build_topic_gate_prompts
from app.quizzes.schemas import TopicVerdict

UNPARSEABLE_VERDICT_REASON = (
    "Unable to validate topic. Please try again with a clearer property industry topic."
)


class LLMClient(Protocol):
    async def complete(
        self, *, system_prompt: str, user_prompt: str, max_tokens: int | None = None
    ) -> str: ...


def interpret_topic_verdict(raw: str) -> TopicVerdict:
    """
    Turn the classifier's raw output into a verdict.

    Anything short of a JSON object with `isValid` set to boolean true is a rejection:
    "true", 1 and a missing key all count as invalid. `reason` is kept only if it is a string.
    """

    try:
        result = parse_json_object(raw)
    except ValueError:
        return TopicVerdict(is_valid=False, reason=UNPARSEABLE_VERDICT_REASON)

    reason = result.get("reason")
    return TopicVerdict(
        is_valid=result.get("isValid") is True,
        reason=reason if isinstance(reason, str) else None,
    )


async def validate_topic(*, llm: LLMClient, topic: str, max_tokens: int) -> TopicVerdict:
    """Ask the model whether `topic` is a specific property-industry topic.

    LLM transport errors propagate; only the model's answer is interpreted here.
    """

    system_prompt, user_prompt = build_topic_gate_prompts(topic=topic)
    raw = await llm.complete(
        system_prompt=system_prompt, user_prompt=user_prompt, max_tokens=max_tokens
    )
    return interpret_topic_verdict(raw)
