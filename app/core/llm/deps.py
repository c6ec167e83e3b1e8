from __future__ import annotations

from app.core.llm.openai_client import LLMConfig, OpenAIClient
from app.core.settings import get_settings


def get_llm_client() -> OpenAIClient | None:
    """
    Dependency provider for the chat-completions client.

    Returns None when no token is configured so the route can answer a clean 502
    instead of failing during dependency resolution.
    """

    settings = get_settings()
    if not settings.llm_api_key:
        return None

    config = LLMConfig(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        timeout_seconds=float(settings.llm_timeout_seconds),
        json_response_format=bool(settings.llm_json_response_format),
        temperature=settings.llm_temperature,
    )
    return OpenAIClient(config=config)
