from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # LLM_TEMPERATURE=null omits the parameter for models that reject it.
        env_parse_none_str="null",
    )

    app_name: str = "property-quiz-generator"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # LLM integration (any OpenAI-compatible chat-completions endpoint)
    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "LLM_API_KEY",
            "GITHUB_TOKEN",
            "OPENAI_API_KEY",
            "llm_api_key",
        ),
        description="Bearer token for the LLM API (required for /api/quiz/generate).",
    )
    llm_base_url: str = Field(
        default="https://models.github.ai/inference",
        validation_alias=AliasChoices("LLM_BASE_URL", "OPENAI_BASE_URL", "llm_base_url"),
        description="Base URL of the chat-completions API (GitHub Models by default).",
    )
    llm_model: str = Field(
        default="openai/gpt-4o",
        validation_alias=AliasChoices("LLM_MODEL", "OPENAI_MODEL", "llm_model"),
        description="Model identifier used for both the topic gate and quiz synthesis.",
    )
    llm_timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "llm_timeout_seconds"),
        description="Timeout for a single LLM request (seconds). Quiz synthesis is slow.",
    )
    llm_temperature: float | None = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("LLM_TEMPERATURE", "llm_temperature"),
        description="Sampling temperature; 0 keeps generation deterministic.",
    )
    llm_json_response_format: bool = Field(
        default=True,
        validation_alias=AliasChoices("LLM_JSON_RESPONSE_FORMAT", "llm_json_response_format"),
        description="Send response_format=json_object. Disable for endpoints that reject it.",
    )
    topic_gate_max_tokens: int = Field(
        default=256,
        ge=16,
        validation_alias=AliasChoices("TOPIC_GATE_MAX_TOKENS", "topic_gate_max_tokens"),
        description="Completion token cap for the topic classification call.",
    )
    quiz_max_tokens: int = Field(
        default=8192,
        ge=512,
        validation_alias=AliasChoices("QUIZ_MAX_TOKENS", "quiz_max_tokens"),
        description="Completion token cap for the quiz synthesis call.",
    )

    # Quiz content
    quiz_audience: str = Field(
        default="99 Group employees",
        min_length=1,
        validation_alias=AliasChoices("QUIZ_AUDIENCE", "quiz_audience"),
        description="Audience stated in prompts and used when the model omits one.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
