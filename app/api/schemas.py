from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="`ok` means the API process is up. The LLM is not contacted.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Error body shared by every non-2xx response of the quiz API."""

    error: str = Field(description="Short error category.", examples=["Invalid topic"])
    message: str | None = Field(
        default=None,
        description="Human-readable explanation, safe to show to end users.",
        examples=["The topic is too vague. Please name a specific property market or process."],
    )
    details: dict[str, list[str]] | None = Field(
        default=None,
        description="Field name -> validation messages (request validation failures only).",
        examples=[{"topic": ["String should have at least 5 characters"]}],
    )
