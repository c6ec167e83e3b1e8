from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class LLMError(Exception):
    """Base error for LLM client failures (safe to map to 502)."""


class LLMUnavailableError(LLMError):
    """Raised when the LLM is not configured (e.g., missing API token)."""


class LLMUpstreamError(LLMError):
    """Raised when the LLM API fails or returns an unexpected envelope."""


@dataclass(frozen=True)
class LLMConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    json_response_format: bool = True
    temperature: float | None = 0.0


class OpenAIClient:
    """
    Minimal client for OpenAI-compatible chat-completions APIs (OpenAI, GitHub Models).

    - One attempt per call; no retries.
    - Returns the raw message content. Callers own JSON parsing because the topic
      gate and the quiz synthesizer treat unparseable output differently.
    - No logging here: prompts carry user input and completions carry quiz content.
    """

    def __init__(self, *, config: LLMConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    async def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if self._config.temperature is not None:
            payload["temperature"] = self._config.temperature
        if self._config.json_response_format:
            # Ask the API to enforce JSON output (still validated defensively).
            payload["response_format"] = {"type": "json_object"}
        if max_tokens is not None:
            payload["max_completion_tokens"] = max_tokens

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise LLMUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise LLMUpstreamError("LLM request failed") from exc

        if resp.status_code != 200:
            # Upstream bodies may echo the token or prompt; keep them out of the error.
            raise LLMUpstreamError(f"LLM service returned HTTP {resp.status_code}")

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise LLMUpstreamError("LLM response envelope was malformed") from exc

        if content is None:
            return ""
        if not isinstance(content, str):
            raise LLMUpstreamError("LLM message content must be a string")
        return content
