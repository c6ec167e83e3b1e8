"""Unit tests for the chat-completions client, using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.core.llm.deps import get_llm_client
from app.core.llm.openai_client import LLMConfig, LLMUpstreamError, OpenAIClient


def _client(
    handler, *, json_response_format: bool = True, temperature: float | None = 0.0
) -> OpenAIClient:
    config = LLMConfig(
        api_key="test-token",
        base_url="https://llm.example.test/inference/",
        model="openai/gpt-4o",
        timeout_seconds=5.0,
        json_response_format=json_response_format,
        temperature=temperature,
    )
    return OpenAIClient(config=config, transport=httpx.MockTransport(handler))


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _run(client: OpenAIClient, **kwargs) -> str:
    return asyncio.run(
        client.complete(system_prompt="system", user_prompt="user", **kwargs)
    )


def test_complete_posts_chat_request_and_returns_content() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('{"isValid": true}'))

    content = _run(_client(handler), max_tokens=256)

    assert content == '{"isValid": true}'
    assert seen["url"] == "https://llm.example.test/inference/chat/completions"
    assert seen["auth"] == "Bearer test-token"
    body = seen["body"]
    assert body["model"] == "openai/gpt-4o"
    assert body["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "user"},
    ]
    assert body["temperature"] == 0
    assert body["response_format"] == {"type": "json_object"}
    assert body["max_completion_tokens"] == 256


def test_optional_request_parameters_can_be_omitted() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("{}"))

    _run(_client(handler, json_response_format=False, temperature=None))

    assert "response_format" not in seen["body"]
    assert "temperature" not in seen["body"]
    assert "max_completion_tokens" not in seen["body"]


def test_null_content_becomes_empty_string() -> None:
    content = _run(_client(lambda request: httpx.Response(200, json=_completion(None))))
    assert content == ""


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(401, json={"error": "bad token"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, json=_completion({"nested": "object"})),
    ],
)
def test_bad_upstream_responses_raise_upstream_error(response: httpx.Response) -> None:
    with pytest.raises(LLMUpstreamError):
        _run(_client(lambda request: response))


def test_transport_errors_raise_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LLMUpstreamError, match="request failed"):
        _run(_client(handler))


def test_timeouts_raise_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(LLMUpstreamError, match="timed out"):
        _run(_client(handler))


def test_dependency_returns_none_without_token() -> None:
    assert get_llm_client() is None


def test_dependency_builds_client_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from app.core.settings import get_settings

    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("LLM_MODEL", "openai/gpt-4o-mini")
    get_settings.cache_clear()

    client = get_llm_client()
    assert isinstance(client, OpenAIClient)
    assert client._config.model == "openai/gpt-4o-mini"
    assert client._config.temperature == 0.0


def test_temperature_null_disables_the_parameter(monkeypatch: pytest.MonkeyPatch) -> None:
    from app.core.settings import get_settings

    monkeypatch.setenv("LLM_API_KEY", "test-token")
    monkeypatch.setenv("LLM_TEMPERATURE", "null")
    get_settings.cache_clear()

    client = get_llm_client()
    assert client is not None
    assert client._config.temperature is None
