from __future__ import annotations

import pytest

_LLM_ENV_VARS = (
    "LLM_API_KEY",
    "GITHUB_TOKEN",
    "OPENAI_API_KEY",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
)


@pytest.fixture(autouse=True)
def _isolate_llm_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    # A developer's real token must never reach a test; routes that need a client get a fake.
    for name in _LLM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
