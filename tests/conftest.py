"""Shared pytest fixtures.

Every test runs with the completion environment variables cleared and the
~/.env.local file disabled, so a developer's real token never leaks in.
"""

from typing import Any

import pytest

from completion_cli.config import Settings, get_settings

TEST_ENDPOINT = "https://api.test/v1/engines/demo/completions"
TEST_TOKEN = "test-token"

ENV_VARS = (
    "OPENAI_TOKEN",
    "DEBUG",
    "COMPLETION_ENDPOINT",
    "COMPLETION_TIMEOUT",
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Clear environment, disable the env file and reset the settings cache."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def completion_body() -> dict[str, Any]:
    """A typical successful completions API response."""
    return {
        "id": "cmpl-1",
        "object": "text_completion",
        "created": 1664000000,
        "model": "demo-model",
        "choices": [
            {"text": " world", "index": 0, "logprobs": None, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
    }


@pytest.fixture
def endpoint() -> str:
    return TEST_ENDPOINT


@pytest.fixture
def token() -> str:
    return TEST_TOKEN
