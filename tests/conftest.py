"""
Shared fixtures for unit and integration tests.
"""
import json
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from rewriter.completion import CompletionClient
from rewriter.config import Settings
from rewriter.service import RewriteService


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same draw.

    ``choice`` is driven by the same draw, so 0.0 always picks the first candidate.
    """

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        openai_base_url="https://llm.test/v1",
        completion_timeout=2.0,
    )


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def always_fire():
    """Random source that fires every probabilistic branch."""
    return FixedRandom(value=0.0)


@pytest.fixture
def never_fire():
    """Random source that fires no probabilistic branch."""
    return FixedRandom(value=0.99)


@pytest.fixture
def completion_recorder():
    """Collects requests seen by the mock completion transport."""
    return []


@pytest.fixture
def make_transport(completion_recorder):
    """Build an httpx.MockTransport that answers like the chat completions API."""

    def _make(content="This is the rewritten text.", status_code=200, body=None):
        def handler(request: httpx.Request) -> httpx.Response:
            completion_recorder.append(json.loads(request.content))
            if body is not None:
                return httpx.Response(status_code, json=body)
            return httpx.Response(
                status_code,
                json={
                    "model": "gpt-4o-mini",
                    "choices": [
                        {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
                    ],
                },
            )

        return httpx.MockTransport(handler)

    return _make


@pytest.fixture
def mock_completion_client(test_settings, make_transport):
    return CompletionClient(test_settings, transport=make_transport())


@pytest.fixture
def rewrite_service(test_settings, mock_completion_client):
    return RewriteService(test_settings, completion_client=mock_completion_client)


@pytest.fixture
def test_client(rewrite_service):
    """FastAPI TestClient with the rewrite service swapped for a mocked one."""
    from rewriter.main import app, get_rewrite_service

    app.dependency_overrides[get_rewrite_service] = lambda: rewrite_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_request():
    return {
        "text": "However, it is important to utilize resources.",
        "anecdote1": "grew up in Ohio",
        "anecdote2": "loves hiking",
        "toneHint": "casual",
    }
