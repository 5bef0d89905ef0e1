"""
Pytest configuration and shared fixtures for LLM Relay API tests.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from llm_relay.config import Settings
from llm_relay.main import create_app
from llm_relay.services import ContextStore
from llm_relay.utils.relay_logger import RelayLogger


class FakeUpstream:
    """Records outbound requests and answers with a canned response"""

    def __init__(self, status_code=200, body=None, exc=None):
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "logs" / "server.log"


@pytest.fixture
def test_settings(log_file):
    """Create test settings independent of the developer's environment."""
    return Settings(
        llm_provider="openai",
        openai_api_key="sk-test",
        anthropic_api_key="ak-test",
        upstream_timeout=None,
        debug=False,
        log_file=str(log_file),
    )


@pytest.fixture
def anthropic_settings(test_settings):
    return test_settings.model_copy(update={"llm_provider": "anthropic"})


@pytest.fixture
def relay_logger(log_file):
    relay_logger = RelayLogger(str(log_file))
    yield relay_logger
    relay_logger.close()


@pytest.fixture
def openai_body():
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Try rewarding calm behavior."},
                "finish_reason": "stop"
            }
        ],
        "usage": {"prompt_tokens": 20, "completion_tokens": 6, "total_tokens": 26}
    }


@pytest.fixture
def anthropic_body():
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-haiku-20240307",
        "content": [{"type": "text", "text": "Short walks help with leash pulling."}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 20, "output_tokens": 8}
    }


@pytest.fixture
def chat_payload():
    return {
        "systemPrompt": "You are a dog behavior expert.",
        "messages": [{"role": "user", "content": "Why does my dog bark at night?"}],
        "temperature": 0.2,
        "max_tokens": 64
    }


@pytest.fixture
def make_client(relay_logger):
    """Build a TestClient around a freshly wired app."""
    def _make(settings, upstream=None, context_store=None):
        app = create_app(
            settings,
            context_store=context_store if context_store is not None else ContextStore(),
            relay_logger=relay_logger,
            transport=upstream.transport if upstream else None,
        )
        return TestClient(app)
    return _make
