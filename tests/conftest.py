from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List
from unittest.mock import Mock

import httpx
import openai
import pytest

from backend.app.config import Settings
from backend.app.services.completion_gateway import CompletionGateway

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def provider_error(status: int, message: str = "provider error") -> openai.APIStatusError:
    """A real SDK status error, as the client raises it."""
    request = httpx.Request("POST", OPENAI_URL)
    response = httpx.Response(status, request=request)
    classes = {
        401: openai.AuthenticationError,
        404: openai.NotFoundError,
        429: openai.RateLimitError,
    }
    cls = classes.get(status, openai.InternalServerError if status >= 500 else openai.APIStatusError)
    return cls(message, response=response, body=None)


def timeout_error() -> openai.APITimeoutError:
    return openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL))


def completion(content: Any = "Hello from the model") -> SimpleNamespace:
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="test-key")


@pytest.fixture
def fake_client() -> Mock:
    client = Mock()
    client.chat.completions.create.return_value = completion()
    return client


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def gateway(settings: Settings, fake_client: Mock, sleep: RecordingSleep) -> CompletionGateway:
    return CompletionGateway(settings, client=fake_client, sleep=sleep)
