import io

import pytest

from api.base_client import BaseAnswerClient
from config.config import Config
from models.fastgpt import FastGPTResponse, Reference


class FakeAnswerClient(BaseAnswerClient):
    """Answer client that records requests and replays a canned response or error."""

    def __init__(self, response: FastGPTResponse | None = None, error: Exception | None = None):
        super().__init__(api_key="test-api-key")
        self.response = response or FastGPTResponse(output="")
        self.error = error
        self.requests = []

    def query(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class TTYStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def config():
    """Config with a credential and caching disabled, independent of the process env."""
    return Config(kagi_api_key="test-api-key")


@pytest.fixture
def paris_response():
    return FastGPTResponse(
        output="Paris is the capital.",
        references=[Reference(title="Wiki", link="http://x", snippet="info")],
        tokens=42,
        meta={"id": "req-1", "api_balance": 9.5},
    )


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for testing."""
    env_vars = {
        "KAGI_API_KEY": "env-api-key",
        "KAGI_CACHE_DIR": "",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def fake_client_cls():
    return FakeAnswerClient


@pytest.fixture
def tty_stdin_cls():
    return TTYStringIO
