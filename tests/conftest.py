from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from soul_relay.config import settings
from soul_relay.main import app
from soul_relay.services.relay_service import relay_service


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Prevent accidental network calls in unit tests by stubbing socket.create_connection."""

    import socket

    def fake_create_connection(*a, **k):
        raise RuntimeError("Network calls disabled in tests")

    monkeypatch.setattr(socket, "create_connection", fake_create_connection)


class FakeCompletions:
    """Records every create() call and returns a canned upstream payload."""

    def __init__(self):
        self.calls = []
        self.response = {"choices": [{"message": {"content": "hello"}}]}
        self.error = None

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeUpstream:
    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def upstream(monkeypatch):
    """Replace the relay's upstream client with an in-memory fake."""
    fake = FakeUpstream()
    monkeypatch.setattr(settings, "DEEPSEEK_API_KEY", "test-key")
    monkeypatch.setattr(relay_service, "_client", fake)
    return fake.completions


@pytest.fixture
def client():
    return TestClient(app)
