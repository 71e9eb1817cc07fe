import json

import httplib2
import pytest


class StubTextClient:
    """TextServiceClient stub that replays scripted outcomes.

    Each outcome is either a string (returned) or an exception (raised).
    Once the script runs out, `default` is used.
    """

    def __init__(self, outcomes=None, *, default=None, respond=None):
        self.prompts: list[str] = []
        self._outcomes = list(outcomes or [])
        self._default = default
        self._respond = respond

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._outcomes:
            outcome = self._outcomes.pop(0)
        elif self._respond is not None:
            outcome = self._respond(prompt)
        else:
            outcome = self._default
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def stub_client():
    """Fixture: factory for StubTextClient."""

    def _factory(outcomes=None, *, default="ok", respond=None):
        return StubTextClient(outcomes, default=default, respond=respond)

    return _factory


@pytest.fixture
def sleeps(monkeypatch):
    """Fixture: record retry delays instead of sleeping."""

    recorded: list[float] = []
    monkeypatch.setattr("legaldoc.llm._retry.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def as_http_error():
    """Fixture: factory for googleapiclient HttpError with a given status."""

    def _factory(*, status: int, message: str = ""):
        from googleapiclient.errors import HttpError

        content = json.dumps({"error": {"code": status, "message": message}})
        return HttpError(httplib2.Response({"status": status}), content.encode())

    return _factory
