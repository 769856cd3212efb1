"""Unit test fixtures (fakes and stubs).

Provides a scripted backend client and a recording sleep so retry and
fallback behaviour can be tested without network or real waiting.
"""

from typing import Union

import pytest

from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.exceptions import BackendError


Outcome = Union[str, BaseException]


class ScriptedBackendClient(BaseBackendClient):
    """Backend client replaying a fixed list of outcomes per backend.

    Each outcome is either the text to return or an exception to raise.
    When a backend's script runs out, the last outcome repeats.
    """

    def __init__(self, script: dict[str, list[Outcome]]):
        super().__init__(base_url="http://scripted.test")
        self.script = {backend: list(outcomes) for backend, outcomes in script.items()}
        self.calls: list[str] = []

    async def call(self, backend, messages):
        if not messages:
            raise ValueError("Conversation must contain at least one message")
        index = sum(1 for b in self.calls if b == backend)
        self.calls.append(backend)
        outcomes = self.script.get(backend) or [BackendError("unknown backend", backend)]
        outcome = outcomes[min(index, len(outcomes) - 1)]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def scripted_client():
    """Factory fixture building a ScriptedBackendClient.

    Usage:
        def test_something(scripted_client):
            client = scripted_client({"model-a": ["{}"]})
    """
    return ScriptedBackendClient


@pytest.fixture
def recorded_sleeps():
    """List of delays passed to the fake sleep below."""
    return []


@pytest.fixture
def fake_sleep(recorded_sleeps):
    """Awaitable sleep that records the delay instead of waiting."""
    async def _sleep(delay: float) -> None:
        recorded_sleeps.append(delay)

    return _sleep
