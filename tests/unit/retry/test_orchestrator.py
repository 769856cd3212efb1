"""
Unit tests for ModelFallbackOrchestrator.

Tests priority order, first-success-wins and full exhaustion.
"""

import asyncio

import pytest

from video_analyst.llm.exceptions import BackendError, BackendTimeoutError
from video_analyst.retry.exceptions import AllBackendsExhausted
from video_analyst.retry.orchestrator import ModelFallbackOrchestrator
from video_analyst.retry.policy import RetryPolicy


def build_orchestrator(client, backends, fake_sleep, max_attempts=3):
    policy = RetryPolicy(client, max_attempts=max_attempts, initial_delay=1.0, sleep=fake_sleep)
    return ModelFallbackOrchestrator(backends, policy)


# ============================================================================
# Initialization
# ============================================================================


def test_requires_at_least_one_backend(scripted_client, fake_sleep):
    with pytest.raises(ValueError):
        build_orchestrator(scripted_client({}), [], fake_sleep)


def test_from_settings_uses_configured_order(scripted_client, test_settings):
    orchestrator = ModelFallbackOrchestrator.from_settings(scripted_client({}), test_settings)

    assert orchestrator.backends == ("model-a", "model-b", "model-c")
    assert orchestrator.retry_policy.max_attempts == 3
    assert orchestrator.retry_policy.initial_delay == 1.0


# ============================================================================
# Success Scenarios
# ============================================================================


@pytest.mark.asyncio
async def test_first_backend_success_skips_the_rest(scripted_client, fake_sleep, messages):
    client = scripted_client({
        "model-a": ["from a"],
        "model-b": ["from b"],
    })
    orchestrator = build_orchestrator(client, ["model-a", "model-b"], fake_sleep)

    assert await orchestrator.generate(messages) == "from a"
    assert client.calls == ["model-a"]


@pytest.mark.asyncio
async def test_falls_back_after_full_retry_budget(
    scripted_client, fake_sleep, recorded_sleeps, messages
):
    """Test that backend B is only tried after A spent all its attempts."""
    client = scripted_client({
        "model-a": [BackendError("quota", backend="model-a")],
        "model-b": ["from b"],
        "model-c": ["from c"],
    })
    orchestrator = build_orchestrator(client, ["model-a", "model-b", "model-c"], fake_sleep)

    result = await orchestrator.generate(messages)

    assert result == "from b"
    assert client.calls == ["model-a", "model-a", "model-a", "model-b"]
    assert recorded_sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_success_on_retry_of_later_backend(scripted_client, fake_sleep, messages):
    client = scripted_client({
        "model-a": [BackendError("down", backend="model-a")],
        "model-b": [BackendError("blip", backend="model-b"), "from b"],
        "model-c": ["from c"],
    })
    orchestrator = build_orchestrator(client, ["model-a", "model-b", "model-c"], fake_sleep, max_attempts=2)

    assert await orchestrator.generate(messages) == "from b"
    assert "model-c" not in client.calls


# ============================================================================
# Exhaustion
# ============================================================================


@pytest.mark.asyncio
async def test_all_backends_exhausted_reports_last_error(scripted_client, fake_sleep, messages):
    last = BackendTimeoutError("timeout", backend="model-c")
    client = scripted_client({
        "model-a": [BackendError("a down", backend="model-a")],
        "model-b": [BackendError("b down", backend="model-b")],
        "model-c": [BackendError("c first", backend="model-c"), last],
    })
    orchestrator = build_orchestrator(client, ["model-a", "model-b", "model-c"], fake_sleep, max_attempts=2)

    with pytest.raises(AllBackendsExhausted) as exc_info:
        await orchestrator.generate(messages)

    exc = exc_info.value
    assert exc.last_error is last
    assert [e.backend for e in exc.exhausted] == ["model-a", "model-b", "model-c"]
    assert exc.details["total_attempts"] == 6
    assert exc.details["last_error_type"] == "BackendTimeoutError"
    assert client.calls == ["model-a", "model-a", "model-b", "model-b", "model-c", "model-c"]


@pytest.mark.asyncio
async def test_empty_conversation_rejected_before_any_call(scripted_client, fake_sleep):
    client = scripted_client({"model-a": ["unused"]})
    orchestrator = build_orchestrator(client, ["model-a"], fake_sleep)

    with pytest.raises(ValueError):
        await orchestrator.generate([])

    assert client.calls == []


# ============================================================================
# Concurrency
# ============================================================================


@pytest.mark.asyncio
async def test_backoff_does_not_block_other_requests(scripted_client, messages):
    """A request stuck in backoff must not delay an independent request."""
    client = scripted_client({
        "slow": [BackendError("down", backend="slow")],
        "fast": ["from fast"],
    })
    slow = ModelFallbackOrchestrator(["slow"], RetryPolicy(client, max_attempts=2, initial_delay=60.0))
    fast = ModelFallbackOrchestrator(["fast"], RetryPolicy(client, max_attempts=1))

    slow_task = asyncio.create_task(slow.generate(messages))
    try:
        result = await asyncio.wait_for(fast.generate(messages), timeout=1.0)
        assert result == "from fast"
        assert not slow_task.done()
    finally:
        slow_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await slow_task


@pytest.mark.asyncio
async def test_cancellation_is_not_treated_as_exhaustion(scripted_client, messages):
    """Cancelling mid-backoff must not move on to the next backend."""
    client = scripted_client({
        "model-a": [BackendError("down", backend="model-a")],
        "model-b": ["from b"],
    })
    orchestrator = ModelFallbackOrchestrator(
        ["model-a", "model-b"], RetryPolicy(client, max_attempts=3, initial_delay=60.0)
    )

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(orchestrator.generate(messages), timeout=0.05)

    assert client.calls == ["model-a"]
