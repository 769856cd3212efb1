"""
Per-backend retry policy with exponential backoff.

A bounded loop of strictly sequential attempts against one backend. After
failed attempt k (0-indexed) the policy waits initial_delay * 2**k before
the next one; there is no wait after the final attempt and no jitter.

Waits use asyncio.sleep, so they suspend only the calling task. If that
task is cancelled mid-wait the CancelledError propagates straight out:
no further attempt is made.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

import structlog

from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.exceptions import BackendError
from video_analyst.models.enums import AttemptOutcome
from video_analyst.models.messages import BackendIdentifier, Conversation
from video_analyst.monitoring.metrics import backend_attempts_total
from video_analyst.retry.exceptions import RetryExhausted
from video_analyst.retry.metadata import Attempt

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY = 1.0  # seconds


def backoff_delay(initial_delay: float, attempt_index: int) -> float:
    """Delay to wait after failed attempt `attempt_index` (0-based)."""
    return initial_delay * (2 ** attempt_index)


class RetryPolicy:
    """
    Retry one backend up to max_attempts times.

    Attributes:
        client: Backend client performing the actual I/O
        max_attempts: Default attempt budget per backend
        initial_delay: Default first backoff, in seconds
    """

    def __init__(
        self,
        client: BaseBackendClient,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize retry policy.

        Args:
            client: Backend client
            max_attempts: Attempts per backend (>= 1)
            initial_delay: Backoff before the second attempt, in seconds
            sleep: Awaitable sleep function (defaults to asyncio.sleep)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if initial_delay < 0:
            raise ValueError("initial_delay must be >= 0")

        self.client = client
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self._sleep: SleepFunc = sleep or asyncio.sleep

    async def with_retries(
        self,
        backend: BackendIdentifier,
        messages: Conversation,
        max_attempts: Optional[int] = None,
        initial_delay: Optional[float] = None,
    ) -> str:
        """
        Call the backend until it succeeds or the attempt budget is spent.

        Args:
            backend: Model identifier
            messages: Conversation to send (re-sent unchanged on every attempt)
            max_attempts: Override the policy's attempt budget
            initial_delay: Override the policy's first backoff (seconds)

        Returns:
            Generated text from the first successful attempt

        Raises:
            RetryExhausted: Every attempt failed; carries the last BackendError
            asyncio.CancelledError: The calling task was cancelled
        """
        max_attempts = self.max_attempts if max_attempts is None else max_attempts
        initial_delay = self.initial_delay if initial_delay is None else initial_delay
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        attempts: list[Attempt] = []
        last_error: Optional[BackendError] = None

        for attempt_index in range(max_attempts):
            logger.info(
                "Attempting generation",
                backend=backend,
                attempt=attempt_index,
                max_attempts=max_attempts,
            )

            start_time = time.perf_counter()
            try:
                content = await self.client.call(backend, messages)
            except BackendError as e:
                last_error = e
                attempts.append(
                    Attempt(
                        backend=backend,
                        attempt_index=attempt_index,
                        outcome=AttemptOutcome.FAILURE,
                        latency_ms=_elapsed_ms(start_time),
                        error=str(e),
                    )
                )
                backend_attempts_total.labels(
                    backend=backend, outcome=AttemptOutcome.FAILURE.value
                ).inc()
            except asyncio.CancelledError:
                self._log_cancelled(backend, attempt_index, phase="call")
                raise
            else:
                attempts.append(
                    Attempt(
                        backend=backend,
                        attempt_index=attempt_index,
                        outcome=AttemptOutcome.SUCCESS,
                        latency_ms=_elapsed_ms(start_time),
                    )
                )
                backend_attempts_total.labels(
                    backend=backend, outcome=AttemptOutcome.SUCCESS.value
                ).inc()
                logger.info(
                    "Generation succeeded",
                    backend=backend,
                    attempt=attempt_index,
                    latency_ms=attempts[-1].latency_ms,
                )
                return content

            if attempt_index < max_attempts - 1:
                delay = backoff_delay(initial_delay, attempt_index)
                logger.warning(
                    f"Attempt {attempt_index + 1}/{max_attempts} failed for backend {backend}",
                    backend=backend,
                    attempt=attempt_index,
                    error=str(last_error),
                    error_type=type(last_error).__name__,
                    backoff_seconds=delay,
                )
                try:
                    await self._sleep(delay)
                except asyncio.CancelledError:
                    self._log_cancelled(backend, attempt_index, phase="backoff")
                    raise
            else:
                logger.error(
                    f"Final attempt {attempt_index + 1}/{max_attempts} failed for backend {backend}",
                    backend=backend,
                    attempt=attempt_index,
                    error=str(last_error),
                    error_type=type(last_error).__name__,
                )

        raise RetryExhausted(backend=backend, last_error=last_error, attempts=attempts)

    @staticmethod
    def _log_cancelled(backend: str, attempt_index: int, phase: str) -> None:
        backend_attempts_total.labels(
            backend=backend, outcome=AttemptOutcome.CANCELLED.value
        ).inc()
        logger.warning(
            "Generation cancelled",
            backend=backend,
            attempt=attempt_index,
            phase=phase,
        )


def _elapsed_ms(start_time: float) -> int:
    return max(0, int((time.perf_counter() - start_time) * 1000))
