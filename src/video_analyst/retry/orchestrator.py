"""
Model fallback orchestrator.

Walks a fixed, ordered list of backend identifiers. Each backend gets its
full retry budget from RetryPolicy; the first success wins and no later
backend is called. Only when every backend is exhausted does the caller
see a failure (AllBackendsExhausted), carrying the last underlying error.

Worst-case latency is the sum of every backend's retry budget.
"""

import time
from typing import Optional, Sequence

import structlog

from video_analyst.config import Settings
from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.exceptions import BackendError
from video_analyst.models.messages import BackendIdentifier, Conversation
from video_analyst.monitoring.metrics import (
    backend_fallbacks_total,
    generation_exhausted_total,
)
from video_analyst.retry.exceptions import AllBackendsExhausted, RetryExhausted
from video_analyst.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)


class ModelFallbackOrchestrator:
    """
    Try backends in priority order until one succeeds.

    Attributes:
        backends: Backend identifiers, most preferred first (read-only)
        retry_policy: Per-backend retry policy
    """

    def __init__(self, backends: Sequence[BackendIdentifier], retry_policy: RetryPolicy):
        """
        Initialize orchestrator.

        Args:
            backends: Non-empty ordered list of model identifiers
            retry_policy: Retry policy wrapping the backend client
        """
        if not backends:
            raise ValueError("At least one backend must be configured")

        self.backends: tuple[BackendIdentifier, ...] = tuple(backends)
        self.retry_policy = retry_policy

        logger.info(
            "ModelFallbackOrchestrator initialized",
            backends=list(self.backends),
            max_attempts=retry_policy.max_attempts,
            initial_delay=retry_policy.initial_delay,
        )

    @classmethod
    def from_settings(
        cls, client: BaseBackendClient, settings: Settings
    ) -> "ModelFallbackOrchestrator":
        """Build the orchestrator and its retry policy from application settings."""
        policy = RetryPolicy(
            client,
            max_attempts=settings.MAX_ATTEMPTS,
            initial_delay=settings.INITIAL_RETRY_DELAY,
        )
        return cls(settings.BACKEND_MODELS, policy)

    async def generate(self, messages: Conversation) -> str:
        """
        Generate a reply, falling back across backends on exhaustion.

        Args:
            messages: Non-empty conversation

        Returns:
            Generated text from the first backend that succeeds

        Raises:
            ValueError: Empty conversation
            AllBackendsExhausted: Every backend spent its retry budget
            asyncio.CancelledError: The calling task was cancelled
        """
        if not messages:
            raise ValueError("Conversation must contain at least one message")

        messages = tuple(messages)
        start_time = time.perf_counter()
        exhausted: list[RetryExhausted] = []
        last_error: Optional[BackendError] = None

        logger.info("Starting generation with fallback models", backends=list(self.backends))

        for position, backend in enumerate(self.backends):
            try:
                content = await self.retry_policy.with_retries(backend, messages)
            except RetryExhausted as e:
                exhausted.append(e)
                last_error = e.last_error
                backend_fallbacks_total.labels(backend=backend).inc()
                remaining = len(self.backends) - position - 1
                logger.warning(
                    f"All retries failed for model {backend}"
                    + (", attempting next model" if remaining else ""),
                    backend=backend,
                    error=str(e.last_error),
                    remaining_backends=remaining,
                )
                continue

            logger.info(
                "Generated response",
                backend=backend,
                fallback_depth=position,
                total_latency_ms=int((time.perf_counter() - start_time) * 1000),
            )
            return content

        generation_exhausted_total.inc()
        error = AllBackendsExhausted(last_error=last_error, exhausted=exhausted)
        logger.error(
            "All models and retries exhausted",
            **error.details,
            last_error=str(last_error),
            total_latency_ms=int((time.perf_counter() - start_time) * 1000),
        )
        raise error
