"""
Retry and fallback exceptions.

RetryExhausted is recovered by the fallback orchestrator (next backend).
AllBackendsExhausted is the only terminal generation failure callers see.
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from video_analyst.llm.exceptions import BackendError
    from video_analyst.retry.metadata import Attempt


class RetryExhausted(Exception):
    """
    Raised when one backend's full retry budget has been spent.

    Attributes:
        backend: Model identifier whose attempts all failed
        last_error: Error from the final attempt
        attempts: Attempt history for this backend, in order
    """

    def __init__(
        self,
        backend: str,
        last_error: "BackendError",
        attempts: Sequence["Attempt"] = (),
    ) -> None:
        self.backend = backend
        self.last_error = last_error
        self.attempts = tuple(attempts)

        super().__init__(
            f"Backend {backend} failed after {len(self.attempts)} attempts. "
            f"Last error: {last_error}"
        )


class AllBackendsExhausted(Exception):
    """
    Raised when every configured backend has exhausted its retries.

    Attributes:
        last_error: Last underlying error of the last backend tried
        exhausted: RetryExhausted of each backend, in priority order
    """

    def __init__(
        self,
        last_error: Optional["BackendError"],
        exhausted: Sequence[RetryExhausted] = (),
    ) -> None:
        self.last_error = last_error
        self.exhausted = tuple(exhausted)
        self.message = f"All models and retries failed. Last error: {last_error}"
        self.details = {
            "backends": [e.backend for e in self.exhausted],
            "total_attempts": sum(len(e.attempts) for e in self.exhausted),
            "last_error_type": type(last_error).__name__ if last_error else None,
        }

        super().__init__(self.message)


class GenerationCancelled(Exception):
    """
    Raised when a caller-imposed deadline cancels an in-flight generation.

    The pending backoff wait or backend call is aborted; no further
    attempt or backend is tried.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        self.message = f"Generation cancelled after {timeout_seconds}s"
        self.details = {"timeout_seconds": timeout_seconds}
        super().__init__(self.message)
