"""
Attempt tracking.

This module defines the Attempt dataclass recorded for every backend
call. Attempts are ephemeral: they feed logs and the exception history,
nothing is persisted.
"""

from dataclasses import dataclass
from typing import Optional

from video_analyst.models.enums import AttemptOutcome


@dataclass(frozen=True)
class Attempt:
    """
    One backend call attempt.

    Attributes:
        backend: Model identifier called
        attempt_index: 0-based position within this backend's retry budget
        outcome: success or failure
        latency_ms: Wall time of the call (ms)
        error: String form of the failure, if any
    """

    backend: str
    attempt_index: int
    outcome: AttemptOutcome
    latency_ms: int
    error: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate attempt invariants."""
        if self.attempt_index < 0:
            raise ValueError("attempt_index must be >= 0")

        if self.latency_ms < 0:
            raise ValueError("latency_ms must be >= 0")

        if self.outcome == AttemptOutcome.SUCCESS and self.error is not None:
            raise ValueError("successful attempt cannot carry an error")
