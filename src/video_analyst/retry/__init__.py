"""
Retry policy and model fallback.

Two nested loops over one backend client:

1. **RetryPolicy**: Up to MAX_ATTEMPTS calls to one backend, with
   exponential backoff (initial_delay * 2**k) between them
2. **ModelFallbackOrchestrator**: Backends in priority order, first
   success wins; raises AllBackendsExhausted when every backend is spent

Main Components:
    - ModelFallbackOrchestrator: Entry point (generate)
    - RetryPolicy: Per-backend bounded retry loop
    - Attempt: Immutable record of one backend call
    - RetryExhausted / AllBackendsExhausted / GenerationCancelled

Usage:
    >>> from video_analyst.retry import ModelFallbackOrchestrator
    >>> orchestrator = ModelFallbackOrchestrator.from_settings(client, settings)
    >>> text = await orchestrator.generate(messages)
"""

from video_analyst.retry.exceptions import (
    AllBackendsExhausted,
    GenerationCancelled,
    RetryExhausted,
)
from video_analyst.retry.metadata import Attempt
from video_analyst.retry.orchestrator import ModelFallbackOrchestrator
from video_analyst.retry.policy import RetryPolicy, backoff_delay

__all__ = [
    "ModelFallbackOrchestrator",
    "RetryPolicy",
    "backoff_delay",
    "Attempt",
    "RetryExhausted",
    "AllBackendsExhausted",
    "GenerationCancelled",
]
