"""
Enumerations for Video Analyst data models.

All enums are closed sets - no values outside these sets are permitted.
"""

from enum import Enum


class Role(str, Enum):
    """Author of a conversation message, as understood by chat backends."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class AttemptOutcome(str, Enum):
    """
    Result of a single backend call attempt.

    CANCELLED is only ever logged: a cancelled attempt propagates
    asyncio.CancelledError instead of being retried.
    """

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
