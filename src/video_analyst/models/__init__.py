"""
Pydantic data models for the Video Analyst generation layer.

Includes:
- Enums (Role, AttemptOutcome)
- Conversation models (Message, BackendIdentifier)
- Transcript models (TranscriptSegment, TranscriptEntry)
- Output models (Topic, Citation, ChatAnswer, VideoAnalysis)
"""

from video_analyst.models.enums import AttemptOutcome, Role
from video_analyst.models.messages import BackendIdentifier, Conversation, Message
from video_analyst.models.output_models import (
    ChatAnswer,
    Citation,
    Topic,
    VideoAnalysis,
)
from video_analyst.models.transcript import TranscriptEntry, TranscriptSegment

__all__ = [
    # Enums
    "Role",
    "AttemptOutcome",
    # Conversation
    "Message",
    "Conversation",
    "BackendIdentifier",
    # Transcript
    "TranscriptSegment",
    "TranscriptEntry",
    # Output
    "Topic",
    "Citation",
    "ChatAnswer",
    "VideoAnalysis",
]
