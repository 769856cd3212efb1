"""Transcript sources and timestamp formatting."""

from video_analyst.transcripts.formatting import format_timestamp, format_transcript
from video_analyst.transcripts.source import (
    InMemoryTranscriptSource,
    TranscriptNotFoundError,
    TranscriptSource,
    TranscriptSourceError,
)
from video_analyst.transcripts.youtube import YouTubeTranscriptSource, extract_video_id

__all__ = [
    "TranscriptSource",
    "InMemoryTranscriptSource",
    "YouTubeTranscriptSource",
    "TranscriptNotFoundError",
    "TranscriptSourceError",
    "extract_video_id",
    "format_timestamp",
    "format_transcript",
]
