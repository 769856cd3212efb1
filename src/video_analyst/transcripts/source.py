"""
Transcript source interface.

Captions are fetched by TranscriptSource implementations: YouTube in
production (youtube.py), a mapping for local runs and tests. A source must raise
TranscriptNotFoundError instead of returning an empty transcript.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from video_analyst.models.transcript import TranscriptSegment


class TranscriptNotFoundError(Exception):
    """Raised when no transcript exists for a video reference."""

    def __init__(self, video_ref: str, reason: str = "No transcript available"):
        self.video_ref = video_ref
        self.message = f"{reason} for video {video_ref!r}"
        self.details = {"video_ref": video_ref}
        super().__init__(self.message)


class TranscriptSourceError(Exception):
    """Raised when the transcript provider fails for reasons other than a missing transcript."""

    def __init__(self, video_ref: str, message: str, cause: Optional[BaseException] = None):
        self.video_ref = video_ref
        self.message = message
        self.cause = cause
        self.details = {
            "video_ref": video_ref,
            "error_type": type(cause).__name__ if cause else None,
        }
        super().__init__(message)


class TranscriptSource(ABC):
    """Produces the ordered caption segments of a video."""

    @abstractmethod
    async def fetch(self, video_ref: str) -> list[TranscriptSegment]:
        """
        Fetch the transcript of a video.

        Args:
            video_ref: Video URL or identifier

        Returns:
            Non-empty list of segments ordered by offset

        Raises:
            TranscriptNotFoundError: No transcript exists for video_ref
            TranscriptSourceError: The provider failed for another reason
        """
        pass


class InMemoryTranscriptSource(TranscriptSource):
    """Transcript source backed by a mapping, for local runs and tests."""

    def __init__(self, transcripts: Mapping[str, Sequence[TranscriptSegment]] | None = None):
        self._transcripts = {k: list(v) for k, v in (transcripts or {}).items()}

    async def fetch(self, video_ref: str) -> list[TranscriptSegment]:
        segments = self._transcripts.get(video_ref)
        if not segments:
            raise TranscriptNotFoundError(video_ref)
        return list(segments)
