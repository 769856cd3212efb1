"""
YouTube transcript source.

Resolves a watch/short/embed URL or a bare 11-character video id and
fetches its captions with youtube-transcript-api. The library is
synchronous, so each fetch runs in a worker thread.
"""

import asyncio
import re
from typing import Optional, Sequence

import structlog
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from video_analyst.models.transcript import TranscriptSegment
from video_analyst.transcripts.source import (
    TranscriptNotFoundError,
    TranscriptSource,
    TranscriptSourceError,
)

logger = structlog.get_logger(__name__)

DEFAULT_LANGUAGES = ("en",)

_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")
_VIDEO_URL = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})",
    re.IGNORECASE,
)

# Provider answers meaning "this video has no usable transcript"
_MISSING_TRANSCRIPT = (TranscriptsDisabled, NoTranscriptFound, VideoUnavailable, InvalidVideoId)


def extract_video_id(video_ref: str) -> Optional[str]:
    """
    Return the video id in a YouTube URL or bare id, or None.

    Examples:
        >>> extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42")
        'dQw4w9WgXcQ'
        >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> extract_video_id("dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    ref = video_ref.strip()
    if _VIDEO_ID.match(ref):
        return ref
    match = _VIDEO_URL.search(ref)
    return match.group(1) if match else None


class YouTubeTranscriptSource(TranscriptSource):
    """
    Caption segments from YouTube.

    Attributes:
        languages: Preferred caption languages, most preferred first
    """

    def __init__(
        self,
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        api: Optional[YouTubeTranscriptApi] = None,
    ):
        """
        Initialize the source.

        Args:
            languages: Caption language codes tried in order
            api: Preconfigured client (proxies, cookies); a default one otherwise
        """
        self.languages = tuple(languages)
        self._api = api or YouTubeTranscriptApi()

    async def fetch(self, video_ref: str) -> list[TranscriptSegment]:
        video_id = extract_video_id(video_ref)
        if video_id is None:
            raise TranscriptNotFoundError(video_ref, reason="Not a YouTube video reference")

        log = logger.bind(video_ref=video_ref, video_id=video_id)
        log.debug("Fetching YouTube transcript", languages=list(self.languages))

        try:
            fetched = await asyncio.to_thread(self._api.fetch, video_id, languages=self.languages)
        except _MISSING_TRANSCRIPT as e:
            log.warning("No transcript available", reason=type(e).__name__)
            raise TranscriptNotFoundError(video_ref) from e
        except CouldNotRetrieveTranscript as e:
            log.error("Transcript provider refused request", error_type=type(e).__name__)
            raise TranscriptSourceError(
                video_ref, f"YouTube refused the transcript request ({type(e).__name__})", cause=e
            ) from e
        except Exception as e:
            log.error("Transcript fetch failed", error=str(e), error_type=type(e).__name__)
            raise TranscriptSourceError(video_ref, f"Transcript fetch failed: {e}", cause=e) from e

        segments = [
            TranscriptSegment(offset=max(0.0, float(snippet.start)), text=snippet.text)
            for snippet in fetched
        ]
        if not segments:
            raise TranscriptNotFoundError(video_ref, reason="Transcript is empty")

        log.info("Fetched YouTube transcript", segments=len(segments))
        return segments
