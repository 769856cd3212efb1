"""
Grounded validator: cross-check model references against the transcript.

A Topic or Citation is grounded iff its timestamp string is exactly equal
to the timestamp of some transcript entry. Ungrounded items are dropped,
never corrected (no nearest-timestamp matching).

Topics get a deterministic fallback when nothing survives: the first N
transcript entries, each labelled from its own timestamp. Citations have
no fallback; an answer without citations is acceptable.
"""

import re
from typing import Sequence

import structlog

from video_analyst.models.output_models import ChatAnswer, Citation, Topic
from video_analyst.models.transcript import TranscriptEntry
from video_analyst.monitoring.metrics import grounding_dropped_total, topic_fallbacks_total

logger = structlog.get_logger(__name__)

DEFAULT_FALLBACK_COUNT = 5

# Inline time-code such as [01:23] or [1:02:03], with the blanks around it
_CITATION_MARKER = re.compile(r"(?P<lead>[ \t]*)\[\d{1,2}:\d{2}(?::\d{2})?\](?P<trail>[ \t]*)")
_REPEATED_BLANKS = re.compile(r"[ \t]{2,}")
# No blank is kept in front of these
_CLOSING = frozenset(".,;:!?)\n")


def fallback_label(timestamp: str) -> str:
    """Generic label for a synthesized topic."""
    return f"Segment at {timestamp}"


def sanitize_answer(text: str) -> str:
    """
    Remove inline citation markers from free text.

    A marker with blanks around it becomes a single space, unless it ends
    the text or sits before punctuation; a marker glued between two words
    is dropped outright. Repeats until nothing changes, so removing one
    marker can never expose another; the function is idempotent.

    Examples:
        >>> sanitize_answer("word [00:05]next")
        'word next'
        >>> sanitize_answer("Bake it [05:00].")
        'Bake it.'
    """
    previous = None
    while previous != text:
        previous = text
        text = _REPEATED_BLANKS.sub(" ", _CITATION_MARKER.sub(_marker_replacement, text))
    return text.strip()


def _marker_replacement(match: re.Match) -> str:
    if not (match.group("lead") or match.group("trail")):
        return ""
    following = match.string[match.end():match.end() + 1]
    if not following or following in _CLOSING:
        return ""
    return " "


class GroundedValidator:
    """
    Keep only references whose timestamp exists in the transcript.

    Attributes:
        fallback_count: Number of transcript entries used as fallback topics
    """

    def __init__(self, fallback_count: int = DEFAULT_FALLBACK_COUNT):
        if fallback_count < 1:
            raise ValueError("fallback_count must be >= 1")
        self.fallback_count = fallback_count

    def ground_topics(
        self,
        candidates: Sequence[Topic],
        transcript: Sequence[TranscriptEntry],
    ) -> list[Topic]:
        """
        Filter topics to grounded ones, synthesizing a fallback if none remain.

        Args:
            candidates: Topics produced by the backend
            transcript: Authoritative transcript entries

        Returns:
            Grounded topics in candidate order; if none, the first
            fallback_count entries as generic topics; empty only when the
            transcript itself is empty
        """
        valid = _timestamps(transcript)
        grounded = [t for t in candidates if t.timestamp in valid]

        dropped = len(candidates) - len(grounded)
        if dropped:
            grounding_dropped_total.labels(kind="topic").inc(dropped)
            logger.warning(
                "Dropped ungrounded topics",
                dropped=dropped,
                timestamps=[t.timestamp for t in candidates if t.timestamp not in valid][:20],
            )

        if grounded or not transcript:
            return grounded

        topic_fallbacks_total.inc()
        fallback = [
            Topic(timestamp=entry.timestamp, label=fallback_label(entry.timestamp))
            for entry in transcript[: self.fallback_count]
        ]
        logger.warning(
            "No grounded topics, using transcript fallback",
            candidates=len(candidates),
            fallback_topics=len(fallback),
        )
        return fallback

    def ground_citations(
        self,
        citations: Sequence[Citation],
        transcript: Sequence[TranscriptEntry],
    ) -> list[Citation]:
        """Filter citations to grounded ones. No fallback."""
        valid = _timestamps(transcript)
        grounded = [c for c in citations if c.timestamp in valid]

        dropped = len(citations) - len(grounded)
        if dropped:
            grounding_dropped_total.labels(kind="citation").inc(dropped)
            logger.warning("Dropped ungrounded citations", dropped=dropped)

        return grounded

    def ground_answer(
        self,
        answer: ChatAnswer,
        transcript: Sequence[TranscriptEntry],
    ) -> ChatAnswer:
        """Strip inline markers from the answer text and ground its citations."""
        return ChatAnswer(
            answer=sanitize_answer(answer.answer),
            citations=self.ground_citations(answer.citations, transcript),
        )


def _timestamps(transcript: Sequence[TranscriptEntry]) -> set[str]:
    return {entry.timestamp for entry in transcript}
