"""
Transcript formatting.

Converts segment offsets (seconds) to the timestamp strings used both in
prompts and as grounding keys, so a model that copies a timestamp from
the prompt always produces a string grounding will accept.
"""

from typing import Sequence

from video_analyst.models.transcript import TranscriptEntry, TranscriptSegment


def format_timestamp(offset_seconds: float) -> str:
    """
    Format an offset as MM:SS, or HH:MM:SS from one hour on.

    Fractional seconds are truncated.

    Examples:
        >>> format_timestamp(5.7)
        '00:05'
        >>> format_timestamp(3723)
        '01:02:03'
    """
    if offset_seconds < 0:
        raise ValueError("offset_seconds must be >= 0")

    total = int(offset_seconds)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_transcript(segments: Sequence[TranscriptSegment]) -> list[TranscriptEntry]:
    """Map raw segments to timestamped entries, preserving order."""
    return [
        TranscriptEntry(timestamp=format_timestamp(segment.offset), text=segment.text)
        for segment in segments
    ]
