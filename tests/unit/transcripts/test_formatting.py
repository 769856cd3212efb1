"""Unit tests for transcript formatting."""

import pytest

from video_analyst.models.transcript import TranscriptEntry, TranscriptSegment
from video_analyst.transcripts.formatting import format_timestamp, format_transcript


@pytest.mark.parametrize(
    "offset, expected",
    [
        (0, "00:00"),
        (5.4, "00:05"),
        (5.99, "00:05"),
        (59, "00:59"),
        (60, "01:00"),
        (3599.9, "59:59"),
        (3600, "01:00:00"),
        (3723, "01:02:03"),
        (36000, "10:00:00"),
    ],
)
def test_format_timestamp(offset, expected):
    assert format_timestamp(offset) == expected


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        format_timestamp(-0.5)


def test_format_transcript_preserves_order_and_text(transcript_segments):
    assert format_transcript(transcript_segments) == [
        TranscriptEntry(timestamp="00:00", text="Welcome to the channel"),
        TranscriptEntry(timestamp="00:05", text="Today we talk about sourdough"),
        TranscriptEntry(timestamp="00:10", text="First, the starter"),
    ]


def test_segments_in_same_second_share_timestamp():
    segments = [TranscriptSegment(offset=7.1, text="a"), TranscriptSegment(offset=7.8, text="b")]

    assert [e.timestamp for e in format_transcript(segments)] == ["00:07", "00:07"]


def test_format_empty_transcript():
    assert format_transcript([]) == []
