"""Unit tests for transcript sources."""

import pytest

from video_analyst.transcripts.source import InMemoryTranscriptSource, TranscriptNotFoundError


@pytest.mark.asyncio
async def test_in_memory_source_returns_copy(transcript_segments):
    source = InMemoryTranscriptSource({"vid-1": transcript_segments})

    fetched = await source.fetch("vid-1")
    fetched.clear()

    assert await source.fetch("vid-1") == transcript_segments


@pytest.mark.asyncio
@pytest.mark.parametrize("video_ref", ["unknown", "empty"])
async def test_missing_or_empty_transcript_raises(video_ref):
    source = InMemoryTranscriptSource({"empty": []})

    with pytest.raises(TranscriptNotFoundError) as exc_info:
        await source.fetch(video_ref)

    assert exc_info.value.video_ref == video_ref
    assert exc_info.value.details == {"video_ref": video_ref}
