"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit tests.
"""

import pytest

from video_analyst.config import Settings
from video_analyst.models.enums import Role
from video_analyst.models.messages import Message
from video_analyst.models.transcript import TranscriptEntry, TranscriptSegment


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_ATTEMPTS = 1
    """
    return Settings(
        APP_NAME="Video Analyst (Test)",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",
        GENERATION_BASE_URL="http://backend.test/v1",
        GENERATION_API_KEY="test-key",
        BACKEND_MODELS=["model-a", "model-b", "model-c"],
        MAX_ATTEMPTS=3,
        INITIAL_RETRY_DELAY=1.0,
        TOPIC_FALLBACK_COUNT=5,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def messages() -> list[Message]:
    """Single-message conversation."""
    return [Message(role=Role.USER, content="Summarize the video")]


@pytest.fixture
def transcript() -> list[TranscriptEntry]:
    """Seven-entry formatted transcript."""
    return [
        TranscriptEntry(timestamp="00:00", text="Welcome to the channel"),
        TranscriptEntry(timestamp="00:05", text="Today we talk about sourdough"),
        TranscriptEntry(timestamp="00:10", text="First, the starter"),
        TranscriptEntry(timestamp="00:42", text="Feeding schedule"),
        TranscriptEntry(timestamp="01:15", text="Mixing the dough"),
        TranscriptEntry(timestamp="02:30", text="Bulk fermentation"),
        TranscriptEntry(timestamp="05:00", text="Baking and cooling"),
    ]


@pytest.fixture
def transcript_segments() -> list[TranscriptSegment]:
    """Raw segments matching the first three transcript entries."""
    return [
        TranscriptSegment(offset=0.0, text="Welcome to the channel"),
        TranscriptSegment(offset=5.4, text="Today we talk about sourdough"),
        TranscriptSegment(offset=10.9, text="First, the starter"),
    ]
