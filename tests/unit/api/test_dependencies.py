"""
Unit tests for API dependency injection.
"""

from video_analyst.api.dependencies import (
    get_analysis_service,
    get_backend_client,
    get_orchestrator,
    get_prompt_builder,
    get_settings,
    get_transcript_source,
)
from video_analyst.config import Settings
from video_analyst.llm.openai_compat_client import OpenAICompatClient
from video_analyst.services.analysis import VideoAnalysisService
from video_analyst.transcripts.youtube import YouTubeTranscriptSource


def test_get_settings_is_singleton():
    assert get_settings() is get_settings()
    assert isinstance(get_settings(), Settings)


def test_backend_client_is_cached():
    client = get_backend_client()

    assert client is get_backend_client()
    assert isinstance(client, OpenAICompatClient)


def test_prompt_builder_and_source_are_cached():
    assert get_prompt_builder() is get_prompt_builder()
    assert get_transcript_source() is get_transcript_source()


def test_default_transcript_source_is_youtube():
    source = get_transcript_source()

    assert isinstance(source, YouTubeTranscriptSource)
    assert source.languages == tuple(get_settings().TRANSCRIPT_LANGUAGES)


def test_service_wiring_follows_settings(scripted_client, test_settings):
    test_settings.TOPIC_FALLBACK_COUNT = 2
    test_settings.GENERATION_TIMEOUT_SECONDS = 30.0

    orchestrator = get_orchestrator(client=scripted_client({}), settings=test_settings)
    service = get_analysis_service(
        orchestrator=orchestrator,
        transcript_source=get_transcript_source(),
        prompt_builder=get_prompt_builder(),
        settings=test_settings,
    )

    assert isinstance(service, VideoAnalysisService)
    assert orchestrator.backends == ("model-a", "model-b", "model-c")
    assert service.validator.fallback_count == 2
    assert service.generation_timeout == 30.0
