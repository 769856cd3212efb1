"""
FastAPI dependency injection for the Video Analyst API.

Provides singleton instances of expensive resources (HTTP backend client)
and factory functions for the pipeline. Transcripts come from YouTube by
default; override get_transcript_source through app.dependency_overrides
to plug another source in.
"""

from functools import lru_cache

from fastapi import Depends

from video_analyst.config import Settings, settings
from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.openai_compat_client import OpenAICompatClient
from video_analyst.llm.prompt_builder import PromptBuilder
from video_analyst.retry.orchestrator import ModelFallbackOrchestrator
from video_analyst.services.analysis import VideoAnalysisService
from video_analyst.transcripts.source import TranscriptSource
from video_analyst.transcripts.youtube import YouTubeTranscriptSource
from video_analyst.validation.grounding import GroundedValidator


def get_settings() -> Settings:
    """Get settings singleton."""
    return settings


@lru_cache()
def get_backend_client() -> BaseBackendClient:
    """
    Get singleton backend client with connection pooling.

    The client keeps one httpx connection pool for the process.
    """
    return OpenAICompatClient(
        base_url=settings.GENERATION_BASE_URL,
        api_key=settings.GENERATION_API_KEY,
        timeout=settings.GENERATION_TIMEOUT,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """Get singleton prompt builder (templates loaded once)."""
    return PromptBuilder()


@lru_cache()
def get_transcript_source() -> TranscriptSource:
    """Get singleton YouTube transcript source."""
    return YouTubeTranscriptSource(languages=settings.TRANSCRIPT_LANGUAGES)


def get_orchestrator(
    client: BaseBackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
) -> ModelFallbackOrchestrator:
    """
    Create the fallback orchestrator.

    Not cached: it is lightweight and holds no per-request state.
    """
    return ModelFallbackOrchestrator.from_settings(client, settings)


def get_analysis_service(
    orchestrator: ModelFallbackOrchestrator = Depends(get_orchestrator),
    transcript_source: TranscriptSource = Depends(get_transcript_source),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> VideoAnalysisService:
    """Create the analysis service with injected collaborators."""
    return VideoAnalysisService(
        orchestrator=orchestrator,
        transcript_source=transcript_source,
        prompt_builder=prompt_builder,
        validator=GroundedValidator(fallback_count=settings.TOPIC_FALLBACK_COUNT),
        generation_timeout=settings.GENERATION_TIMEOUT_SECONDS,
    )
