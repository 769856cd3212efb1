"""
API-specific request and response models for FastAPI endpoints.

Response bodies reuse the domain models (VideoAnalysis, ChatAnswer)
directly; only the request envelopes and health payload live here.
"""

from pydantic import AliasChoices, BaseModel, Field

from video_analyst.models.transcript import TranscriptEntry


class VideoAnalysisRequest(BaseModel):
    """Request for the topics timeline of a video."""

    video_ref: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("video_ref", "videoUrl"),
        description="Video URL or identifier understood by the transcript source",
    )


class VideoChatRequest(BaseModel):
    """Question about an already-fetched transcript."""

    question: str = Field(..., min_length=1, description="User question")
    transcript: list[TranscriptEntry] = Field(
        ...,
        min_length=1,
        description="Formatted transcript entries the answer must be grounded in",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="ok or degraded", examples=["ok", "degraded"])
    version: str
    backend_reachable: bool
    backends: list[str] = Field(description="Configured backends, in priority order")
