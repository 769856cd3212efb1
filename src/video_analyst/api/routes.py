"""
HTTP routes for video analysis and video chat.

Thin adapters over VideoAnalysisService: failures are translated to HTTP
responses by the handlers in error_handlers.py.
"""

import structlog
from fastapi import APIRouter, Depends, status

from video_analyst.api.dependencies import (
    get_analysis_service,
    get_backend_client,
    get_settings,
)
from video_analyst.api.models import HealthResponse, VideoAnalysisRequest, VideoChatRequest
from video_analyst.config import Settings
from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.models.output_models import ChatAnswer, VideoAnalysis
from video_analyst.services.analysis import VideoAnalysisService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/video-analysis",
    response_model=VideoAnalysis,
    status_code=status.HTTP_200_OK,
    summary="Topics timeline of a video",
    responses={
        200: {"description": "Grounded topics (transcript fallback if the model cited nothing valid)"},
        404: {"description": "No transcript for this video"},
        502: {"description": "Transcript provider failed"},
        503: {"description": "Every backend exhausted its retries"},
        504: {"description": "Generation deadline exceeded"},
    },
)
async def analyze_video(
    request: VideoAnalysisRequest,
    service: VideoAnalysisService = Depends(get_analysis_service),
) -> VideoAnalysis:
    logger.info("Video analysis request received", video_ref=request.video_ref)
    return await service.analyze_video(request.video_ref)


@router.post(
    "/video-chat",
    response_model=ChatAnswer,
    status_code=status.HTTP_200_OK,
    summary="Answer a question about a transcript",
    responses={
        200: {"description": "Answer with grounded citations"},
        400: {"description": "Blank question or empty transcript"},
        503: {"description": "Every backend exhausted its retries"},
        504: {"description": "Generation deadline exceeded"},
    },
)
async def video_chat(
    request: VideoChatRequest,
    service: VideoAnalysisService = Depends(get_analysis_service),
) -> ChatAnswer:
    logger.info(
        "Video chat request received",
        question_length=len(request.question),
        transcript_entries=len(request.transcript),
    )
    return await service.answer_question(request.question, request.transcript)


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health(
    client: BaseBackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    reachable = await client.health_check()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        version=settings.APP_VERSION,
        backend_reachable=reachable,
        backends=list(settings.BACKEND_MODELS),
    )
