"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

from video_analyst.retry.exceptions import AllBackendsExhausted, GenerationCancelled
from video_analyst.services.exceptions import InvalidRequestError
from video_analyst.transcripts.source import TranscriptNotFoundError, TranscriptSourceError

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def all_backends_exhausted_handler(request: Request, exc: AllBackendsExhausted) -> JSONResponse:
    """
    Handle generation failure after every backend was tried.

    Maps to 503 Service Unavailable (upstream temporarily unusable).
    """
    logger.error(
        "Generation failed on every backend",
        path=request.url.path,
        last_error=str(exc.last_error),
        **exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(
            "all_backends_exhausted",
            "Unable to generate a response after trying every model",
            {**exc.details, "last_error": str(exc.last_error)},
        ),
    )


async def generation_cancelled_handler(request: Request, exc: GenerationCancelled) -> JSONResponse:
    """
    Handle generation aborted by the configured deadline.

    Maps to 504 Gateway Timeout.
    """
    logger.error("Generation cancelled", path=request.url.path, **exc.details)
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content=_error_body("generation_cancelled", exc.message, exc.details),
    )


async def transcript_not_found_handler(request: Request, exc: TranscriptNotFoundError) -> JSONResponse:
    """
    Handle missing transcript.

    Maps to 404 Not Found.
    """
    logger.warning("Transcript not found", path=request.url.path, **exc.details)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=_error_body("transcript_not_found", exc.message, exc.details),
    )


async def transcript_source_error_handler(request: Request, exc: TranscriptSourceError) -> JSONResponse:
    """
    Handle a transcript provider failure (blocked, rate limited, unreachable).

    Maps to 502 Bad Gateway.
    """
    logger.error("Transcript source failed", path=request.url.path, error=exc.message, **exc.details)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body("transcript_source_error", exc.message, exc.details),
    )


async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    """
    Handle input rejected by the service layer.

    Maps to 400 Bad Request. Other ValueErrors are server bugs and fall
    through to the default 500 handling.
    """
    logger.warning("Invalid request", path=request.url.path, error=exc.message, **exc.details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", exc.message, exc.details),
    )


EXCEPTION_HANDLERS = {
    AllBackendsExhausted: all_backends_exhausted_handler,
    GenerationCancelled: generation_cancelled_handler,
    TranscriptNotFoundError: transcript_not_found_handler,
    TranscriptSourceError: transcript_source_error_handler,
    InvalidRequestError: invalid_request_handler,
}
