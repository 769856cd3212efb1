"""
FastAPI application entry point for Video Analyst.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from video_analyst.api.dependencies import get_backend_client
from video_analyst.api.error_handlers import EXCEPTION_HANDLERS
from video_analyst.api.middleware import RequestTracingMiddleware
from video_analyst.api.routes import router
from video_analyst.config import Settings, settings
from video_analyst.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration and close the backend connection pool on shutdown."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        base_url=settings.GENERATION_BASE_URL,
        backends=settings.BACKEND_MODELS,
        max_attempts=settings.MAX_ATTEMPTS,
    )
    if not settings.GENERATION_API_KEY:
        logger.warning("GENERATION_API_KEY is not set")
    yield
    await get_backend_client().close()
    logger.info("Application shutdown complete")


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the FastAPI application."""
    configure_logging(app_settings.LOG_LEVEL, app_settings.ENVIRONMENT)

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Grounded topic timelines and question answering over video transcripts",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(RequestTracingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(router)

    if app_settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "video_analyst.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Only for development
    )
