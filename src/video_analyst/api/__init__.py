"""
FastAPI API routes and endpoints.

- routes.py: POST /video-analysis, POST /video-chat, GET /health
- dependencies.py: Dependency injection for backend client, service, etc.
- models.py: API request envelopes and health payload
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from video_analyst.api.routes import router

__all__ = ["router"]
