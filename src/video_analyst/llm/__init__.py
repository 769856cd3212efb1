"""
Backend client abstraction and implementations.

Components:
- BaseBackendClient: Abstract base class for backend clients
- OpenAICompatClient: Chat-completions client (Gemini OpenAI endpoint by default)
- PromptBuilder: Builds topic-analysis and video-chat conversations
- exceptions: Backend call exceptions
"""

from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendHTTPError,
    BackendResponseError,
    BackendTimeoutError,
)
from video_analyst.llm.openai_compat_client import OpenAICompatClient
from video_analyst.llm.prompt_builder import PromptBuilder

__all__ = [
    "BaseBackendClient",
    "OpenAICompatClient",
    "PromptBuilder",
    "BackendError",
    "BackendConnectionError",
    "BackendTimeoutError",
    "BackendHTTPError",
    "BackendResponseError",
]
