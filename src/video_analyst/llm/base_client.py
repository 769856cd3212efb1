"""
Abstract base client for generation backends.

Defines the interface the retry policy depends on. One call, one
backend, one outbound request: retries and fallback live above this
layer, never inside it.
"""

from abc import ABC, abstractmethod

import structlog

from video_analyst.models.messages import BackendIdentifier, Conversation


logger = structlog.get_logger(__name__)


class BaseBackendClient(ABC):
    """
    Abstract base class for generation backend clients.

    Responsibilities:
    - Send one conversation to one named backend
    - Request a JSON-structured response
    - Map transport/status/payload failures to BackendError subclasses

    Does NOT handle:
    - Retries or backoff (that's RetryPolicy's job)
    - Choosing a backend (that's ModelFallbackOrchestrator's job)
    - Parsing the generated JSON (that's StructuredOutputParser's job)
    """

    def __init__(self, base_url: str, timeout: float = 60.0, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the backend API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized backend client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def call(self, backend: BackendIdentifier, messages: Conversation) -> str:
        """
        Send the conversation to the named backend and return generated text.

        Args:
            backend: Model identifier
            messages: Non-empty conversation

        Returns:
            Generated text (requested as a JSON object)

        Raises:
            ValueError: Empty conversation
            BackendError: Transport failure, non-2xx status or backend-reported error
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the backend API is reachable.

        Returns:
            True if healthy, False otherwise. Never raises.
        """
        pass

    async def close(self):
        """Release connections. Default implementation does nothing."""
        logger.debug("Closing backend client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
