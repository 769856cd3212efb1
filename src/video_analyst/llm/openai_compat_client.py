"""
OpenAI-compatible chat-completions client.

Communicates with any backend exposing POST /chat/completions (the Gemini
OpenAI endpoint, OpenAI itself, vLLM, Ollama's /v1, ...) using httpx
AsyncClient. Supports:
- JSON object response format
- Connection pooling via a persistent AsyncClient
- Health checks via GET /models
"""

import json
import time
from typing import Any, Optional

import httpx
import structlog

from video_analyst.llm.base_client import BaseBackendClient
from video_analyst.llm.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendHTTPError,
    BackendResponseError,
    BackendTimeoutError,
)
from video_analyst.models.messages import BackendIdentifier, Conversation
from video_analyst.monitoring.metrics import backend_latency_seconds


logger = structlog.get_logger(__name__)


class OpenAICompatClient(BaseBackendClient):
    """
    Chat-completions client using httpx for async HTTP communication.

    API Endpoints:
    - POST /chat/completions: Generate a reply for a message list
    - GET /models: List models (used as health check)

    Exactly one HTTP request is issued per call(); there is no retry loop
    here.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 60.0,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. https://generativelanguage.googleapis.com/v1beta/openai
            api_key: Bearer token sent in the Authorization header
            timeout: Request timeout in seconds
            temperature: Sampling temperature (omitted from payload when None)
            max_tokens: Completion token limit (omitted from payload when None)
            connection_limits: httpx connection pool limits
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(base_url, timeout, **kwargs)
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                headers=headers,
                transport=self._transport,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def _build_payload(self, backend: BackendIdentifier, messages: Conversation) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": backend,
            "messages": [m.to_payload() for m in messages],
            "response_format": {"type": "json_object"},
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return payload

    async def call(self, backend: BackendIdentifier, messages: Conversation) -> str:
        """
        Generate a reply using POST /chat/completions.

        Payload:
        {
            "model": "gemini-2.0-flash-lite",
            "messages": [{"role": "user", "content": "..."}],
            "response_format": {"type": "json_object"}
        }

        Response:
        {
            "choices": [{"message": {"role": "assistant", "content": "{...}"}}],
            "usage": {"prompt_tokens": 50, "completion_tokens": 150}
        }
        """
        if not messages:
            raise ValueError("Conversation must contain at least one message")

        payload = self._build_payload(backend, messages)

        logger.debug(
            "Sending chat completion request",
            backend=backend,
            messages=[{"role": m.role.value, "length": len(m.content)} for m in messages],
        )

        start_time = time.perf_counter()
        success = False
        try:
            client = await self._get_client()
            response = await client.post("/chat/completions", json=payload)
            response.raise_for_status()
            content = self._extract_content(backend, response)
            success = True
            return content

        except httpx.TimeoutException as e:
            raise BackendTimeoutError(
                f"Request timeout after {self.timeout}s",
                backend=backend,
                cause=e,
                details={"timeout": self.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise BackendHTTPError(
                f"Backend returned HTTP {status_code}",
                backend=backend,
                status_code=status_code,
                cause=e,
                details={"status": status_code, "error": e.response.text[:500]},
            ) from e

        except httpx.RequestError as e:
            raise BackendConnectionError(
                f"Network error: {e}",
                backend=backend,
                cause=e,
                details={"error_type": type(e).__name__},
            ) from e

        except BackendError:
            raise

        except Exception as e:
            logger.error(
                "Unexpected error in backend call",
                backend=backend,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise BackendError(
                f"Unexpected error: {e}",
                backend=backend,
                cause=e,
                details={"error_type": type(e).__name__},
            ) from e

        finally:
            latency = time.perf_counter() - start_time
            backend_latency_seconds.labels(
                backend=backend, success=str(success).lower()
            ).observe(latency)

    @staticmethod
    def _extract_content(backend: BackendIdentifier, response: httpx.Response) -> str:
        """Pull choices[0].message.content out of a 2xx response."""
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise BackendResponseError(
                "Invalid JSON response from backend",
                backend=backend,
                cause=e,
                details={"body": response.text[:500]},
            ) from e

        # Some OpenAI-compatible gateways answer 200 with an error object
        if isinstance(data, list) and data and isinstance(data[0], dict):
            data = data[0]
        if not isinstance(data, dict):
            raise BackendResponseError(
                "Unexpected response shape from backend",
                backend=backend,
                details={"type": type(data).__name__},
            )
        if data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise BackendResponseError(
                f"Backend reported error: {message}",
                backend=backend,
                details={"error": error},
            )

        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise BackendResponseError(
                "Backend response contains no choices",
                backend=backend,
                details={"keys": sorted(data.keys())},
            )

        choice = choices[0]
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(message, dict):
            raise BackendResponseError(
                "Backend choice carries no message object",
                backend=backend,
                details={"choice": repr(choice)[:200]},
            )

        content = message.get("content")
        if content is None:
            content = ""
        elif not isinstance(content, str):
            raise BackendResponseError(
                "Backend message content is not text",
                backend=backend,
                details={"content_type": type(content).__name__},
            )

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        logger.info(
            "Backend generation successful",
            backend=backend,
            model=data.get("model", backend),
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
            finish_reason=choice.get("finish_reason"),
        )
        return content

    async def health_check(self) -> bool:
        """
        Check backend health via GET /models.

        Returns True if the API responds with 2xx, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Backend health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Backend health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed backend client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
