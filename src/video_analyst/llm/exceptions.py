"""
Custom exceptions for the backend client layer.

Every failure of a single backend call is a BackendError. The retry
policy recovers from all of them the same way (backoff, then try again);
the subclasses only exist so logs and metrics can tell the failure
modes apart.
"""

from typing import Any, Optional


class BackendError(Exception):
    """
    Base exception for a failed call to one generation backend.

    Attributes:
        message: Human-readable description
        backend: Model identifier the call was addressed to
        cause: Underlying exception, when the failure came from the transport
        details: Structured data for logging
    """

    def __init__(
        self,
        message: str,
        backend: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.backend = backend
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.backend}] {self.message}"


class BackendConnectionError(BackendError):
    """
    Raised when the backend cannot be reached.

    Includes DNS failures, refused connections, dropped sockets, etc.
    """
    pass


class BackendTimeoutError(BackendConnectionError):
    """Raised when the backend does not answer within the call timeout."""
    pass


class BackendHTTPError(BackendError):
    """
    Raised when the backend answers with a non-2xx status.

    429 (rate limited) and 5xx are the usual transient cases; 404 usually
    means the model identifier is unknown to the backend.
    """

    def __init__(
        self,
        message: str,
        backend: str,
        status_code: int,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, backend, cause, details)
        self.status_code = status_code


class BackendResponseError(BackendError):
    """
    Raised when a 2xx response is unusable.

    Examples:
    - Body is not JSON
    - Body carries a backend-reported "error" object
    - No choices in the completion
    """
    pass
