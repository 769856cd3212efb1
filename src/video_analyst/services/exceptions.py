"""
Service-level exceptions.

Only failures caused by the caller's input live here; the API maps them
to 400. Programming errors stay plain ValueError/TypeError and surface
as 500.
"""

from typing import Any, Optional


class InvalidRequestError(ValueError):
    """
    Raised when a request cannot be served as given.

    Attributes:
        message: Human-readable reason
        details: Offending fields, for logs and error bodies
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
