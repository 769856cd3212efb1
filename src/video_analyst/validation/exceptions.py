"""
Validation-specific exceptions.

StructuredOutputError is raised by the strict decoding pass and always
caught by the parser, which then falls back to salvage. It never reaches
callers of the parser.
"""

from typing import Any


class StructuredOutputError(Exception):
    """Strict decoding of backend output failed."""

    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize structured output error.

        Args:
            message: Error description
            raw_content: Backend text (first 500 chars kept for debugging)
            parse_error: Original decoder / pydantic error message
        """
        details: dict[str, Any] = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error

        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details.get("parse_error"):
            return f"{self.message} | {self.details['parse_error']}"
        return self.message
