"""
Output parsing and transcript grounding.

- parser.py: Strict JSON decoding with regex salvage (never raises)
- grounding.py: Exact-match timestamp grounding, topic fallback, answer sanitization
- exceptions.py: Strict-pass failure (internal to the parser)
"""

from .exceptions import StructuredOutputError
from .grounding import GroundedValidator, fallback_label, sanitize_answer
from .parser import FALLBACK_ANSWER, StructuredOutputParser

__all__ = [
    "StructuredOutputParser",
    "GroundedValidator",
    "sanitize_answer",
    "fallback_label",
    "FALLBACK_ANSWER",
    "StructuredOutputError",
]
