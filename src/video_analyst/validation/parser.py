"""
Structured output parser: strict decoding with a regex salvage path.

Backends are asked for a JSON object but occasionally wrap it in prose,
a Markdown fence, or emit near-JSON. Parsing therefore runs in two passes:

1. Strict: fence-stripped text decoded with pydantic (model_validate_json)
2. Salvage (only if strict fails): pattern-match the fields we need

Parsing never raises. Unrecoverable fields become empty/placeholder values.
"""

import json
import re
from typing import Callable, Optional, TypeVar

import structlog
from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from video_analyst.models.output_models import ChatAnswer, Citation, Topic, VideoAnalysis
from video_analyst.monitoring.metrics import salvage_parses_total
from video_analyst.validation.exceptions import StructuredOutputError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

FALLBACK_ANSWER = "I apologize, but I couldn't provide a proper answer."

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)
_ANSWER_FIELD = re.compile(r'"answer"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
_CITATIONS_FIELD = re.compile(r'"citations"\s*:\s*(\[[^\]]*\])')
_TOPICS_FIELD = re.compile(r'"topics"\s*:\s*(\[[^\]]*\])')


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any."""
    text = raw.strip()
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text


class StructuredOutputParser:
    """
    Parse backend text into typed results.

    parse() is the generic entry point; parse_chat_answer() and
    parse_topics() bind it to the two shapes this service requests.
    """

    def parse(
        self,
        raw: str,
        model_cls: type[M],
        salvage: Callable[[str], T],
        convert: Optional[Callable[[M], T]] = None,
    ) -> T:
        """
        Decode raw text into model_cls, falling back to salvage on failure.

        Args:
            raw: Backend text
            model_cls: Pydantic model for the strict pass
            salvage: Best-effort extractor used when strict decoding fails
            convert: Optional mapping from the decoded model to the result type

        Returns:
            Typed result (never raises)
        """
        try:
            decoded = self._decode_strict(raw, model_cls)
            return convert(decoded) if convert else decoded  # type: ignore[return-value]
        except StructuredOutputError as e:
            logger.warning(
                "Strict decoding failed, salvaging",
                model=model_cls.__name__,
                error=str(e),
                content_snippet=e.details.get("content_snippet", "")[:200],
            )
            return salvage(raw if isinstance(raw, str) else "")

    def parse_chat_answer(self, raw: str) -> ChatAnswer:
        """Parse a {"answer", "citations"} reply."""
        return self.parse(raw, _StrictChatAnswer, self._salvage_chat_answer, _to_chat_answer)

    def parse_topics(self, raw: str) -> list[Topic]:
        """Parse a {"topics": [...]} reply into a topic list."""
        return self.parse(raw, VideoAnalysis, self._salvage_topics, lambda a: list(a.topics))

    @staticmethod
    def _decode_strict(raw: str, model_cls: type[M]) -> M:
        if not isinstance(raw, str) or not raw.strip():
            raise StructuredOutputError(
                "Backend output is empty or not text",
                raw_content=raw if isinstance(raw, str) else repr(raw),
                parse_error="Empty content",
            )
        text = strip_code_fence(raw)
        try:
            return model_cls.model_validate_json(text)
        except PydanticValidationError as e:
            raise StructuredOutputError(
                f"Backend output does not match {model_cls.__name__}",
                raw_content=raw,
                parse_error=f"{e.error_count()} error(s): {e.errors()[0]['msg']}",
            ) from e

    def _salvage_chat_answer(self, raw: str) -> ChatAnswer:
        answer_match = _ANSWER_FIELD.search(raw)
        answer = _unescape(answer_match.group(1)).strip() if answer_match else ""
        citations = _salvage_items(raw, _CITATIONS_FIELD, Citation)

        recovered = bool(answer)
        salvage_parses_total.labels(kind="chat_answer", recovered=str(recovered).lower()).inc()
        logger.info(
            "Salvaged chat answer",
            answer_recovered=recovered,
            citations_recovered=len(citations),
        )
        return ChatAnswer(answer=answer or FALLBACK_ANSWER, citations=citations)

    def _salvage_topics(self, raw: str) -> list[Topic]:
        topics = _salvage_items(raw, _TOPICS_FIELD, Topic)
        salvage_parses_total.labels(kind="topics", recovered=str(bool(topics)).lower()).inc()
        logger.info("Salvaged topics", topics_recovered=len(topics))
        return topics


class _StrictChatAnswer(ChatAnswer):
    """ChatAnswer as required by the strict pass: a non-blank answer."""

    @field_validator("answer")
    @classmethod
    def _answer_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("answer must not be empty")
        return v


def _to_chat_answer(strict: _StrictChatAnswer) -> ChatAnswer:
    return ChatAnswer(answer=strict.answer, citations=list(strict.citations))


def _unescape(value: str) -> str:
    """Decode JSON string escapes in a regex-captured string body."""
    try:
        return json.loads(f'"{value}"', strict=False)
    except json.JSONDecodeError:
        return value


def _salvage_items(raw: str, pattern: re.Pattern, model_cls: type[M]) -> list[M]:
    """Decode the JSON array captured by `pattern`, keeping the valid objects."""
    match = pattern.search(raw)
    if not match:
        return []
    try:
        items = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.debug("Salvaged array is not valid JSON", error=str(e))
        return []

    result: list[M] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            result.append(model_cls.model_validate(item))
        except PydanticValidationError:
            continue
    return result
