"""
Output data models for the Video Analyst generation layer.

These models describe the structured output the backend is asked to
produce. The parser decodes backend text into them; the grounding
validator then drops every reference whose timestamp is not present
in the transcript.

Missing or null fields fall back to placeholders ("00:00", "") instead of
failing, so a partially well-formed reply still yields usable items.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMESTAMP = "00:00"


def _or_default(value: Any, default: str) -> Any:
    if value is None or value == "":
        return default
    return value


class Topic(BaseModel):
    """
    A topic of the video anchored to a transcript timestamp.

    The backend is prompted for {"timestamp", "topic"}; both "topic" and
    "label" are accepted on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str = Field(default=DEFAULT_TIMESTAMP, description="Transcript timestamp")
    label: str = Field(
        default="",
        validation_alias=AliasChoices("label", "topic"),
        description="Short topic name",
    )

    @field_validator("timestamp", mode="before")
    @classmethod
    def _default_timestamp(cls, v: Any) -> Any:
        return _or_default(v, DEFAULT_TIMESTAMP)

    @field_validator("label", mode="before")
    @classmethod
    def _default_label(cls, v: Any) -> Any:
        return _or_default(v, "")


class Citation(BaseModel):
    """A transcript excerpt supporting a chat answer."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(default=DEFAULT_TIMESTAMP, description="Transcript timestamp")
    text: str = Field(default="", description="Relevant text from the transcript")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _default_timestamp(cls, v: Any) -> Any:
        return _or_default(v, DEFAULT_TIMESTAMP)

    @field_validator("text", mode="before")
    @classmethod
    def _default_text(cls, v: Any) -> Any:
        return _or_default(v, "")


class ChatAnswer(BaseModel):
    """Answer to a question about the video, with structured citations."""

    model_config = ConfigDict(frozen=True)

    answer: str = Field(..., description="Answer text, without inline time-codes")
    citations: list[Citation] = Field(default_factory=list)


class VideoAnalysis(BaseModel):
    """Topics timeline for a video."""

    model_config = ConfigDict(frozen=True)

    topics: list[Topic] = Field(default_factory=list)
