"""
Transcript data models.

TranscriptSegment is what a transcript source produces (offset in seconds).
TranscriptEntry is the formatted form used as the grounding key: its
timestamp string is the only value a model-produced reference may cite.
"""

from pydantic import BaseModel, ConfigDict, Field


class TranscriptSegment(BaseModel):
    """Raw caption segment from an external transcript source."""

    model_config = ConfigDict(frozen=True)

    offset: float = Field(..., ge=0.0, description="Start of the segment, in seconds")
    text: str = Field(..., description="Caption text")


class TranscriptEntry(BaseModel):
    """Transcript line keyed by its formatted timestamp."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(
        ...,
        description="MM:SS or HH:MM:SS, exactly as rendered in the prompt",
        examples=["00:05", "01:02:03"],
    )
    text: str = Field(..., description="Caption text")
