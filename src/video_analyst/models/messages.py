"""
Conversation models sent to generation backends.

A conversation is an ordered sequence of Message objects. Messages are
frozen: once a conversation has been sent it is never mutated, so the
same tuple can be re-sent verbatim on every retry and fallback.
"""

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from video_analyst.models.enums import Role

# Backends are addressed by plain model identifiers (e.g. "gemini-1.5-flash").
BackendIdentifier = str


class Message(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Message author: system, user or assistant")
    content: str = Field(..., description="Message text")

    def to_payload(self) -> dict[str, str]:
        """Render as the wire dict expected by chat-completions APIs."""
        return {"role": self.role.value, "content": self.content}


Conversation = Sequence[Message]
