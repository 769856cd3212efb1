"""
Prompt builder for generation requests.

Responsible for:
- Loading and rendering Jinja2 templates (topic analysis, video chat)
- Rendering transcript lines as "[timestamp]: text" so the backend sees
  exactly the timestamp strings grounding will accept
- Wrapping the rendered prompt into a conversation
"""

from pathlib import Path
from typing import Optional, Sequence

import structlog
from jinja2 import Environment, FileSystemLoader

from video_analyst.models.enums import Role
from video_analyst.models.messages import Message
from video_analyst.models.transcript import TranscriptEntry


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptBuilder:
    """
    Build conversations for the topic-analysis and video-chat requests.

    Both prompts are sent as a single user message; the backend is asked
    for a JSON object in the reply.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing topic_analysis.txt and
                video_chat.txt (defaults to the templates shipped with the package)
        """
        self.templates_dir = Path(templates_dir or DEFAULT_TEMPLATES_DIR)

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.topic_template = self.jinja_env.get_template("topic_analysis.txt")
            self.chat_template = self.jinja_env.get_template("video_chat.txt")
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_topic_analysis(self, transcript: Sequence[TranscriptEntry]) -> list[Message]:
        """
        Build the conversation asking for a topics timeline.

        Args:
            transcript: Formatted transcript entries

        Returns:
            Single-message conversation
        """
        rendered = self.topic_template.render(transcript=transcript).strip()
        logger.debug(
            "Topic analysis prompt built",
            transcript_entries=len(transcript),
            prompt_length=len(rendered),
        )
        return [Message(role=Role.USER, content=rendered)]

    def build_video_chat(
        self,
        question: str,
        transcript: Sequence[TranscriptEntry],
    ) -> list[Message]:
        """
        Build the conversation asking a question about the transcript.

        Args:
            question: User question
            transcript: Formatted transcript entries

        Returns:
            Single-message conversation
        """
        rendered = self.chat_template.render(
            question=question.strip(),
            transcript=transcript,
        ).strip()
        logger.debug(
            "Video chat prompt built",
            transcript_entries=len(transcript),
            question_length=len(question),
            prompt_length=len(rendered),
        )
        return [Message(role=Role.USER, content=rendered)]
