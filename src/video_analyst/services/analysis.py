"""
Video analysis service.

Wires the full pipeline for the two requests the application serves:

    transcript -> prompt -> generate (retry + fallback) -> parse -> ground

Only AllBackendsExhausted, GenerationCancelled, TranscriptNotFoundError,
TranscriptSourceError and InvalidRequestError (bad input) ever leave this
service; parsing and grounding problems degrade to salvage/fallback values.
"""

import asyncio
from typing import Optional, Sequence

import structlog

from video_analyst.llm.prompt_builder import PromptBuilder
from video_analyst.models.messages import Conversation
from video_analyst.models.output_models import ChatAnswer, VideoAnalysis
from video_analyst.models.transcript import TranscriptEntry
from video_analyst.retry.exceptions import GenerationCancelled
from video_analyst.retry.orchestrator import ModelFallbackOrchestrator
from video_analyst.services.exceptions import InvalidRequestError
from video_analyst.transcripts.formatting import format_transcript
from video_analyst.transcripts.source import TranscriptNotFoundError, TranscriptSource
from video_analyst.validation.grounding import GroundedValidator
from video_analyst.validation.parser import StructuredOutputParser

logger = structlog.get_logger(__name__)


class VideoAnalysisService:
    """
    Topic analysis and question answering over video transcripts.

    Stateless apart from read-only collaborators, so one instance can serve
    any number of concurrent requests.
    """

    def __init__(
        self,
        orchestrator: ModelFallbackOrchestrator,
        transcript_source: TranscriptSource,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[StructuredOutputParser] = None,
        validator: Optional[GroundedValidator] = None,
        generation_timeout: Optional[float] = None,
    ):
        """
        Initialize the service.

        Args:
            orchestrator: Model fallback orchestrator
            transcript_source: Source of caption segments
            prompt_builder: Prompt builder (default templates if None)
            parser: Structured output parser
            validator: Grounded validator
            generation_timeout: Overall deadline for one generate() call, seconds
        """
        self.orchestrator = orchestrator
        self.transcript_source = transcript_source
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or StructuredOutputParser()
        self.validator = validator or GroundedValidator()
        self.generation_timeout = generation_timeout

    async def analyze_video(self, video_ref: str) -> VideoAnalysis:
        """
        Build a grounded topics timeline for a video.

        Raises:
            InvalidRequestError: Blank video reference
            TranscriptNotFoundError: The source has no transcript
            TranscriptSourceError: The transcript provider failed
            AllBackendsExhausted: Every backend failed
            GenerationCancelled: generation_timeout elapsed
        """
        if not video_ref or not video_ref.strip():
            raise InvalidRequestError("video_ref is required", details={"field": "video_ref"})

        segments = await self.transcript_source.fetch(video_ref)
        if not segments:
            raise TranscriptNotFoundError(video_ref, reason="Transcript source returned no segments")
        transcript = format_transcript(segments)

        log = logger.bind(video_ref=video_ref, transcript_entries=len(transcript))
        log.info("Analyzing video")

        messages = self.prompt_builder.build_topic_analysis(transcript)
        raw = await self._generate(messages)
        candidates = self.parser.parse_topics(raw)
        topics = self.validator.ground_topics(candidates, transcript)

        log.info("Video analysis complete", candidates=len(candidates), topics=len(topics))
        return VideoAnalysis(topics=topics)

    async def answer_question(
        self,
        question: str,
        transcript: Sequence[TranscriptEntry],
    ) -> ChatAnswer:
        """
        Answer a question about a transcript with grounded citations.

        Raises:
            InvalidRequestError: Blank question or empty transcript
            AllBackendsExhausted: Every backend failed
            GenerationCancelled: generation_timeout elapsed
        """
        if not question or not question.strip():
            raise InvalidRequestError(
                "Question and transcript are required", details={"field": "question"}
            )
        if not transcript:
            raise InvalidRequestError(
                "Question and transcript are required", details={"field": "transcript"}
            )

        messages = self.prompt_builder.build_video_chat(question, transcript)
        raw = await self._generate(messages)
        parsed = self.parser.parse_chat_answer(raw)
        answer = self.validator.ground_answer(parsed, transcript)

        logger.info(
            "Question answered",
            transcript_entries=len(transcript),
            citations=len(answer.citations),
            dropped_citations=len(parsed.citations) - len(answer.citations),
        )
        return answer

    async def _generate(self, messages: Conversation) -> str:
        if self.generation_timeout is None:
            return await self.orchestrator.generate(messages)
        try:
            return await asyncio.wait_for(
                self.orchestrator.generate(messages), timeout=self.generation_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error("Generation deadline exceeded", timeout_seconds=self.generation_timeout)
            raise GenerationCancelled(self.generation_timeout) from e
