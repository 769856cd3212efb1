"""
Unit tests for output and conversation models.
"""

import pytest
from pydantic import ValidationError

from video_analyst.models.enums import Role
from video_analyst.models.messages import Message
from video_analyst.models.output_models import (
    DEFAULT_TIMESTAMP,
    ChatAnswer,
    Citation,
    Topic,
    VideoAnalysis,
)
from video_analyst.models.transcript import TranscriptSegment


class TestTopic:
    def test_accepts_topic_and_label_keys(self):
        assert Topic.model_validate({"timestamp": "00:05", "topic": "Intro"}).label == "Intro"
        assert Topic.model_validate({"timestamp": "00:05", "label": "Intro"}).label == "Intro"

    @pytest.mark.parametrize("data", [{}, {"timestamp": None, "topic": None}, {"timestamp": ""}])
    def test_missing_fields_default(self, data):
        topic = Topic.model_validate(data)

        assert topic.timestamp == DEFAULT_TIMESTAMP
        assert topic.label == ""

    def test_frozen(self):
        topic = Topic(timestamp="00:05", label="Intro")

        with pytest.raises(ValidationError):
            topic.label = "Changed"


class TestCitation:
    def test_missing_fields_default(self):
        citation = Citation.model_validate({"text": None})

        assert citation == Citation(timestamp="00:00", text="")

    def test_wrong_type_rejected(self):
        with pytest.raises(ValidationError):
            Citation.model_validate({"timestamp": ["00:05"], "text": "x"})


class TestContainers:
    def test_chat_answer_requires_answer(self):
        with pytest.raises(ValidationError):
            ChatAnswer.model_validate({"citations": []})

    def test_chat_answer_citations_default_empty(self):
        assert ChatAnswer(answer="Yes").citations == []

    def test_video_analysis_serializes_label(self):
        analysis = VideoAnalysis(topics=[Topic(timestamp="00:05", label="Intro")])

        assert analysis.model_dump() == {"topics": [{"timestamp": "00:05", "label": "Intro"}]}


class TestMessage:
    def test_to_payload(self):
        message = Message(role=Role.SYSTEM, content="Be terse")

        assert message.to_payload() == {"role": "system", "content": "Be terse"}

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            Message(role="tool", content="x")


def test_segment_offset_must_be_non_negative():
    with pytest.raises(ValidationError):
        TranscriptSegment(offset=-1.0, text="x")
