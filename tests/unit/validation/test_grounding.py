"""
Unit tests for GroundedValidator and answer sanitization.
"""

import pytest

from video_analyst.models.output_models import ChatAnswer, Citation, Topic
from video_analyst.models.transcript import TranscriptEntry
from video_analyst.validation.grounding import (
    GroundedValidator,
    fallback_label,
    sanitize_answer,
)


class TestGroundTopics:
    """Exact-match filtering and the deterministic fallback."""

    def setup_method(self):
        self.validator = GroundedValidator()

    def test_keeps_only_exact_timestamp_matches(self):
        transcript = [
            TranscriptEntry(timestamp="00:05", text="a"),
            TranscriptEntry(timestamp="00:10", text="b"),
        ]
        candidates = [
            Topic(timestamp="00:05", label="X"),
            Topic(timestamp="00:07", label="Y"),
        ]

        assert self.validator.ground_topics(candidates, transcript) == [
            Topic(timestamp="00:05", label="X")
        ]

    def test_no_fuzzy_matching(self, transcript):
        """Near misses (0:05, 00:05:00, 00:06) are dropped, not corrected."""
        candidates = [
            Topic(timestamp="0:05", label="short form"),
            Topic(timestamp="00:00:05", label="long form"),
            Topic(timestamp="00:06", label="off by one"),
            Topic(timestamp="01:15", label="Mixing"),
        ]

        assert self.validator.ground_topics(candidates, transcript) == [
            Topic(timestamp="01:15", label="Mixing")
        ]

    def test_preserves_candidate_order(self, transcript):
        candidates = [
            Topic(timestamp="05:00", label="Bake"),
            Topic(timestamp="00:10", label="Starter"),
        ]

        result = self.validator.ground_topics(candidates, transcript)

        assert [t.label for t in result] == ["Bake", "Starter"]

    def test_empty_candidates_fall_back_to_first_five_entries(self, transcript):
        assert len(transcript) == 7

        result = self.validator.ground_topics([], transcript)

        assert result == [
            Topic(timestamp=entry.timestamp, label=fallback_label(entry.timestamp))
            for entry in transcript[:5]
        ]

    def test_all_invalid_candidates_fall_back(self, transcript):
        result = self.validator.ground_topics([Topic(timestamp="99:99", label="ghost")], transcript)

        assert [t.timestamp for t in result] == ["00:00", "00:05", "00:10", "00:42", "01:15"]
        assert result[0].label == "Segment at 00:00"

    def test_short_transcript_fallback_uses_every_entry(self):
        transcript = [TranscriptEntry(timestamp="00:01", text="only")]

        assert self.validator.ground_topics([], transcript) == [
            Topic(timestamp="00:01", label="Segment at 00:01")
        ]

    def test_empty_transcript_returns_empty(self):
        assert self.validator.ground_topics([Topic(timestamp="00:05", label="X")], []) == []

    def test_fallback_count_is_configurable(self, transcript):
        validator = GroundedValidator(fallback_count=2)

        assert len(validator.ground_topics([], transcript)) == 2

    def test_invalid_fallback_count(self):
        with pytest.raises(ValueError):
            GroundedValidator(fallback_count=0)


class TestGroundCitations:
    """Same grounding rule, no fallback."""

    def setup_method(self):
        self.validator = GroundedValidator()

    def test_drops_ungrounded_citations(self, transcript):
        citations = [
            Citation(timestamp="00:42", text="Feeding schedule"),
            Citation(timestamp="00:43", text="made up"),
        ]

        assert self.validator.ground_citations(citations, transcript) == [
            Citation(timestamp="00:42", text="Feeding schedule")
        ]

    def test_no_fallback_when_nothing_survives(self, transcript):
        assert self.validator.ground_citations([Citation(timestamp="42:42", text="?")], transcript) == []

    def test_ground_answer_sanitizes_and_grounds(self, transcript):
        answer = ChatAnswer(
            answer="Feed the starter daily [00:42] and bake hot [05:00].",
            citations=[
                Citation(timestamp="00:42", text="Feeding schedule"),
                Citation(timestamp="03:33", text="invented"),
            ],
        )

        result = self.validator.ground_answer(answer, transcript)

        assert result.answer == "Feed the starter daily and bake hot."
        assert result.citations == [Citation(timestamp="00:42", text="Feeding schedule")]


class TestSanitizeAnswer:
    """Inline time-code removal."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("No markers here", "No markers here"),
            ("[00:05] Intro first", "Intro first"),
            ("At the end [01:02:03]", "At the end"),
            ("Mid [1:05] sentence", "Mid sentence"),
            ("Keep [note] and [12] brackets", "Keep [note] and [12] brackets"),
            ("  padded  ", "padded"),
            ("word [00:05]next", "word next"),
            ("word[00:05] next", "word next"),
            ("glued[00:05]together", "gluedtogether"),
            ("Bake it [05:00], then cool [05:30]!", "Bake it, then cool!"),
            ("First line [00:05]\nSecond line", "First line\nSecond line"),
            ("too   many [00:05]   blanks", "too many blanks"),
        ],
    )
    def test_strips_markers(self, text, expected):
        assert sanitize_answer(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "Feed it [00:42] daily [05:00].",
            "[0[00:05]0:05] nested",
            "[00:01][00:02] [00:03]",
            "word [00:05]next [0[00:07]0:08] end",
            "",
        ],
    )
    def test_idempotent(self, text):
        once = sanitize_answer(text)
        assert sanitize_answer(once) == once

    def test_nested_marker_fully_removed(self):
        assert sanitize_answer("[0[00:05]0:05] nested") == "nested"
