"""Tests for config/constants.py — fixed replies and keyword patterns."""

from config.constants import (
    AI_OFFLINE_REPLY,
    FALLBACK_REPLIES,
    GENERAL_QUESTION_RE,
    NO_INFO_REPLY,
    REFUSAL_MARKERS,
    Role,
)


class TestRole:
    def test_is_string_enum(self):
        assert Role.USER == "user"
        assert Role.ASSISTANT.value == "assistant"


class TestRefusalMarkers:
    def test_fixed_replies_are_recognized_as_refusals(self):
        # The bot's own canned replies must be filtered out of later transcripts
        assert any(m in NO_INFO_REPLY for m in REFUSAL_MARKERS)
        assert any(m in AI_OFFLINE_REPLY for m in REFUSAL_MARKERS)


class TestFallbackPatterns:
    def test_case_insensitive(self):
        pattern, reply = FALLBACK_REPLIES[0]
        assert pattern.search("HEY there")
        assert reply == "Hey! Want to look up a stock?"

    def test_general_question_anchored_at_start(self):
        assert GENERAL_QUESTION_RE.match("Thanks a lot")
        assert not GENERAL_QUESTION_RE.match("so, thanks")
