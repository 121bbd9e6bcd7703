"""
Test suite for reply text cleanup.

Covers greeting removal, prompt scaffolding removal, newline collapsing
and idempotence on already-cleaned text.

System role: Verification of output sanitation
"""

import pytest

from lettercast.core.text_cleanup import clean_reply

SAMPLES = [
    "Hello, my sweet Harper! I love you.",
    "SYSTEM_PROMPT: be gentle\nI love you so much.",
    "interaction_hint: wave\ntopics: garden, sun\n----\ncontent: You are my sunshine.",
    "Daddy says hello and smiles! Let us play.",
    "Line one\n\n\n\n\nLine two",
    "  ----  \n===\nJust text  ",
    "SYSTEM PROMPT SYSTEM PROMPT: nested\n\n\n\nHello Harper, hi.",
    "",
    "Topics: a\nTopic: b\nINTERACTION HINT: c\nkeep me",
]


class TestCleanReplyRemoval:
    """Test suite for the individual removal rules."""

    def test_should_strip_greeting_addressed_to_child(self) -> None:
        """Test the child greeting is dropped when the name is known."""
        # Act
        result = clean_reply("Hello, my sweet Harper! I love you.", child_name="Harper")

        # Assert
        assert result == "I love you."

    def test_should_keep_greeting_without_child_name(self) -> None:
        """Test greeting patterns only run for a named child."""
        assert clean_reply("Hello, my sweet Harper! I love you.") == "Hello, my sweet Harper! I love you."

    def test_should_strip_parent_greeting_anywhere(self) -> None:
        """Test the repetitive parent greeting phrase is removed."""
        assert clean_reply("Good morning. Daddy says hello and smiles! Let us play.") == "Good morning. Let us play."

    def test_should_strip_prompt_scaffolding_lines(self) -> None:
        """Test leaked SYSTEM_PROMPT, hint and topics lines disappear."""
        # Arrange
        raw = "SYSTEM_PROMPT: whisper\ninteraction_hint: wave\ntopics: garden, sun\nYou are my sunshine."

        # Act
        result = clean_reply(raw)

        # Assert
        assert result == "You are my sunshine."

    def test_should_strip_separator_lines_and_collapse_newlines(self) -> None:
        """Test rule lines are removed and newline runs collapse to one blank line."""
        assert clean_reply("First\n----\n\n\n\nSecond") == "First\n\nSecond"

    @pytest.mark.parametrize("value", [None, "", 42])
    def test_should_return_empty_for_missing_text(self, value) -> None:
        """Test non-string or empty input yields an empty string."""
        assert clean_reply(value) == ""


class TestCleanReplyIdempotence:
    """Cleaning already-cleaned text changes nothing."""

    @pytest.mark.parametrize("sample", SAMPLES)
    @pytest.mark.parametrize("child_name", [None, "Harper"])
    def test_clean_twice_equals_clean_once(self, sample: str, child_name: str | None) -> None:
        """Test clean(clean(x)) == clean(x)."""
        once = clean_reply(sample, child_name)
        assert clean_reply(once, child_name) == once

    def test_cumulative_prefixes_are_stable(self) -> None:
        """Test every streamed prefix is a fixpoint after one pass."""
        text = "SYSTEM_PROMPT: soft\n\nHello Harper! I love you.\n\n\n\nSweet dreams."
        for end in range(1, len(text) + 1):
            once = clean_reply(text[:end], "Harper")
            assert clean_reply(once, "Harper") == once
