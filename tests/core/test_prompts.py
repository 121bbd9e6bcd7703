"""
Test suite for persona templates and system prompt assembly.

System role: Verification of prompt rendering
"""

from lettercast.core.prompts import (
    DEFAULT_CHUNK_STYLE,
    PERSONA_TEMPLATES,
    build_chat_system_prompt,
    build_letter_system_prompt,
    extract_style_hint,
    get_persona_template,
    list_persona_templates,
    render_letter_base_prompt,
    render_persona_prompt,
)
from lettercast.core.prompts.persona_templates import CHUNK_STYLE_PLACEHOLDER
from lettercast.core.prompts.prompt_builder import (
    CHILDREN_QUOTES_HEADER,
    INSPIRATION_HEADER,
    INSPIRATION_ONLY_HEADER,
)
from lettercast.models.chat import ChatMessage, ChildrenQuote, Quote


class TestPersonaTemplates:
    """Test suite for the persona catalogue."""

    def test_catalogue_lists_four_personas(self) -> None:
        """Test the catalogue order and ids."""
        assert [t.id for t in list_persona_templates()] == ["dad", "mum", "grandpa", "grandma"]

    def test_unknown_persona_falls_back_to_dad(self) -> None:
        assert get_persona_template("uncle") is PERSONA_TEMPLATES["dad"]
        assert get_persona_template(None) is PERSONA_TEMPLATES["dad"]

    def test_render_substitutes_child_values(self) -> None:
        """Test placeholders are replaced everywhere."""
        # Act
        prompt = render_persona_prompt("mum", "Harper", 4)

        # Assert
        assert "Harper" in prompt
        assert "4-year-old" in prompt
        assert "{childName}" not in prompt
        assert "{childAge}" not in prompt

    def test_letter_base_prompt_keeps_style_placeholder(self) -> None:
        prompt = render_letter_base_prompt("grandpa", "Harper", 5)
        assert CHUNK_STYLE_PLACEHOLDER in prompt
        assert "{parentEnergy}" not in prompt


class TestChatSystemPrompt:
    """Test suite for chat-mode prompt assembly."""

    def test_without_quotes_returns_persona_prompt(self) -> None:
        base = render_persona_prompt("dad", "Harper", 3)
        assert build_chat_system_prompt("dad", "Harper", 3, [], []) == base

    def test_filters_quotes_by_category(self) -> None:
        """Test only allow-listed quote categories are appended."""
        # Arrange
        quotes = [
            Quote(response_type="joy", text="Sunshine"),
            Quote(response_type="xmas", text="Snow"),
            Quote(response_type="calendar_quote", text="Today"),
        ]

        # Act
        prompt = build_chat_system_prompt("dad", "Harper", 3, quotes, [])

        # Assert
        assert CHILDREN_QUOTES_HEADER in prompt
        assert "- (joy) Sunshine" in prompt
        assert "- (calendar_quote) Today" in prompt
        assert "Snow" not in prompt

    def test_inspiration_only_uses_short_header(self) -> None:
        prompt = build_chat_system_prompt("dad", "Harper", 3, [], [ChildrenQuote(quote="Be brave")])
        assert INSPIRATION_ONLY_HEADER in prompt
        assert '- "Be brave"' in prompt

    def test_inspiration_follows_children_quotes(self) -> None:
        prompt = build_chat_system_prompt(
            "dad", "Harper", 3, [Quote(response_type="joy", text="Sunshine")], [ChildrenQuote(quote="Be brave")]
        )
        assert prompt.index("- (joy) Sunshine") < prompt.index(INSPIRATION_HEADER)


class TestLetterSystemPrompt:
    """Test suite for letter-mode prompt assembly."""

    def test_substitutes_chunk_style(self) -> None:
        prompt = build_letter_system_prompt("Style: [CHUNK_STYLE]", "whisper", [], [])
        assert prompt == "Style: whisper"

    def test_uses_default_style_when_missing(self) -> None:
        prompt = build_letter_system_prompt("Style: [CHUNK_STYLE]", None, [], [])
        assert prompt == f"Style: {DEFAULT_CHUNK_STYLE}"

    def test_appends_quote_blocks(self) -> None:
        prompt = build_letter_system_prompt(
            "Base [CHUNK_STYLE]",
            "soft",
            [Quote(response_type="Dad and Harper", text="Us")],
            [ChildrenQuote(quote="Hope")],
        )
        assert f"{CHILDREN_QUOTES_HEADER}\n- (Dad and Harper) Us" in prompt
        assert f"{INSPIRATION_HEADER}\n- \"Hope\"" in prompt


class TestExtractStyleHint:
    """Test suite for reading a style line from the last user message."""

    def test_reads_last_user_message(self) -> None:
        messages = [
            ChatMessage(role="user", content="SYSTEM_PROMPT: first"),
            ChatMessage(role="assistant", content="ok"),
            ChatMessage(role="user", content="SYSTEM_PROMPT:  calm and slow \ncontent: hi"),
        ]
        assert extract_style_hint(messages) == "calm and slow"

    def test_returns_none_without_marker(self) -> None:
        assert extract_style_hint([ChatMessage(role="user", content="hi")]) is None
        assert extract_style_hint([]) is None
