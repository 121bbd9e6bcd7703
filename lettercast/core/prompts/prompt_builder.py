"""
System prompt assembly.

Combines a rendered persona or letter base prompt with the
children-based quote block and loving-inspiration quotes.

Dependencies: lettercast.core.prompts.persona_templates, lettercast.models.chat
System role: Upstream system prompt construction
"""

import re
from typing import Iterable, Sequence

from lettercast.core.prompts.persona_templates import (
    CHUNK_STYLE_PLACEHOLDER,
    DEFAULT_CHUNK_STYLE,
    render_persona_prompt,
)
from lettercast.models.chat import ChatMessage, ChildrenQuote, Quote

CHILDREN_QUOTE_TYPES = frozenset({"joy", "Dad and Harper", "calendar_quote"})

CHILDREN_QUOTES_HEADER = (
    "Children-based quotes to include (always end your response with one of these):"
)
INSPIRATION_HEADER = (
    "Loving inspiration quotes (use these as inspiration for your tone and message, "
    "but always end with a children-based quote from above):"
)
INSPIRATION_ONLY_HEADER = (
    "Loving inspiration quotes (use these as inspiration for your tone and message):"
)

_STYLE_LINE = re.compile(r"SYSTEM_PROMPT:\s*(.+?)(?:\n|$)")


def format_children_quotes(quotes: Iterable[Quote]) -> str:
    """Bullet list of quotes whose category is on the allow-list."""
    return "\n".join(
        f"- ({quote.response_type}) {quote.text}"
        for quote in quotes
        if quote.response_type in CHILDREN_QUOTE_TYPES
    )


def format_inspiration_quotes(children_quotes: Iterable[ChildrenQuote]) -> str:
    """Bullet list of loving-inspiration quotes, quoted verbatim."""
    return "\n".join(f'- "{item.quote}"' for item in children_quotes)


def build_chat_system_prompt(
    persona_id: str | None,
    child_name: str,
    child_age: int | str,
    quotes: Sequence[Quote],
    children_quotes: Sequence[ChildrenQuote],
) -> str:
    """
    Render the chat-mode system prompt.

    Args:
        persona_id: Persona identifier
        child_name: Child's display name
        child_age: Child's age in years
        quotes: Categorised quotes; only allow-listed categories are used
        children_quotes: Loving-inspiration quotes

    Returns:
        str: Persona prompt followed by the quote block, if any
    """
    base = render_persona_prompt(persona_id, child_name, child_age)
    quote_text = format_children_quotes(quotes)
    inspiration = format_inspiration_quotes(children_quotes)

    if inspiration:
        if quote_text:
            quote_text = f"{quote_text}\n\n{INSPIRATION_HEADER}\n{inspiration}"
        else:
            quote_text = f"{INSPIRATION_ONLY_HEADER}\n{inspiration}"

    if not quote_text:
        return base
    return f"{base}\n\n{CHILDREN_QUOTES_HEADER}\n{quote_text}"


def build_letter_system_prompt(
    base_prompt: str,
    chunk_style: str | None,
    quotes: Sequence[Quote],
    children_quotes: Sequence[ChildrenQuote],
) -> str:
    """
    Render the letter-mode system prompt.

    Args:
        base_prompt: Rendered letter base prompt or a caller-supplied override
        chunk_style: Style hint for the chunk being read
        quotes: Categorised quotes; only allow-listed categories are used
        children_quotes: Loving-inspiration quotes

    Returns:
        str: Prompt with the style substituted and quote blocks appended
    """
    prompt = base_prompt.replace(CHUNK_STYLE_PLACEHOLDER, chunk_style or DEFAULT_CHUNK_STYLE, 1)

    quote_text = format_children_quotes(quotes)
    if quote_text:
        prompt = f"{prompt}\n\n{CHILDREN_QUOTES_HEADER}\n{quote_text}"

    inspiration = format_inspiration_quotes(children_quotes)
    if inspiration:
        prompt = f"{prompt}\n\n{INSPIRATION_HEADER}\n{inspiration}"

    return prompt


def extract_style_hint(messages: Sequence[ChatMessage]) -> str | None:
    """
    Find a ``SYSTEM_PROMPT: ...`` line in the last user message.

    Args:
        messages: Request messages in order

    Returns:
        str | None: The style text, or None when absent
    """
    user_messages = [message for message in messages if message.role == "user"]
    if not user_messages:
        return None
    match = _STYLE_LINE.search(user_messages[-1].content)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None
