"""
Reply text cleanup.

Strips greeting boilerplate and leaked prompt scaffolding from model
output. Runs on every streamed partial, so the result of one pass is
always a fixpoint of the next.

Dependencies: re (stdlib)
System role: Output sanitation before moderation and emission
"""

import re

_FLAGS = re.IGNORECASE | re.MULTILINE

_PARENT_GREETING = re.compile(r"Daddy\s+says\s+hello\s+and\s+smiles[^.!?]*[.!?]?\s*", re.IGNORECASE)

_SCAFFOLDING = (
    re.compile(r"SYSTEM[ \t_]*PROMPT[ \t]*:?[^\n]*(?:\n|$)", _FLAGS),
    re.compile(r"^[ \t]*interaction[ \t_]*hint[ \t]*:[^\n]*(?:\n|$)", _FLAGS),
    re.compile(r"^[ \t]*topics?[ \t]*:[^\n]*(?:\n|$)", _FLAGS),
    re.compile(r"^[ \t]*[-=]{2,}[ \t]*$", re.MULTILINE),
)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _greeting_patterns(child_name: str) -> list[re.Pattern[str]]:
    name = re.escape(child_name)
    return [
        re.compile(rf"^Hello,?\s+my\s+sweet\s+{name}[^.!?]*[.!?]?\s*", re.IGNORECASE),
        re.compile(rf"^Hello\s+sweet\s+{name}[^.!?]*[.!?]?\s*", re.IGNORECASE),
        re.compile(rf"^Hello,?\s+{name}[^.!?]*[.!?]?\s*", re.IGNORECASE),
    ]


def _single_pass(text: str, greetings: list[re.Pattern[str]]) -> str:
    for pattern in greetings:
        text = pattern.sub("", text)
    text = _PARENT_GREETING.sub("", text)
    for pattern in _SCAFFOLDING:
        text = pattern.sub("", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def clean_reply(reply: str | None, child_name: str | None = None) -> str:
    """
    Remove repetitive greetings and prompt scaffolding from a reply.

    Removal order: greeting addressed to the child, the parent greeting
    phrase, SYSTEM PROMPT markers, interaction hint lines, topics lines,
    separator lines; then newline runs are collapsed and the text trimmed.
    Passes repeat until the text stops changing.

    Args:
        reply: Raw accumulated model text
        child_name: Name used by the greeting patterns; skipped when empty

    Returns:
        str: Cleaned reply ('' for None or non-string input)
    """
    if not reply or not isinstance(reply, str):
        return ""

    greetings = _greeting_patterns(child_name) if child_name else []
    cleaned = _single_pass(reply, greetings)
    while True:
        again = _single_pass(cleaned, greetings)
        if again == cleaned:
            return cleaned
        cleaned = again
