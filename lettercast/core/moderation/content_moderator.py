"""
Rule-based content moderation for child-facing text.

Pure classifier over a finished text span. Rejection is to an empty
string; ``sanitize_content`` is a separate softening transform that
callers may apply on their own.

Dependencies: re (stdlib), lettercast.models.moderation
System role: Safety gate between the upstream model and the client
"""

import re

from lettercast.models.moderation import ContentType, ModerationVerdict

DENYLIST: tuple[str, ...] = (
    # Violence
    "kill", "death", "dead", "die", "dying", "murder", "fight", "war", "weapon", "gun", "knife",
    # Negative emotions
    "hate", "hated", "hating", "angry", "anger", "rage", "furious",
    # Adult themes
    "sex", "sexual", "naked", "nude", "drugs", "alcohol", "smoke", "smoking",
    # Scary content
    "ghost", "monster", "scary", "terrifying", "nightmare", "haunted",
    # Insults
    "stupid", "idiot", "dumb", "ugly", "fat", "skinny", "weird",
)

POSITIVE_WORDS: tuple[str, ...] = (
    "love", "happy", "joy", "fun", "friend", "family", "smile", "laugh",
    "play", "adventure", "dream", "magic", "wonder", "kind", "gentle",
    "sweet", "cuddle", "hug", "kiss", "beautiful", "amazing", "wonderful",
)

GENTLE_REPLACEMENTS: dict[str, str] = {
    "kill": "stop",
    "death": "end",
    "dead": "gone",
    "die": "stop",
    "dying": "ending",
    "fight": "play",
    "war": "adventure",
    "weapon": "tool",
    "gun": "toy",
    "knife": "spoon",
    "hate": "don't like",
    "angry": "upset",
    "rage": "feeling big",
    "furious": "very upset",
    "stupid": "silly",
    "idiot": "friend",
    "dumb": "quiet",
    "ugly": "different",
    "fat": "big",
    "skinny": "little",
    "weird": "special",
    "ghost": "friend",
    "monster": "character",
    "scary": "exciting",
    "terrifying": "surprising",
    "nightmare": "dream",
    "haunted": "magical",
}

MAX_LENGTH = 500
TYPE_MAX_LENGTH: dict[ContentType, tuple[int, str]] = {
    ContentType.TILE_TITLE: (100, "Title too long"),
    ContentType.CHAT_MESSAGE: (200, "Message too long for chat"),
}
SENTIMENT_CHECKED = frozenset({ContentType.CHAT_MESSAGE, ContentType.TILE_BODY, ContentType.TILE_TITLE})

_REPLACEMENT_PATTERNS = [
    (re.compile(rf"\b{re.escape(bad)}\b", re.IGNORECASE), good)
    for bad, good in GENTLE_REPLACEMENTS.items()
]


def contains_denylisted(text: str) -> bool:
    """Case-insensitive substring match against the denylist."""
    lowered = text.lower()
    return any(word in lowered for word in DENYLIST)


def has_positive_sentiment(text: str) -> bool:
    """
    Check the density of positive words.

    Texts under 10 words always pass. Otherwise the number of distinct
    positive words present must reach 20% of one tenth of the word count.
    """
    lowered = text.lower()
    positive_count = sum(1 for word in POSITIVE_WORDS if word in lowered)
    total_words = len(text.split())
    if total_words < 10:
        return True
    return positive_count / max(total_words * 0.1, 1) >= 0.2


def moderate(text: str | None, content_type: ContentType | str = ContentType.GENERAL) -> ModerationVerdict:
    """
    Classify a finished text span.

    Args:
        text: Cleaned text to check
        content_type: Kind of content; selects sentiment and length rules

    Returns:
        ModerationVerdict: Approved verdicts carry the text unchanged,
        rejected ones carry an empty moderated_content
    """
    content_type = ContentType.parse(content_type)

    if not text or not isinstance(text, str):
        return ModerationVerdict(
            approved=False,
            reason="Invalid content",
            moderated_content="",
            original_content=text if isinstance(text, str) else "",
            content_type=content_type,
        )

    issues: list[str] = []

    if contains_denylisted(text):
        issues.append("Contains inappropriate words")

    if content_type in SENTIMENT_CHECKED and not has_positive_sentiment(text):
        issues.append("Lacks positive sentiment")

    if len(text) > MAX_LENGTH:
        issues.append("Content too long")

    type_limit = TYPE_MAX_LENGTH.get(content_type)
    if type_limit and len(text) > type_limit[0]:
        issues.append(type_limit[1])

    if issues:
        return ModerationVerdict(
            approved=False,
            reason=", ".join(issues),
            moderated_content="",
            original_content=text,
            content_type=content_type,
        )

    return ModerationVerdict(
        approved=True,
        reason="Approved",
        moderated_content=text,
        original_content=text,
        content_type=content_type,
    )


def sanitize_content(text: str | None) -> str:
    """
    Replace denylisted words with gentle alternatives.

    Matches whole words only, case-insensitively.

    Args:
        text: Text to soften

    Returns:
        str: Softened text ('' for empty or non-string input)
    """
    if not text or not isinstance(text, str):
        return ""
    for pattern, replacement in _REPLACEMENT_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
