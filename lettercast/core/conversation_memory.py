"""
Conversation memory policy.

Pure functions that roll a session's memory forward and turn it into
upstream context. Storage lives in the application adapters.

Dependencies: lettercast.models
System role: Memory window and summary rules
"""

from typing import Sequence

from lettercast.models.chat import ChatMessage
from lettercast.models.memory import ConversationMemory

RECENT_WINDOW = 20
CONTEXT_WINDOW = 10
SUMMARY_THRESHOLD = 10
SUMMARY_INTERVAL = 5


def summarize(total_messages: int) -> str:
    """Deterministic placeholder summary."""
    return f"Conversation with {total_messages} messages about various topics."


def update_memory(
    memory: ConversationMemory | None,
    new_messages: Sequence[ChatMessage],
) -> ConversationMemory:
    """
    Append a completed turn to memory.

    Keeps the newest 20 messages, counts every appended message, and
    refreshes the summary on every 5th message once more than 10 have
    been seen. The input is not mutated.

    Args:
        memory: Current memory, or None for a fresh session
        new_messages: Messages of the completed turn, oldest first

    Returns:
        ConversationMemory: The updated memory
    """
    current = memory or ConversationMemory()
    recent = [*current.recent_messages, *new_messages][-RECENT_WINDOW:]
    total = current.total_messages + len(new_messages)

    summary = current.summary
    if total > SUMMARY_THRESHOLD and total % SUMMARY_INTERVAL == 0:
        summary = summarize(total)

    return ConversationMemory(summary=summary, recent_messages=recent, total_messages=total)


def build_context(
    memory: ConversationMemory | None,
    messages: Sequence[ChatMessage],
) -> list[ChatMessage]:
    """
    Prefix the current turn with remembered context.

    Args:
        memory: Stored memory, or None
        messages: Non-system messages of the current request

    Returns:
        list[ChatMessage]: Summary system message (if any), the last 10
        remembered messages, then the current messages
    """
    if memory is None:
        return list(messages)

    context: list[ChatMessage] = []
    if memory.summary:
        context.append(
            ChatMessage(role="system", content=f"Previous conversation summary: {memory.summary}")
        )
    context.extend(memory.recent_messages[-CONTEXT_WINDOW:])
    context.extend(messages)
    return context
