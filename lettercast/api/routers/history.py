"""
Chat history endpoint.

Routes: GET /chat-history?sessionId=...

Dependencies: lettercast.application.adapters.memory_store
System role: Recent conversation read API
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from lettercast.api.deps.dependencies import get_memory_store
from lettercast.application.adapters.memory_store import ConversationMemoryStore
from lettercast.models.chat import ChatHistoryResponse

router = APIRouter(tags=["history"])

HISTORY_LIMIT = 5


@router.get("/chat-history", response_model=ChatHistoryResponse)
async def chat_history(
    session_id: str | None = Query(default=None, alias="sessionId"),
    memory_store: ConversationMemoryStore = Depends(get_memory_store),
):
    """Last five remembered messages for a session."""
    if not session_id:
        return PlainTextResponse("Missing sessionId parameter", status_code=400)
    messages = await memory_store.recent_messages(session_id, limit=HISTORY_LIMIT)
    return ChatHistoryResponse(messages=messages)
