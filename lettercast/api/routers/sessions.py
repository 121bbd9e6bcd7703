"""
Session message log endpoint.

Routes: POST /chat-sessions

Dependencies: lettercast.application.adapters.session_log_store
System role: Client-side message logging HTTP API
"""

import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from lettercast.api.deps.dependencies import get_session_log
from lettercast.api.routers.chat.chat_responses import json_response, plain_text_response, preflight_response
from lettercast.application.adapters.session_log_store import SessionLogStore
from lettercast.models.common import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])

SESSION_ID_MAX_LENGTH = 200


def _bad_request(message: str) -> PlainTextResponse:
    return plain_text_response(message, 400)


@router.options("/chat-sessions")
async def chat_sessions_preflight() -> Response:
    """Answer the cross-origin preflight."""
    return preflight_response()


@router.post("/chat-sessions")
async def log_session_message(
    request: Request,
    session_log: SessionLogStore = Depends(get_session_log),
) -> Response:
    """
    Append one message to a session's log.

    Accepts ``message`` as a plain string or an object with a
    ``content`` field.
    """
    try:
        body = json.loads(await request.body() or b"")
    except ValueError as e:
        return _bad_request(f"Invalid JSON in request body: {e}")

    if not isinstance(body, dict):
        return _bad_request("Invalid request body")

    message = body.get("message")
    if isinstance(message, dict):
        content = message.get("content") or ""
    else:
        content = message
    if not isinstance(content, str) or not content.strip():
        return _bad_request("Missing or invalid message: expected string or ChatMessage object with content field")

    session_id = body.get("sessionId") or "default"
    if not isinstance(session_id, str) or len(session_id) > SESSION_ID_MAX_LENGTH:
        return _bad_request(
            f"Invalid sessionId: must be a string with max {SESSION_ID_MAX_LENGTH} characters, "
            f"got {type(session_id).__name__}"
        )

    timestamp = body.get("timestamp") or datetime.now(timezone.utc).isoformat()

    try:
        await session_log.append(session_id, content, str(timestamp))
    except Exception as e:
        logger.error(
            "Failed to log session message",
            extra={"session_id": session_id, "error_type": type(e).__name__, "error_msg": str(e)},
        )
        return plain_text_response(f"Failed to log message to KV storage: {e}", 500)

    return json_response(StatusResponse(status="stored").model_dump())
