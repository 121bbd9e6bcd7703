"""
Chat proxy endpoint.

Routes:
- POST /chat-with-daddy - Chat, letter or body generation completion
- OPTIONS /chat-with-daddy - Cross-origin preflight

Dependencies: lettercast.application.services.chat_proxy_service
System role: Chat proxy HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response, StreamingResponse

from lettercast.api.deps.dependencies import get_chat_proxy_service
from lettercast.application.services.chat_proxy_service import ChatProxyService

from .chat_error_handling import handle_chat_errors
from .chat_responses import SSE_HEADERS, json_response, preflight_response
from .chat_validators import parse_chat_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.options("/chat-with-daddy")
async def chat_preflight() -> Response:
    """Answer the cross-origin preflight."""
    return preflight_response()


@router.post("/chat-with-daddy")
@handle_chat_errors
async def chat_with_daddy(
    request: Request,
    service: ChatProxyService = Depends(get_chat_proxy_service),
) -> Response:
    """
    Proxy one chat turn to the upstream model.

    The body is read raw so malformed input gets the proxy's own
    plain-text errors rather than FastAPI's validation envelope.

    Args:
        request: Incoming request
        service: Chat proxy orchestrator

    Returns:
        Response: SSE stream of partial and terminal events, or one JSON reply
    """
    chat_request = parse_chat_request(await request.body())
    prepared = await service.prepare(chat_request)

    if prepared.stream:
        upstream = await service.open_stream(prepared)
        return StreamingResponse(
            service.stream_events(prepared, upstream),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )

    reply = await service.complete(prepared)
    return json_response(reply.model_dump(by_alias=True))
