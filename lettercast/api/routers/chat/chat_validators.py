"""
Chat request validation.

Structural checks the proxy performs before pydantic parsing, so that
each failure maps to a short plain-text message.

Dependencies: pydantic, lettercast.models.chat
System role: Chat request validation
"""

import json
from typing import Any

from pydantic import ValidationError

from lettercast.core.exceptions import RequestValidationFailure
from lettercast.models.chat import VALID_ROLES, ChatRequest


class ChatValidationError(RequestValidationFailure, ValueError):
    """Raised when a chat request body is rejected."""


_ARRAY_FIELDS = ("messages", "quotes", "letterChunks")


def _validate_message(message: Any) -> None:
    if not isinstance(message, dict):
        raise ChatValidationError("Invalid message structure")
    role = message.get("role")
    content = message.get("content")
    if not role or not isinstance(content, str) or not content:
        raise ChatValidationError("Invalid message structure")
    if role not in VALID_ROLES:
        raise ChatValidationError("Invalid message role")


def parse_chat_request(raw_body: bytes) -> ChatRequest:
    """
    Decode and validate a chat request body.

    Args:
        raw_body: Raw HTTP request body

    Returns:
        ChatRequest: Parsed request

    Raises:
        ChatValidationError: With the client-facing message
    """
    try:
        body = json.loads(raw_body or b"")
    except ValueError as e:
        raise ChatValidationError("Bad JSON") from e

    if not isinstance(body, dict):
        raise ChatValidationError("Invalid request body")

    for name in _ARRAY_FIELDS:
        if name in body and not isinstance(body[name], list):
            raise ChatValidationError(f"{name} must be an array")

    for message in body.get("messages", []):
        _validate_message(message)

    try:
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        raise ChatValidationError("Invalid request body") from e
