"""
Chat error handling utilities.

Decorator that maps proxy exceptions onto the responses the chat
endpoint promises: plain text for input and configuration errors,
JSON for order violations, upstream bodies relayed verbatim.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from lettercast.core.exceptions import ChunkOrderViolation, UpstreamError, UpstreamNotConfiguredError
from lettercast.observability.log_utils import log_exception_with_context

from .chat_responses import json_response, plain_text_response
from .chat_validators import ChatValidationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_chat_errors(func: F) -> F:
    """
    Decorator to turn chat proxy errors into responses.

    This centralizes:
    - Logging of errors with context
    - Mapping specific exceptions to HTTP status codes
    - Cross-origin headers on every error body
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ChatValidationError as e:
            logger.warning("Rejected chat request", extra={"error_msg": str(e)})
            return plain_text_response(e.message, e.status_code)

        except UpstreamNotConfiguredError as e:
            logger.error("Upstream credentials missing")
            return plain_text_response(e.message, 500)

        except ChunkOrderViolation as e:
            return json_response(e.to_body(), status_code=400)

        except UpstreamError as e:
            logger.warning(
                "Relaying upstream error",
                extra={"status_code": e.status_code},
            )
            return plain_text_response(e.body, e.status_code)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected error in chat proxy", e)
            return plain_text_response("Internal server error", 500)

    return wrapper  # type: ignore
