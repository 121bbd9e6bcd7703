"""
Chat response builders.

Every chat proxy response carries permissive cross-origin headers.

Dependencies: fastapi
System role: Chat response construction
"""

from typing import Any

from fastapi.responses import JSONResponse, PlainTextResponse, Response

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

SSE_HEADERS = {
    **CORS_HEADERS,
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def plain_text_response(message: str, status_code: int) -> PlainTextResponse:
    """Plain-text error body."""
    return PlainTextResponse(message, status_code=status_code, headers=CORS_HEADERS)


def json_response(body: Any, status_code: int = 200) -> JSONResponse:
    """JSON body with cross-origin headers."""
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def preflight_response() -> Response:
    """Empty preflight answer."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)
