"""
Chat router package.

Exports the router for the chat proxy endpoint.
"""

from .chat_router import router

__all__ = ["router"]
