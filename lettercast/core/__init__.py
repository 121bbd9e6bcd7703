"""
Core business logic module.

Pure domain rules: exception hierarchy, prompt rendering, content
moderation, reply cleanup, conversation memory and chunk sequencing.
"""

from lettercast.core.exceptions import (
    ChunkOrderViolation,
    LetterSourceError,
    LettercastError,
    RequestValidationFailure,
    StorageError,
    UpstreamError,
    UpstreamNotConfiguredError,
)

__all__ = [
    "LettercastError",
    "RequestValidationFailure",
    "ChunkOrderViolation",
    "UpstreamError",
    "UpstreamNotConfiguredError",
    "StorageError",
    "LetterSourceError",
]
