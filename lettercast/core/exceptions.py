"""
Exception hierarchy for the lettercast proxy.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LettercastError(Exception):
    """Base exception for all lettercast errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RequestValidationFailure(LettercastError):
    """Raised when a chat request body is malformed. Rendered as plain text."""

    status_code = 400


class ChunkOrderViolation(LettercastError):
    """Raised when a letter chunk is requested out of sequence."""

    def __init__(
        self,
        expected_chunk: int,
        requested_chunk: int,
        current_progress: dict[str, Any] | None,
    ) -> None:
        """
        Initialize order violation.

        Args:
            expected_chunk: Chunk number the session must read next
            requested_chunk: Chunk number the client asked for
            current_progress: Stored progress record, or None for a fresh session
        """
        self.expected_chunk = expected_chunk
        self.requested_chunk = requested_chunk
        self.current_progress = current_progress
        super().__init__(
            f"Sequential reading required. Expected chunk {expected_chunk}, got {requested_chunk}",
            {"expected_chunk": expected_chunk, "requested_chunk": requested_chunk},
        )

    def to_body(self) -> dict[str, Any]:
        """Client-facing JSON body."""
        return {
            "error": self.message,
            "expectedChunk": self.expected_chunk,
            "currentProgress": self.current_progress,
        }


class UpstreamError(LettercastError):
    """Raised when the upstream completion service answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize upstream error.

        Args:
            status_code: HTTP status returned upstream (502 for transport failures)
            body: Raw upstream body, relayed to the client verbatim
            details: Additional context
        """
        self.status_code = status_code
        self.body = body
        details = details or {}
        details["status_code"] = status_code
        super().__init__(f"Upstream request failed with status {status_code}", details)


class UpstreamNotConfiguredError(LettercastError):
    """Raised when no upstream API key is configured."""

    def __init__(self) -> None:
        super().__init__("Missing OPENAI_API_KEY")


class StorageError(LettercastError):
    """Raised when a key-value store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (get, put, delete, list)
            key: Key involved in the failed operation
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key
        super().__init__(message, details)


class LetterSourceError(LettercastError):
    """Raised when the narrative letter cannot be fetched or parsed."""

    pass
