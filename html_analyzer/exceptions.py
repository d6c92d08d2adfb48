"""Package-specific exception types."""

from __future__ import annotations

from .models import MalformedReason


class MalformedDocumentError(ValueError):
    """Raised when a document violates the restricted HTML dialect.

    Args:
        reason: Diagnostic cause of the malformed verdict.
        line_number: One-based index of the offending line, when known.
    """

    def __init__(self, reason: MalformedReason, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.line_number is None:
            return f"Malformed document: {self.reason.value}"
        return f"Malformed document at line {self.line_number}: {self.reason.value}"


class FetchError(Exception):
    """Raised when a document cannot be retrieved."""


class DocumentTooLargeError(FetchError):
    """Raised when a response body exceeds the configured size limit.

    Args:
        url: Locator of the rejected document.
        limit: Maximum number of bytes permitted.
    """

    def __init__(self, url: str, limit: int):
        self.url = url
        self.limit = limit
        super().__init__(f"{url} exceeds the maximum allowed size of {limit} bytes")
