"""Data models for html-analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import MALFORMED_HTML


class LineKind(Enum):
    """Classification of a trimmed, non-blank document line.

    Attributes:
        OPENING_TAG: A bare opening tag such as ``<div>``.
        CLOSING_TAG: A bare closing tag such as ``</div>``.
        TEXT: Plain text without any angle brackets.
        INVALID: Tag-like content that does not fit the dialect.
    """

    OPENING_TAG = auto()
    CLOSING_TAG = auto()
    TEXT = auto()
    INVALID = auto()


class MalformedReason(Enum):
    """Diagnostic cause recorded when a scan ends malformed."""

    INVALID_LINE = "line is neither a clean tag nor plain text"
    UNEXPECTED_CLOSING_TAG = "closing tag without an open element"
    MISMATCHED_CLOSING_TAG = "closing tag does not match the innermost open element"
    UNCLOSED_TAGS = "unclosed tags at end of document"
    NO_TEXT = "document contains no text"


@dataclass(frozen=True)
class ClassifiedLine:
    """A single trimmed line and its classification.

    Attributes:
        kind: Line classification.
        content: Line content with surrounding whitespace removed.
        name: Tag name for opening and closing tags, otherwise None.
        line_number: One-based position of the line in the raw document.
    """

    kind: LineKind
    content: str
    name: str | None = None
    line_number: int | None = None


@dataclass
class ScanState:
    """Mutable state of the depth-tracking scan.

    Attributes:
        depth: Number of currently open elements.
        stack: Names of open elements, innermost last.
        max_depth: Deepest depth at which text was recorded, or None.
        result: First text observed at `max_depth`, or None.
        reason: Cause of a malformed verdict once one has been reached.
        error_line: One-based line number that triggered `reason`, if any.
    """

    depth: int = 0
    stack: list[str] = field(default_factory=list)
    max_depth: int | None = None
    result: str | None = None
    reason: MalformedReason | None = None
    error_line: int | None = None

    @property
    def malformed(self) -> bool:
        return self.reason is not None


@dataclass(frozen=True)
class Verdict:
    """Outcome of analyzing one document.

    Exactly one of `text` and `reason` is set.

    Attributes:
        text: Deepest text snippet for a well-formed document.
        depth: Nesting depth of `text`, or None when malformed.
        reason: Diagnostic cause for a malformed document.
        error_line: One-based line number that triggered `reason`, if any.
    """

    text: str | None = None
    depth: int | None = None
    reason: MalformedReason | None = None
    error_line: int | None = None

    @property
    def is_malformed(self) -> bool:
        return self.reason is not None

    @property
    def output(self) -> str:
        """Render the verdict as the snippet or the malformed literal."""
        if self.reason is not None or self.text is None:
            return MALFORMED_HTML
        return self.text
