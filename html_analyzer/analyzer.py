"""Depth analysis for restricted-dialect HTML documents."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .classifier import classify_line, tag_names_match
from .exceptions import MalformedDocumentError
from .models import ClassifiedLine, LineKind, MalformedReason, ScanState, Verdict

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    r"""Split raw document text into lines.

    Splits on ``\n`` only and keeps a trailing empty segment, so a document
    ending with a newline yields a final ``""``. Carriage returns are left in
    place and disappear when each line is trimmed.

    Examples:
        split_lines("<a>\nHi\n</a>\n")  # ["<a>", "Hi", "</a>", ""]
    """
    return text.split("\n")


def iter_classified(lines: Iterable[str]) -> Iterator[ClassifiedLine]:
    """Lazily trim and classify lines, skipping blank ones.

    Args:
        lines: Raw document lines in order.

    Yields:
        ClassifiedLine: One entry per non-blank line, numbered from 1 against
            the raw input.
    """
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        yield classify_line(line, line_number)


def _mark_malformed(state: ScanState, reason: MalformedReason, line_number: int | None) -> bool:
    state.reason = reason
    state.error_line = line_number
    return False


def _open_tag(state: ScanState, line: ClassifiedLine) -> bool:
    """Push an opening tag; always lets the scan continue."""
    state.stack.append(line.name)
    state.depth += 1
    return True


def _close_tag(state: ScanState, line: ClassifiedLine) -> bool:
    """Pop the innermost element when the closing tag matches it.

    Args:
        state: Scan state to update.
        line: Classified closing tag.

    Returns:
        bool: True when the tag closed the innermost element; False when the
            state has been marked malformed.
    """
    if not state.stack:
        return _mark_malformed(state, MalformedReason.UNEXPECTED_CLOSING_TAG, line.line_number)
    if not tag_names_match(state.stack[-1], line.name):
        return _mark_malformed(state, MalformedReason.MISMATCHED_CLOSING_TAG, line.line_number)

    state.stack.pop()
    state.depth -= 1
    return True


def _record_text(state: ScanState, line: ClassifiedLine) -> bool:
    """Track text found strictly deeper than anything seen so far.

    Ties keep the earlier snippet.
    """
    if state.max_depth is None or state.depth > state.max_depth:
        state.max_depth = state.depth
        state.result = line.content
    return True


def _reject(state: ScanState, line: ClassifiedLine) -> bool:
    return _mark_malformed(state, MalformedReason.INVALID_LINE, line.line_number)


_TRANSITIONS = {
    LineKind.OPENING_TAG: _open_tag,
    LineKind.CLOSING_TAG: _close_tag,
    LineKind.TEXT: _record_text,
    LineKind.INVALID: _reject,
}


def step(state: ScanState, line: ClassifiedLine) -> bool:
    """Apply one classified line to the scan state.

    Args:
        state: Scan state to update in place.
        line: Next classified line in document order.

    Returns:
        bool: True when the scan may continue; False once the document is
            malformed.

    Examples:
        state = ScanState()
        step(state, classify_line("<a>"))  # True, state.depth == 1
    """
    if state.malformed:
        return False
    return _TRANSITIONS[line.kind](state, line)


def finalize(state: ScanState) -> Verdict:
    """Turn the state left after the last line into a verdict.

    Args:
        state: Scan state after every line was consumed, or after the scan
            stopped early.

    Returns:
        Verdict: The recorded snippet, or a malformed verdict when a violation
            occurred, tags remain open, or no text was found.
    """
    if state.reason is not None:
        return Verdict(reason=state.reason, error_line=state.error_line)
    if state.stack:
        return Verdict(reason=MalformedReason.UNCLOSED_TAGS)
    if state.result is None:
        return Verdict(reason=MalformedReason.NO_TEXT)
    return Verdict(text=state.result, depth=state.max_depth)


def scan(lines_or_text: str | Iterable[str]) -> Verdict:
    """Scan a document for its deepest text snippet.

    The scan stops consuming input at the first structural violation.

    Args:
        lines_or_text: Raw document text, or its lines in order.

    Returns:
        Verdict: Deepest snippet with its depth, or a malformed verdict with
            its diagnostic reason.

    Examples:
        scan("<a>\\n<b>\\nHello\\n</b>\\n</a>").text  # "Hello"
        scan("<a>\\n</b>").reason  # MalformedReason.MISMATCHED_CLOSING_TAG
    """
    lines = split_lines(lines_or_text) if isinstance(lines_or_text, str) else lines_or_text

    state = ScanState()
    for line in iter_classified(lines):
        if not step(state, line):
            break

    verdict = finalize(state)
    if verdict.is_malformed:
        logger.debug(
            "Malformed document (%s) at line %s", verdict.reason.value, verdict.error_line
        )
    else:
        logger.debug("Deepest text found at depth %d", verdict.depth)
    return verdict


def analyze(lines_or_text: str | Iterable[str]) -> str:
    """Return the deepest text snippet or ``"malformed HTML"``.

    Args:
        lines_or_text: Raw document text, or its lines in order.

    Returns:
        str: The trimmed snippet at the greatest nesting depth, or the literal
            ``"malformed HTML"``.

    Examples:
        analyze("<a>\\nX\\n<b>\\nY\\n</b>\\nZ\\n</a>")  # "Y"
        analyze("<a></a>")  # "malformed HTML"
    """
    return scan(lines_or_text).output


def check_document(lines_or_text: str | Iterable[str]) -> str:
    """Return the deepest text snippet, raising on malformed documents.

    Raises:
        MalformedDocumentError: If the document violates the dialect, leaves
            tags open, or contains no text.
    """
    verdict = scan(lines_or_text)
    if verdict.reason is not None:
        raise MalformedDocumentError(verdict.reason, verdict.error_line)
    return verdict.text
