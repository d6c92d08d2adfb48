"""Line classification for the restricted HTML dialect."""

from __future__ import annotations

from .constants import TAG_CLOSE_PREFIX, TAG_OPEN, TAG_TERMINATOR
from .models import ClassifiedLine, LineKind


def is_valid_tag_name(name: str) -> bool:
    """Check a candidate tag name against the dialect grammar.

    A tag name starts with a letter and continues with letters or decimal
    digits. Letters and digits are judged by Unicode category, so ``"título"``
    is accepted while ``"h-1"`` and ``"1h"`` are not.

    Args:
        name: Candidate tag name, already stripped of surrounding whitespace.

    Returns:
        bool: True when `name` satisfies the grammar.

    Examples:
        is_valid_tag_name("div")  # True
        is_valid_tag_name("h1")  # True
        is_valid_tag_name('a href="x"')  # False
    """
    if not name or not name[0].isalpha():
        return False
    return all(character.isalpha() or character.isdecimal() for character in name[1:])


def tag_names_match(opening: str, closing: str) -> bool:
    """Compare an opening and closing tag name, ignoring case."""
    return opening.casefold() == closing.casefold()


def _tag_line(
    line: str, prefix: str, kind: LineKind, line_number: int | None
) -> ClassifiedLine:
    name = line[len(prefix) : -len(TAG_TERMINATOR)].strip()
    if not is_valid_tag_name(name):
        return ClassifiedLine(LineKind.INVALID, line, line_number=line_number)
    return ClassifiedLine(kind, line, name=name, line_number=line_number)


def classify_line(line: str, line_number: int | None = None) -> ClassifiedLine:
    """Classify a trimmed, non-empty line.

    Closing tags are checked before opening tags because both start with
    ``<``. Any other line containing ``<`` or ``>`` is invalid rather than
    text, so broken tag syntax never passes as content.

    Args:
        line: Line with surrounding whitespace removed.
        line_number: Optional one-based position, carried for diagnostics.

    Returns:
        ClassifiedLine: The line with its kind and, for tags, its name.

    Examples:
        classify_line("</body>").kind  # LineKind.CLOSING_TAG
        classify_line("<a href='x'>").kind  # LineKind.INVALID
        classify_line("Hello").kind  # LineKind.TEXT
    """
    if line.startswith(TAG_CLOSE_PREFIX) and line.endswith(TAG_TERMINATOR):
        return _tag_line(line, TAG_CLOSE_PREFIX, LineKind.CLOSING_TAG, line_number)

    if line.startswith(TAG_OPEN) and line.endswith(TAG_TERMINATOR):
        return _tag_line(line, TAG_OPEN, LineKind.OPENING_TAG, line_number)

    if TAG_OPEN in line or TAG_TERMINATOR in line:
        return ClassifiedLine(LineKind.INVALID, line, line_number=line_number)

    return ClassifiedLine(LineKind.TEXT, line, line_number=line_number)
