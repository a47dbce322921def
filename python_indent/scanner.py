"""Lexical scanning of Python source lines.

The scanner walks a line one character at a time and tells the structural
tracker which characters are real code. String state lives in a
`StringContext` shared by consecutive calls so triple quoted strings can span
lines; everything else is local to the line.
"""

from __future__ import annotations

from collections.abc import Iterator

from .constants import (
    CLOSE_BRACKETS,
    COMMENT_CHAR,
    ESCAPE_CHAR,
    OPEN_BRACKETS,
    QUOTE_CHARS,
    WHITESPACE_CHARS,
)
from .models import CharKind, StringContext


def _advance_string(context: StringContext, char: str, consecutive: int, escaped: bool):
    """Update string state for a character seen inside a string.

    Args:
        context: String state to update.
        char: Character being scanned.
        consecutive: Unescaped delimiters seen in a row, including `char`.
        escaped: Whether `char` is escaped by a preceding backslash.

    Returns:
        tuple[int, bool]: Updated delimiter count and escape flag.
    """
    if escaped:
        # An escaped character cannot escape the one after it
        return consecutive, False

    if char == context.delimiter:
        if context.in_triple_quote:
            if consecutive == 3:
                context.delimiter = None
                context.in_triple_quote = False
                return 0, False
        elif consecutive == 3:
            # Reset so that '''''' opens and closes cleanly
            context.in_triple_quote = True
            return 0, False
        elif consecutive == 2:
            # Either an empty string or the start of a triple quote
            context.check_next_char = True
        elif consecutive == 1:
            context.delimiter = None
        return consecutive, False

    # Raw strings still let a backslash protect the quote character
    return consecutive, char == ESCAPE_CHAR


def scan_line(context: StringContext, line: str) -> Iterator[tuple[int, str, CharKind]]:
    """Classify the characters of one line.

    Whitespace outside strings is skipped and a ``#`` outside strings ends the
    line. Every other character is yielded with its column and kind. The
    scanner is tolerant: unbalanced quotes or brackets never raise.

    Args:
        context: String state carried over from the previous line; updated in
            place.
        line: Line to scan, without its newline.

    Yields:
        tuple[int, str, CharKind]: Column, character and classification.

    Examples:
        list(scan_line(StringContext(), "f(':')"))
    """
    consecutive = 0
    escaped = False

    for column, char in enumerate(line):
        if char == context.delimiter and not escaped:
            consecutive += 1
        elif context.check_next_char:
            # Two delimiters followed by something else: it was an empty string
            consecutive = 0
            context.delimiter = None
        else:
            consecutive = 0

        context.check_next_char = False

        if context.in_string:
            consecutive, escaped = _advance_string(context, char, consecutive, escaped)
            yield column, char, CharKind.STRING
            continue

        if char in OPEN_BRACKETS:
            yield column, char, CharKind.OPEN_BRACKET
        elif char in WHITESPACE_CHARS:
            continue
        elif char == COMMENT_CHAR:
            return
        elif char == ":":
            yield column, char, CharKind.COLON
        elif char in CLOSE_BRACKETS:
            yield column, char, CharKind.CLOSE_BRACKET
        elif char in QUOTE_CHARS:
            context.delimiter = char
            consecutive += 1
            yield column, char, CharKind.STRING_START
        else:
            yield column, char, CharKind.CODE

    if context.check_next_char:
        # A line break is never a third quote
        context.check_next_char = False
        context.delimiter = None
