"""Hanging indent detection."""

from __future__ import annotations

from .constants import ESCAPE_CHAR, HANG_CLOSING_CHARS, HANG_NEUTRAL_CHARS, OPEN_BRACKETS
from .models import Hanging


def should_hang(line: str, column: int) -> Hanging:
    """Decide whether pressing Enter at `column` needs a hanging indent.

    A backslash continuation before the cursor is always PARTIAL. After an
    opening bracket the rest of the line decides: when it holds closing
    brackets and only ``:`` or whitespace besides them the pair is complete
    and the result is FULL; anything else, including an empty rest, is
    PARTIAL.

    Args:
        line: Full text of the line holding the cursor.
        column: Cursor column within `line`.

    Returns:
        Hanging: The classification.

    Examples:
        should_hang("def my_func():", len("def my_func("))  # Hanging.FULL
        should_hang("this_list = [x]", len("this_list = ["))  # Hanging.PARTIAL
        should_hang("this_list = [", len("this_list = ["))  # Hanging.PARTIAL
        should_hang("def f(self):", len("def f(self):"))  # Hanging.NONE
    """
    column = min(column, len(line))
    if column <= 0:
        return Hanging.NONE

    previous = line[column - 1]
    if previous == ESCAPE_CHAR:
        return Hanging.PARTIAL
    if previous not in OPEN_BRACKETS:
        return Hanging.NONE

    rest = set(line[column:]) - HANG_NEUTRAL_CHARS
    if rest and rest <= HANG_CLOSING_CHARS:
        return Hanging.FULL
    return Hanging.PARTIAL
