"""Dedenting of block continuation lines such as ``else:``."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import CONTINUATION_PATTERN, OPENER_PATTERNS
from .indentation import indentation_level


def find_block_opener(lines: Sequence[str], keyword: str) -> int | None:
    """Find the nearest line before the last one that `keyword` can continue.

    Args:
        lines: Source lines; the last one holds the continuation keyword.
        keyword: One of ``elif``, ``else``, ``except`` or ``finally``.

    Returns:
        int | None: Row of the matching ``if``/``try``/``for``/``while``
            header, or None when there is none.

    Examples:
        find_block_opener(["try:", "    pass", "except:"], "except")  # 0
    """
    pattern = OPENER_PATTERNS.get(keyword)
    if pattern is None:
        return None

    for row in range(len(lines) - 2, -1, -1):
        stripped = lines[row].strip()
        if stripped.endswith(":") and pattern.match(stripped):
            return row
    return None


def current_line_dedentation(lines: Sequence[str], tab_size: int) -> int:
    """Return how many leading characters to remove from the last line.

    Only ``elif``, ``else``, ``except`` and ``finally`` headers dedent. The
    amount never exceeds one level, the line's own indentation, or the
    distance to the matching opener, so an ``else`` never moves left of its
    ``if``.

    Args:
        lines: Source lines up to the cursor; the last one is being completed.
        tab_size: Columns per indentation level.

    Returns:
        int: Non-negative number of characters to delete.

    Examples:
        current_line_dedentation(["if True:", "    pass", "    else:"], 4)  # 4
        current_line_dedentation(["if True:", "    pass", "else:"], 4)  # 0
    """
    if not lines:
        return 0

    line = lines[-1]
    trimmed = line.strip()
    if not trimmed.endswith(":"):
        return 0

    match = CONTINUATION_PATTERN.match(trimmed)
    if match is None:
        return 0

    opener_row = find_block_opener(lines, match.group(1))
    if opener_row is None:
        return 0

    current_indent = indentation_level(line)
    opener_indent = indentation_level(lines[opener_row])
    return max(0, min(tab_size, current_indent, current_indent - opener_indent))
