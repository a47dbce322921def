"""Structural tracking of partial Python source."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import DEDENT_NEXT_PATTERNS
from .models import BracketPosition, CharKind, ClosedBracket, ParseOutput, StringContext
from .scanner import scan_line


def starts_with_dedent_keyword(line: str) -> bool:
    """Check whether a line starts with a statement that ends its block.

    Only whole words count, so ``return_value = 1`` does not match.

    Args:
        line: Line to inspect.

    Returns:
        bool: True for ``return``, ``pass``, ``break``, ``continue`` and
            ``raise`` statements.

    Examples:
        starts_with_dedent_keyword("    return x")  # True
        starts_with_dedent_keyword("    return_x = 5")  # False
    """
    return any(pattern.search(line) for pattern in DEDENT_NEXT_PATTERNS)


def _close_bracket(output: ParseOutput, row: int) -> None:
    if not output.open_bracket_stack:
        return

    opened = output.open_bracket_stack.pop()
    # A pair opened and closed on the same row says nothing about indentation
    # and would hide earlier pairs, e.g. `).finish()` ending a chained call.
    if opened.row != row:
        output.last_closed = ClosedBracket(open_row=opened.row, close_row=row)


def parse_lines(lines: Sequence[str]) -> ParseOutput:
    """Reconstruct bracket, colon and dedent state from lines of source.

    Lines are scanned once, front to back. A colon only counts as a block
    opener when it is the last significant token of its line (opening
    brackets aside), so dict literals and type hints such as
    ``def f(x: int,`` do not open blocks.

    Args:
        lines: Source lines from the start of the document up to the cursor.

    Returns:
        ParseOutput: Open brackets, last closed multi-line bracket pair, last
            block colon row and dedent state after the final line.

    Examples:
        parse_lines(["def f(x,", "      y):"]).last_colon_row  # 1
    """
    output = ParseOutput()
    context = StringContext()

    for row, line in enumerate(lines):
        output.dedent_next = not context.in_string and starts_with_dedent_keyword(line)

        colon_candidate = False
        for column, _, kind in scan_line(context, line):
            if kind is CharKind.STRING:
                continue

            if kind is CharKind.OPEN_BRACKET:
                # Stays True only while nothing significant follows the bracket
                output.can_hang = True
                output.open_bracket_stack.append(BracketPosition(row=row, column=column))
                continue

            output.can_hang = False
            colon_candidate = kind is CharKind.COLON

            if kind is CharKind.CLOSE_BRACKET:
                _close_bracket(output, row)

        if colon_candidate:
            output.last_colon_row = row

    return output
