"""Next-line indentation from the structural state of partial source."""

from __future__ import annotations

from collections.abc import Sequence

from .models import IndentationInfo, IndentDecision, ParseOutput
from .parser import parse_lines


def indentation_level(line: str) -> int:
    """Count the leading whitespace characters of a line.

    Whitespace-only lines count in full.

    Examples:
        indentation_level("    hi")  # 4
        indentation_level("  ")  # 2
        indentation_level("")  # 0
    """
    return len(line) - len(line.lstrip())


def decide_indentation(
    parse_output: ParseOutput, lines: Sequence[str], tab_size: int
) -> tuple[IndentDecision, int]:
    """Pick the indentation rule for the line after `lines`.

    Rules are tried in order and the first match wins:

    1. A dedent keyword outside brackets drops one level.
    2. Outside brackets: return to the row that opened a bracket closed on
       this row (one level deeper when that also completed a block header),
       indent after a block colon, otherwise keep the indentation.
    3. A block colon inside brackets indents one level.
    4. Inside brackets: keep the indentation when nothing was opened or closed
       on this row, return to the opening row of a nested bracket that was
       just closed, otherwise align one column past the open bracket.

    Args:
        parse_output: State produced by `parse_lines` for `lines`.
        lines: Source lines up to the cursor.
        tab_size: Columns per indentation level.

    Returns:
        tuple[IndentDecision, int]: The rule applied and the resulting column,
            never negative.

    Examples:
        lines = ["class A:", "    def f(x):"]
        decide_indentation(parse_lines(lines), lines, 4)  # (IndentDecision.BLOCK, 8)
    """
    if not lines:
        return IndentDecision.KEEP, 0

    row = len(lines) - 1
    current_indent = indentation_level(lines[row])
    stack = parse_output.open_bracket_stack
    last_closed = parse_output.last_closed
    on_colon_row = parse_output.last_colon_row == row

    if parse_output.dedent_next and not stack:
        return IndentDecision.DEDENT, max(current_indent - tab_size, 0)

    just_closed = last_closed is not None and last_closed.close_row == row

    if not stack:
        if just_closed:
            opener_indent = indentation_level(lines[last_closed.open_row])
            if on_colon_row:
                return IndentDecision.CLOSED_BRACKET_BLOCK, opener_indent + tab_size
            return IndentDecision.CLOSED_BRACKET, opener_indent
        if on_colon_row:
            return IndentDecision.BLOCK, current_indent + tab_size
        return IndentDecision.KEEP, current_indent

    if on_colon_row:
        return IndentDecision.BLOCK, current_indent + tab_size

    innermost = stack[-1]
    just_opened = innermost.row == row

    if not just_opened and not just_closed:
        return IndentDecision.KEEP, current_indent

    if just_closed and last_closed.open_row > innermost.row:
        # Handles a nested collection closing inside a hanging one:
        #   x = [
        #       0, 1, 2, [3, 4, 5,
        #                 6, 7, 8],
        #       9, 10, 11
        #   ]
        return IndentDecision.CLOSED_BRACKET, indentation_level(lines[last_closed.open_row])

    return IndentDecision.ALIGN_BRACKET, innermost.column + 1


def next_indentation_level(parse_output: ParseOutput, lines: Sequence[str], tab_size: int) -> int:
    """Return the column where the line after `lines` should start."""
    return decide_indentation(parse_output, lines, tab_size)[1]


def indentation_info(lines: Sequence[str], tab_size: int) -> IndentationInfo:
    """Parse `lines` and compute the next indentation level.

    Args:
        lines: Source lines from the start of the document up to the cursor.
        tab_size: Columns per indentation level.

    Returns:
        IndentationInfo: Next column, the rule that produced it and the parse
            state.

    Examples:
        indentation_info(["def f(x):"], 4).next_indentation_level  # 4
        indentation_info(["[0, 1, 2,"], 4).next_indentation_level  # 1
    """
    parse_output = parse_lines(lines)
    decision, level = decide_indentation(parse_output, lines, tab_size)
    return IndentationInfo(
        next_indentation_level=level, decision=decision, parse_output=parse_output
    )


def next_indent(lines: Sequence[str], tab_size: int) -> int:
    """Shorthand for ``indentation_info(lines, tab_size).next_indentation_level``."""
    return indentation_info(lines, tab_size).next_indentation_level
