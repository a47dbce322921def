"""Assembly of the edit performed when Enter is pressed in Python source."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import IndentConfig
from .constants import COMMENT_CHAR, COMMENT_CONTINUATION, SNIPPET_FINAL_CURSOR, SNIPPET_TAB_STOP
from .dedent import current_line_dedentation
from .exceptions import InvalidPositionError, InvalidTabSizeError
from .hanging import should_hang
from .indentation import indentation_info, indentation_level
from .models import EditResult, Hanging, Position, Selection, TextRange

logger = logging.getLogger(__name__)


def starting_whitespace_length(text: str) -> int:
    """Count leading whitespace, or 0 when `text` is only whitespace.

    Examples:
        starting_whitespace_length("    456")  # 4
        starting_whitespace_length("   ")  # 0
    """
    stripped = text.lstrip()
    if not stripped:
        return 0
    return len(text) - len(stripped)


def extend_comment_to_next_line(line: str, column: int) -> bool:
    """Check whether splitting `line` at `column` should continue a comment.

    Args:
        line: Full text of the line holding the cursor.
        column: Cursor column.

    Returns:
        bool: True when the line is a comment and there is text on both sides
            of the cursor.

    Examples:
        extend_comment_to_next_line("  # this is a comment", 8)  # True
        extend_comment_to_next_line("  # this is a comment", 2)  # False
    """
    if not line.strip().startswith(COMMENT_CHAR):
        return False
    return bool(line[:column].strip()) and bool(line[column:].strip())


def trim_current_line(line: str, config: IndentConfig | None = None) -> bool:
    """Check whether a whitespace-only line should be emptied.

    Examples:
        trim_current_line("    \\t", IndentConfig(trim_lines_with_only_whitespace=True))  # True
        trim_current_line("    a", IndentConfig(trim_lines_with_only_whitespace=True))  # False
    """
    config = config or IndentConfig()
    return config.trim_lines_with_only_whitespace and not line.strip()


def hanging_snippet(tab_size: int, config: IndentConfig | None = None) -> str:
    """Build the snippet that opens a FULL hanging indent.

    The host adds the current line's indentation to every snippet line after
    the first, leaving the closing bracket on its own line.

    Examples:
        hanging_snippet(4)  # "\\n    $0\\n"
    """
    config = config or IndentConfig()
    marker = SNIPPET_TAB_STOP if config.use_tab_on_hanging_indent else SNIPPET_FINAL_CURSOR
    return "\n" + " " * tab_size + marker + "\n"


def _validate_tab_size(tab_size: object) -> int:
    if isinstance(tab_size, bool) or not isinstance(tab_size, int) or tab_size <= 0:
        raise InvalidTabSizeError(tab_size)
    return tab_size


def _validate_position(lines: Sequence[str], position: Position) -> None:
    if not 0 <= position.row < len(lines):
        raise InvalidPositionError(position.row, position.column)
    if not 0 <= position.column <= len(lines[position.row]):
        raise InvalidPositionError(position.row, position.column)


def newline_and_indent(
    lines: Sequence[str],
    selection: Selection | Position,
    config: IndentConfig | None = None,
    tab_size: int | None = None,
) -> EditResult:
    """Describe the edit for pressing Enter in a Python document.

    Positions and ranges in the result refer to the document as given, so the
    host can apply every part of the edit in one batch.

    Args:
        lines: Every line of the document, without line endings.
        selection: Current selection, or a bare cursor position.
        config: Feature toggles; defaults to a new `IndentConfig`.
        tab_size: Columns per indentation level; defaults to
            ``config.tab_size``.

    Returns:
        EditResult: Text to insert, ranges to delete and the hanging
            classification.

    Raises:
        InvalidTabSizeError: If the tab size is not a positive integer.
        InvalidPositionError: If the selection lies outside the document.

    Examples:
        newline_and_indent(["def f():"], Position(0, 8)).text  # "\\n    "
    """
    config = config or IndentConfig()
    tab_size = _validate_tab_size(config.tab_size if tab_size is None else tab_size)
    if isinstance(selection, Position):
        selection = Selection(anchor=selection, active=selection)

    lines = list(lines) or [""]
    start, end = selection.earliest, selection.latest
    _validate_position(lines, start)
    _validate_position(lines, end)

    try:
        return _assemble(lines, start, end, config, tab_size)
    except (IndexError, ValueError) as error:
        logger.warning("Falling back to a bare newline at %s: %s", start, error)
        return EditResult(position=start)


def _assemble(
    lines: list[str], start: Position, end: Position, config: IndentConfig, tab_size: int
) -> EditResult:
    # The line as it reads once the selection is gone, and the cursor in it
    before_cursor = lines[start.row][: start.column]
    after_cursor = lines[end.row][end.column :]
    current_line = before_cursor + after_cursor

    prefix = lines[: start.row] + [before_cursor]
    info = indentation_info(prefix, tab_size)
    indent = info.next_indentation_level
    logger.debug("Indent decision %s -> %d", info.decision.name, indent)

    position = start
    deletions: list[TextRange] = []

    if trim_current_line(current_line, config):
        position = Position(start.row, 0)
        if current_line or end != start:
            deletions.append(TextRange(start.row, 0, end.row, len(lines[end.row])))
    else:
        trailing = 0
        if before_cursor.strip():
            trailing = starting_whitespace_length(after_cursor)
        if end != start or trailing:
            deletions.append(TextRange(start.row, start.column, end.row, end.column + trailing))

        # Keywords are matched on the whole line, even past the cursor
        dedent = min(
            current_line_dedentation(lines[: start.row] + [current_line], tab_size), start.column
        )
        if dedent > 0:
            logger.debug("Dedenting row %d by %d", start.row, dedent)
            deletions.insert(0, TextRange(start.row, 0, start.row, dedent))
            indent = max(indent - dedent, 0)

    hanging = should_hang(current_line, start.column)
    if hanging is Hanging.FULL and config.keep_hanging_bracket_on_line:
        hanging = Hanging.PARTIAL

    if hanging is Hanging.PARTIAL:
        text = "\n" + " " * (indentation_level(current_line) + tab_size)
    else:
        text = "\n" + " " * max(indent, 0)

    if extend_comment_to_next_line(current_line, start.column):
        text += COMMENT_CONTINUATION

    snippet = hanging_snippet(tab_size, config) if hanging is Hanging.FULL else None
    return EditResult(
        position=position, text=text, deletions=deletions, hanging=hanging, snippet=snippet
    )


def _offset(lines: Sequence[str], row: int, column: int) -> int:
    return sum(len(line) + 1 for line in lines[:row]) + column


def _strip_spans(text: str, spans: list[tuple[int, int]], low: int, high: int) -> str:
    pieces = []
    cursor = low
    for start, end in spans:
        start, end = max(start, low), min(end, high)
        if start >= end:
            continue
        pieces.append(text[cursor:start])
        cursor = max(cursor, end)
    pieces.append(text[cursor:high])
    return "".join(pieces)


def _render_insertion(lines: Sequence[str], result: EditResult) -> tuple[str, int]:
    if result.snippet is None:
        return result.text, len(result.text)

    line = lines[result.position.row]
    base = line[: indentation_level(line)]
    rendered = result.snippet.replace("\n", "\n" + base)
    for marker in (SNIPPET_TAB_STOP, SNIPPET_FINAL_CURSOR):
        index = rendered.find(marker)
        if index != -1:
            return rendered.replace(marker, "", 1), index
    return rendered, len(rendered)


def apply_edit(lines: Sequence[str], result: EditResult) -> tuple[list[str], Position]:
    """Apply an `EditResult` to a document.

    Deletions and the insertion all refer to the original document. FULL
    hanging snippets are expanded the way editors expand them: every line
    after the first gets the current line's indentation and the cursor lands
    on the snippet marker.

    Args:
        lines: Document lines the edit was computed for.
        result: Edit returned by `newline_and_indent`.

    Returns:
        tuple[list[str], Position]: New document lines and cursor position.

    Examples:
        lines = ["def f():"]
        apply_edit(lines, newline_and_indent(lines, Position(0, 8)))
        # (["def f():", "    "], Position(1, 4))
    """
    lines = list(lines) or [""]
    text = "\n".join(lines)
    spans = sorted(
        (
            _offset(lines, item.start_row, item.start_column),
            _offset(lines, item.end_row, item.end_column),
        )
        for item in result.deletions
    )
    insert_at = _offset(lines, result.position.row, result.position.column)
    insertion, cursor_in_insertion = _render_insertion(lines, result)

    before = _strip_spans(text, spans, 0, insert_at)
    after = _strip_spans(text, spans, insert_at, len(text))
    new_text = before + insertion + after

    cursor_offset = len(before) + cursor_in_insertion
    row = new_text.count("\n", 0, cursor_offset)
    column = cursor_offset - (new_text.rfind("\n", 0, cursor_offset) + 1)
    return new_text.split("\n"), Position(row, column)
