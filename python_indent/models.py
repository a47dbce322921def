"""Data models for python-indent."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Hanging(Enum):
    """Hanging indent classification for the cursor position.

    The pipe character marks the cursor before Enter is pressed.

    Attributes:
        NONE: No hanging indent, e.g. ``def f():|``.
        PARTIAL: Indent the next line, e.g. ``def f(|x):``.
        FULL: Indent the next line and put the closing bracket on its own
            line, e.g. ``def f(|):``.
    """

    NONE = auto()
    PARTIAL = auto()
    FULL = auto()


class CharKind(Enum):
    """Classification of a character reported by the lexical scanner.

    Attributes:
        STRING: Inside a string literal, including its closing delimiter.
        STRING_START: Quote character that opens a string literal.
        OPEN_BRACKET: One of ``(``, ``[`` or ``{`` outside strings.
        CLOSE_BRACKET: One of ``)``, ``]`` or ``}`` outside strings.
        COLON: A ``:`` outside strings.
        CODE: Any other significant character outside strings.
    """

    STRING = auto()
    STRING_START = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    COLON = auto()
    CODE = auto()


class IndentDecision(Enum):
    """Rule chosen by the indent calculator for the next line.

    Attributes:
        DEDENT: Drop one level after ``return``/``pass``/``break``/...
        KEEP: Keep the indentation of the last line.
        BLOCK: Indent one level past the last line for a new block.
        CLOSED_BRACKET: Return to the line that opened the bracket just closed.
        CLOSED_BRACKET_BLOCK: Same as ``CLOSED_BRACKET`` plus one level, when
            closing the bracket completed a block header.
        ALIGN_BRACKET: Align one column past the innermost open bracket.
    """

    DEDENT = auto()
    KEEP = auto()
    BLOCK = auto()
    CLOSED_BRACKET = auto()
    CLOSED_BRACKET_BLOCK = auto()
    ALIGN_BRACKET = auto()


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based row and column of a cursor in a document."""

    row: int
    column: int


@dataclass(frozen=True)
class Selection:
    """Editor selection described by its anchor and active ends.

    Attributes:
        anchor: Where the selection started.
        active: Where the cursor currently is.
    """

    anchor: Position
    active: Position

    @classmethod
    def cursor(cls, row: int, column: int) -> Selection:
        position = Position(row, column)
        return cls(anchor=position, active=position)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def earliest(self) -> Position:
        """Position the cursor collapses to once the selection is deleted."""
        return min(self.anchor, self.active)

    @property
    def latest(self) -> Position:
        return max(self.anchor, self.active)


@dataclass(frozen=True)
class TextRange:
    """Half-open character range to delete, ``(start_row, start_column)`` up
    to ``(end_row, end_column)``."""

    start_row: int
    start_column: int
    end_row: int
    end_column: int


@dataclass(frozen=True)
class BracketPosition:
    """Location of an opening bracket that has not been closed yet."""

    row: int
    column: int


@dataclass(frozen=True)
class ClosedBracket:
    """Rows where the most recently closed multi-line bracket pair opened and
    closed."""

    open_row: int
    close_row: int


@dataclass
class StringContext:
    """String state carried from one line to the next during a scan.

    Attributes:
        delimiter: Quote character that opened the current string, if any.
        in_triple_quote: Whether the current string is triple quoted.
        check_next_char: Two delimiters were just seen outside a triple
            quoted string; the next character decides between an empty string
            and the start of a triple quoted one.
    """

    delimiter: str | None = None
    in_triple_quote: bool = False
    check_next_char: bool = False

    @property
    def in_string(self) -> bool:
        return self.delimiter is not None


@dataclass
class ParseOutput:
    """Structural state reconstructed from the lines before the cursor.

    Attributes:
        open_bracket_stack: Unmatched opening brackets, oldest first.
        last_closed: Most recent bracket pair closed on a different row than
            it was opened, or None.
        last_colon_row: Row of the last block-opening colon, or None.
        dedent_next: Whether the last row starts with a dedent keyword.
        can_hang: Whether the last significant character seen was an opening
            bracket.
    """

    open_bracket_stack: list[BracketPosition] = field(default_factory=list)
    last_closed: ClosedBracket | None = None
    last_colon_row: int | None = None
    dedent_next: bool = False
    can_hang: bool = False


@dataclass(frozen=True)
class IndentationInfo:
    """Next indentation column together with the state that produced it."""

    next_indentation_level: int
    decision: IndentDecision
    parse_output: ParseOutput


@dataclass
class EditResult:
    """Description of the edit to perform when Enter is pressed.

    Attributes:
        position: Where the insertion happens, after all deletions.
        text: Plain text to insert; always starts with a newline.
        deletions: Ranges to delete before inserting, all on or before the
            cursor row.
        hanging: Hanging classification of the original cursor position.
        snippet: Snippet to insert instead of `text` when `hanging` is FULL,
            otherwise None.
    """

    position: Position
    text: str = "\n"
    deletions: list[TextRange] = field(default_factory=list)
    hanging: Hanging = Hanging.NONE
    snippet: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "position": {"row": self.position.row, "column": self.position.column},
            "text": self.text,
            "deletions": [
                [item.start_row, item.start_column, item.end_row, item.end_column]
                for item in self.deletions
            ],
            "hanging": self.hanging.name.lower(),
            "snippet": self.snippet,
        }
