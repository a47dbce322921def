"""
python-indent: newline-and-indent inference for Python source.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    python-indent module.py --row 3 --column 12 --apply

Library Usage:
    from python_indent import Position, newline_and_indent

    lines = ["def f(x):"]
    edit = newline_and_indent(lines, Position(0, len(lines[0])))
    edit.text  # "\\n    "
"""

from .config import ConfigError, IndentConfig
from .dedent import current_line_dedentation
from .editor import (
    apply_edit,
    extend_comment_to_next_line,
    newline_and_indent,
    starting_whitespace_length,
    trim_current_line,
)
from .exceptions import IndentError, InvalidPositionError, InvalidTabSizeError, SourceFileError
from .hanging import should_hang
from .indentation import indentation_info, indentation_level, next_indent, next_indentation_level
from .models import EditResult, Hanging, IndentDecision, ParseOutput, Position, Selection, TextRange
from .parser import parse_lines

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "newline_and_indent",
    "apply_edit",
    "indentation_info",
    "next_indent",
    "next_indentation_level",
    "parse_lines",
    "should_hang",
    "current_line_dedentation",
    # Helpers
    "indentation_level",
    "starting_whitespace_length",
    "extend_comment_to_next_line",
    "trim_current_line",
    # Data models
    "EditResult",
    "Hanging",
    "IndentDecision",
    "ParseOutput",
    "Position",
    "Selection",
    "TextRange",
    "IndentConfig",
    # Exceptions
    "ConfigError",
    "IndentError",
    "InvalidPositionError",
    "InvalidTabSizeError",
    "SourceFileError",
    # Version
    "__version__",
]
