"""Package-specific exception types."""

from __future__ import annotations


class IndentError(ValueError):
    """Base class for invalid engine inputs.

    Malformed Python source never raises; these errors describe callers that
    pass inconsistent arguments.
    """


class InvalidTabSizeError(IndentError):
    """Raised when the tab size is not a positive integer.

    Args:
        tab_size: The rejected value.
    """

    def __init__(self, tab_size: object):
        self.tab_size = tab_size
        super().__init__(f"Tab size must be a positive integer, got {tab_size!r}")


class InvalidPositionError(IndentError):
    """Raised when a cursor position lies outside the document.

    Args:
        row: Zero-based row of the offending position.
        column: Zero-based column of the offending position.
    """

    def __init__(self, row: int, column: int):
        self.row = row
        self.column = column
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Position (row {self.row}, column {self.column}) is outside the document"


class SourceFileError(OSError):
    """Raised when a source file cannot be loaded or saved.

    Args:
        path: File that was being read or written.
        reason: What went wrong.
    """

    def __init__(self, path: object, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
