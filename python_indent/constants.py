"""Constants used across the python-indent package."""

from __future__ import annotations

import re

# Lexical classes
OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = ")]}"
QUOTE_CHARS = "'\""
WHITESPACE_CHARS = " \t\r\n"
COMMENT_CHAR = "#"
ESCAPE_CHAR = "\\"

# A statement starting with one of these ends its block
DEDENT_NEXT_PATTERNS = tuple(
    re.compile(rf"^\s*{keyword}\b") for keyword in ("return", "pass", "break", "continue", "raise")
)

# Continuation keyword -> keywords of the statements it can continue
BLOCK_OPENERS = {
    "elif": ("if",),
    "else": ("if", "try", "for", "while"),
    "except": ("try",),
    "finally": ("try",),
}

CONTINUATION_PATTERN = re.compile(rf"^({'|'.join(BLOCK_OPENERS)})\b")
OPENER_PATTERNS = {
    keyword: re.compile(rf"^({'|'.join(openers)})\b") for keyword, openers in BLOCK_OPENERS.items()
}

# Characters after an opening bracket that do not affect hanging
HANG_NEUTRAL_CHARS = frozenset(": \t\r")
HANG_CLOSING_CHARS = frozenset(CLOSE_BRACKETS)

COMMENT_CONTINUATION = "# "

# Snippet cursor markers used for FULL hanging indents
SNIPPET_FINAL_CURSOR = "$0"
SNIPPET_TAB_STOP = "$1"

# Line endings, tried in this order when splitting source
NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")
DEFAULT_NEWLINE = "\n"

# Filesystem limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
PYTHON_EXTENSIONS = (".py", ".pyi", ".pyw")
