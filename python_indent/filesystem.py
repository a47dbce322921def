"""Loading and saving the Python file edited from the command line.

The engine works on rows without line endings. A `SourceDocument` remembers
which line ending the file used so an edited document is written back the
way it was read.
"""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_NEWLINE, NEWLINE_PATTERN, PYTHON_EXTENSIONS
from .exceptions import SourceFileError


@dataclass
class SourceDocument:
    """A Python file held as rows, the way an editor holds it.

    Attributes:
        path: File the document was read from.
        lines: Rows without their line endings.
        newline: Line ending used when the rows are joined again.
        fingerprint: Inode, size and modification time at read time.
        mode: Permission bits to restore when the file is replaced.
    """

    path: Path
    lines: list[str] = field(default_factory=list)
    newline: str = DEFAULT_NEWLINE
    fingerprint: tuple[int, int, int] = (0, 0, 0)
    mode: int = 0o644

    @property
    def text(self) -> str:
        return join_lines(self.lines, self.newline)


def detect_newline(text: str) -> str:
    """Return the first line ending used in `text`.

    Examples:
        detect_newline("a\\r\\nb\\n")  # "\\r\\n"
        detect_newline("no ending")  # "\\n"
    """
    match = NEWLINE_PATTERN.search(text)
    return match.group() if match else DEFAULT_NEWLINE


def split_lines(text: str) -> list[str]:
    """Split source into rows on ``\\r\\n``, ``\\r`` or ``\\n``.

    Unlike `str.splitlines`, form feeds stay inside their row, and a trailing
    line ending leaves an empty last row the cursor can sit on.

    Examples:
        split_lines("def f():\\r\\n    pass\\r\\n")  # ["def f():", "    pass", ""]
    """
    return NEWLINE_PATTERN.split(text)


def join_lines(lines: Sequence[str], newline: str = DEFAULT_NEWLINE) -> str:
    return newline.join(lines)


def is_python_source(path: Path) -> bool:
    return path.suffix.lower() in PYTHON_EXTENSIONS


def _fingerprint(stat_result: os.stat_result) -> tuple[int, int, int]:
    return stat_result.st_ino, stat_result.st_size, stat_result.st_mtime_ns


def _stat_regular_file(path: Path) -> os.stat_result:
    try:
        stat_result = os.lstat(path)
    except OSError as error:
        raise SourceFileError(path, error.strerror or str(error)) from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise SourceFileError(path, "is a symlink; pass the file it points to")
    if not stat.S_ISREG(stat_result.st_mode):
        raise SourceFileError(path, "is not a regular file")
    return stat_result


def read_document(path: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> SourceDocument:
    """Read a UTF-8 Python file into a `SourceDocument`.

    Files with mixed line endings are split on all of them and remember the
    first one, so saving them normalises every row to that ending.

    Args:
        path: File to read.
        max_size: Largest accepted file size in bytes.

    Returns:
        SourceDocument: Rows, line ending and the file's fingerprint.

    Raises:
        SourceFileError: If the path is a symlink or not a regular file, is
            larger than `max_size`, cannot be read, or is not valid UTF-8.

    Examples:
        document = read_document(Path("module.py"))
        document.lines[0]
    """
    stat_result = _stat_regular_file(path)
    if stat_result.st_size > max_size:
        raise SourceFileError(path, f"is larger than the {max_size} byte limit")

    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as error:
        raise SourceFileError(path, f"invalid UTF-8 at byte {error.start}") from error
    except OSError as error:
        raise SourceFileError(path, error.strerror or str(error)) from error

    return SourceDocument(
        path=path,
        lines=split_lines(text),
        newline=detect_newline(text),
        fingerprint=_fingerprint(stat_result),
        mode=stat.S_IMODE(stat_result.st_mode),
    )


def write_document(document: SourceDocument, lines: Sequence[str]) -> None:
    """Replace the file behind `document` with `lines`.

    The rows are joined with the document's line ending and written to a
    temporary file next to the original, which then takes its place, so the
    file is never left half written.

    Args:
        document: Document returned by `read_document`.
        lines: New rows for the file.

    Raises:
        SourceFileError: If the file changed since it was read or cannot be
            replaced.

    Examples:
        write_document(document, new_lines)
    """
    path = document.path
    if _fingerprint(_stat_regular_file(path)) != document.fingerprint:
        raise SourceFileError(path, "changed on disk since it was read")

    data = join_lines(lines, document.newline).encode("utf-8")
    descriptor, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(descriptor, "wb") as stream:
            stream.write(data)
            stream.flush()
            os.fsync(stream.fileno())
        os.chmod(temp_name, document.mode)
        os.replace(temp_name, path)
    except OSError as error:
        Path(temp_name).unlink(missing_ok=True)
        raise SourceFileError(path, f"could not be saved: {error}") from error
