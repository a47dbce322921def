from __future__ import annotations

import os
from pathlib import Path

import pytest

from python_indent.exceptions import SourceFileError
from python_indent.filesystem import (
    SourceDocument,
    detect_newline,
    is_python_source,
    join_lines,
    read_document,
    split_lines,
    write_document,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a\nb\n", "\n"),
        ("a\r\nb\r\n", "\r\n"),
        ("a\rb\r", "\r"),
        ("a\r\nb\n", "\r\n"),
        ("no line ending", "\n"),
        ("", "\n"),
    ],
)
def test_detect_newline(text: str, expected: str):
    assert detect_newline(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("def f():\r\n    pass\r\n", ["def f():", "    pass", ""]),
        ("a\nb", ["a", "b"]),
        ("a\rb\r\nc\n", ["a", "b", "c", ""]),
        ("x = 1\f\ny = 2", ["x = 1\f", "y = 2"]),
        ("", [""]),
    ],
)
def test_split_lines(text: str, expected: list[str]):
    assert split_lines(text) == expected


def test_join_lines_uses_given_newline():
    assert join_lines(["def f():", "    pass", ""], "\r\n") == "def f():\r\n    pass\r\n"
    assert join_lines(["a", "b"]) == "a\nb"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("module.py", True),
        ("stub.pyi", True),
        ("gui.pyw", True),
        ("LOUD.PY", True),
        ("notes.md", False),
        ("script", False),
    ],
)
def test_is_python_source(name: str, expected: bool):
    assert is_python_source(Path(name)) is expected


def test_read_document_splits_rows_and_keeps_newline(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_bytes(b"def f():\r\n    return 1\r\n")

    document = read_document(target)

    assert document.path == target
    assert document.lines == ["def f():", "    return 1", ""]
    assert document.newline == "\r\n"
    assert document.text == "def f():\r\n    return 1\r\n"


def test_read_document_normalises_mixed_endings_to_first(tmp_path: Path):
    target = tmp_path / "mixed.py"
    target.write_bytes(b"a = 1\nb = 2\r\n")

    document = read_document(target)

    assert document.lines == ["a = 1", "b = 2", ""]
    assert document.text == "a = 1\nb = 2\n"


def test_read_document_records_permissions(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_text("x = 1\n", encoding="utf-8")
    os.chmod(target, 0o640)

    assert read_document(target).mode == 0o640


def test_read_document_rejects_large_file(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_text("x = 1\n", encoding="utf-8")

    read_document(target, max_size=6)
    with pytest.raises(SourceFileError, match="5 byte limit"):
        read_document(target, max_size=5)


def test_read_document_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_bytes(b"x = '\xff'\n")

    with pytest.raises(SourceFileError, match="invalid UTF-8 at byte 5"):
        read_document(target)


def test_read_document_rejects_missing_file(tmp_path: Path):
    with pytest.raises(SourceFileError) as exc_info:
        read_document(tmp_path / "missing.py")

    assert exc_info.value.path == tmp_path / "missing.py"


def test_read_document_rejects_directory(tmp_path: Path):
    folder = tmp_path / "package.py"
    folder.mkdir()

    with pytest.raises(SourceFileError, match="not a regular file"):
        read_document(folder)


def test_read_document_rejects_symlink(tmp_path: Path):
    target = tmp_path / "actual.py"
    target.write_text("x = 1\n", encoding="utf-8")
    link = tmp_path / "alias.py"
    os.symlink(target, link)

    with pytest.raises(SourceFileError, match="symlink"):
        read_document(link)


def test_source_file_error_is_an_os_error():
    error = SourceFileError(Path("module.py"), "is not a regular file")

    assert isinstance(error, OSError)
    assert str(error) == "module.py: is not a regular file"


def test_write_document_keeps_newline_and_permissions(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_bytes(b"def f():\r\n")
    os.chmod(target, 0o640)
    document = read_document(target)

    write_document(document, ["def f():", "    ", ""])

    assert target.read_bytes() == b"def f():\r\n    \r\n"
    assert os.stat(target).st_mode & 0o777 == 0o640
    assert [path.name for path in tmp_path.iterdir()] == ["module.py"]


def test_write_document_refuses_changed_file(tmp_path: Path):
    target = tmp_path / "module.py"
    target.write_text("def f():\n", encoding="utf-8")
    document = read_document(target)
    target.write_text("def g(x):\n", encoding="utf-8")

    with pytest.raises(SourceFileError, match="changed on disk"):
        write_document(document, ["def f():", "    ", ""])

    assert target.read_text(encoding="utf-8") == "def g(x):\n"


def test_write_document_cleans_up_when_replace_fails(tmp_path: Path, monkeypatch):
    target = tmp_path / "module.py"
    target.write_text("x = 1\n", encoding="utf-8")
    document = read_document(target)

    def _fail_replace(source, destination):
        raise PermissionError("replace boom")

    monkeypatch.setattr(os, "replace", _fail_replace)

    with pytest.raises(SourceFileError, match="could not be saved"):
        write_document(document, ["x = 2", ""])

    assert target.read_text(encoding="utf-8") == "x = 1\n"
    assert [path.name for path in tmp_path.iterdir()] == ["module.py"]


def test_source_document_defaults():
    document = SourceDocument(path=Path("module.py"))

    assert document.lines == []
    assert document.newline == "\n"
    assert document.text == ""
