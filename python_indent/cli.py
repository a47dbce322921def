"""
Computes the edit for pressing Enter at a position in a Python file.
Prints the edit description as JSON, or the edited source with --apply.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .editor import apply_edit, newline_and_indent
from .exceptions import IndentError, SourceFileError
from .filesystem import is_python_source, join_lines, read_document, write_document
from .models import Position, Selection

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option()
@click.option("--row", type=click.IntRange(min=0), required=True, help="Cursor row (0-based)")
@click.option("--column", type=click.IntRange(min=0), required=True, help="Cursor column (0-based)")
@click.option("--end-row", type=click.IntRange(min=0), help="Row of the other selection end")
@click.option("--end-column", type=click.IntRange(min=0), help="Column of the other selection end")
@click.option("--tab-size", type=int, help="Columns per indentation level")
@click.option(
    "--use-tab-on-hanging-indent/--no-use-tab-on-hanging-indent",
    default=None,
    help="Use a tab stop in hanging indent snippets",
)
@click.option(
    "--trim-whitespace-lines/--no-trim-whitespace-lines",
    default=None,
    help="Empty whitespace-only lines when splitting them",
)
@click.option(
    "--keep-hanging-bracket-on-line/--no-keep-hanging-bracket-on-line",
    default=None,
    help="Never move a closing bracket to its own line",
)
@click.option("--apply", "apply_", is_flag=True, help="Print the edited source instead of JSON")
@click.option("--in-place", is_flag=True, help="Write the edited source back to the file")
@click.option("--verbose", "-v", is_flag=True, help="Log indentation decisions to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def cli(
    filepath: Path,
    row: int,
    column: int,
    end_row: int | None = None,
    end_column: int | None = None,
    tab_size: int | None = None,
    use_tab_on_hanging_indent: bool | None = None,
    trim_whitespace_lines: bool | None = None,
    keep_hanging_bracket_on_line: bool | None = None,
    apply_: bool = False,
    in_place: bool = False,
    verbose: bool = False,
):
    """
    Entry point for computing a newline-and-indent edit.

    Args:
        filepath: Path to the Python file to process.
        row: Cursor row.
        column: Cursor column.
        end_row: Row of the selection anchor, when text is selected.
        end_column: Column of the selection anchor, when text is selected.
        tab_size: Override for the number of columns per indentation level.
        use_tab_on_hanging_indent: Override for the hanging snippet marker.
        trim_whitespace_lines: Override for emptying whitespace-only lines.
        keep_hanging_bracket_on_line: Override for downgrading full hangs.
        apply_: Print the edited source instead of the edit description.
        in_place: Rewrite the file with the edited source.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths, contain
            invalid configuration values, or point outside the file.
        click.ClickException: If the file cannot be read or written.

    Examples:
        python-indent module.py --row 3 --column 12 --apply
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not is_python_source(filepath):
        raise click.BadParameter(f"{filepath} is not a Python file.", param_hint="FILEPATH")

    try:
        config = build_config(
            filepath.parent,
            tab_size=tab_size,
            use_tab_on_hanging_indent=use_tab_on_hanging_indent,
            trim_lines_with_only_whitespace=trim_whitespace_lines,
            keep_hanging_bracket_on_line=keep_hanging_bracket_on_line,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        document = read_document(filepath)
    except SourceFileError as error:
        raise click.ClickException(str(error)) from error

    lines = document.lines
    cursor = Position(row, column)
    anchor = Position(
        row if end_row is None else end_row,
        column if end_column is None else end_column,
    )

    try:
        result = newline_and_indent(lines, Selection(anchor=anchor, active=cursor), config)
    except IndentError as error:
        raise click.BadParameter(str(error)) from error

    logger.debug("Edit for %s: %s", filepath, result)

    if not (apply_ or in_place):
        payload = result.to_dict()
        # Hosts insert `text` with their own line ending; this is the file's
        payload["newline"] = document.newline
        click.echo(json.dumps(payload, indent=2))
        return

    new_lines, new_cursor = apply_edit(lines, result)

    if in_place:
        try:
            write_document(document, new_lines)
        except SourceFileError as error:
            raise click.ClickException(str(error)) from error
        click.echo(f"{new_cursor.row}:{new_cursor.column}")
        return

    click.echo(join_lines(new_lines, document.newline), nl=False)


if __name__ == "__main__":
    cli()
