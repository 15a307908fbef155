"""
Adds or removes first-line paragraph indents in a Markdown file.
Structural lines (headings, lists, quotes, tables, code, HTML...) are left untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .classifier import is_plain
from .config import (
    ConfigError,
    IndentConfig,
    apply_overrides,
    build_config,
    load_settings,
    normalize_config,
    validate_config,
)
from .constants import INDENT_MARKERS
from .filesystem import open_document, resolve_markdown_path, save_document
from .editor import TextBuffer
from .models import LineRange, ToggleState
from .session import IndentSession
from .transform import has_indent

__all__ = ["cli"]

# Structure names accepted by `--process`, mapped to the flag they turn off.
PROCESS_FLAGS = {
    "headers": "ignore_headers",
    "lists": "ignore_lists",
    "tables": "ignore_tables",
    "code": "ignore_code",
    "quotes": "ignore_quotes",
}


def parse_line_span(ctx: click.Context, param: click.Parameter, value: str | None):
    """Convert a 1-based ``START:END`` (or single ``LINE``) into a `LineRange`."""
    if value is None:
        return None

    start_text, _, end_text = value.partition(":")
    try:
        start = int(start_text)
        end = int(end_text) if end_text else start
    except ValueError as error:
        raise click.BadParameter("expected START:END with 1-based line numbers") from error

    if start < 1 or end < start:
        raise click.BadParameter("expected 1 <= START <= END")
    return LineRange(start - 1, end - 1)


@click.command()
@click.version_option(package_name="smart-indent")
@click.option(
    "--mode",
    type=click.Choice(["toggle", "add", "remove"]),
    default="toggle",
    show_default=True,
    help="Operation to perform",
)
@click.option(
    "--lines",
    "selection",
    callback=parse_line_span,
    help="Only process these lines, as START:END (1-based, inclusive)",
)
@click.option(
    "--cursor",
    type=click.IntRange(min=1),
    help="Only process the paragraph around this line (1-based)",
)
@click.option("--marker", type=click.Choice(list(INDENT_MARKERS)), help="Indent marker style")
@click.option(
    "--process",
    type=click.Choice(list(PROCESS_FLAGS)),
    multiple=True,
    help="Indent this structure instead of skipping it (repeatable)",
)
@click.option("--flat-lists", is_flag=True, help="Do not protect nested list indentation")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Read editor settings from a JSON file instead of TOML configuration",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of rewriting")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    mode: str = "toggle",
    selection: LineRange | None = None,
    cursor: int | None = None,
    marker: str | None = None,
    process: tuple[str, ...] = (),
    flat_lists: bool = False,
    settings_path: str | None = None,
    to_stdout: bool = False,
    verbose: bool = False,
):
    """
    Entry point for indenting the paragraphs of a Markdown file.

    Args:
        filepath: Path to the Markdown file to process.
        mode: `toggle`, `add`, or `remove`.
        selection: Lines to process instead of the whole document.
        cursor: Line whose surrounding paragraph is processed.
        marker: Override for the indent marker style.
        process: Structures to indent instead of skipping.
        flat_lists: Disable protection of nested list indentation.
        settings_path: JSON settings file to read instead of TOML lookup.
        to_stdout: Print the result instead of rewriting the file.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths or contain
            invalid configuration values.
        click.UsageError: If both `--lines` and `--cursor` are given.
        click.ClickException: If filesystem safety checks fail or the operation
            is skipped (empty selection, structural paragraph, blank cursor line).

    Examples:
        smart-indent chapter.md --mode add --marker 2-spaces
        smart-indent chapter.md --cursor 12
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if selection is not None and cursor is not None:
        raise click.UsageError("--lines and --cursor cannot be used together")

    try:
        filepath = resolve_markdown_path(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    overrides = {name: False for key, name in PROCESS_FLAGS.items() if key in process}
    try:
        if settings_path is not None:
            config = apply_overrides(
                load_settings(Path(settings_path)),
                indent_style=marker,
                preserve_list_indent=False if flat_lists else None,
                **overrides,
            )
            config = normalize_config(config)
            validate_config(config)
        else:
            config = build_config(
                filepath.parent,
                indent_style=marker,
                preserve_list_indent=False if flat_lists else None,
                **overrides,
            )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        original, snapshot = open_document(filepath, config)
    except (ValueError, IOError) as error:
        raise click.ClickException(str(error)) from error

    buffer = TextBuffer(
        original,
        selection=selection,
        cursor_line=cursor - 1 if cursor is not None else None,
    )
    state = ToggleState(is_indented=document_looks_indented(buffer.lines, config))
    session = IndentSession(config, state)

    if selection is not None:
        target = "selection"
    elif cursor is not None:
        target = "paragraph"
    else:
        target = "document"
    result = getattr(session, f"{mode}_{target}")(buffer)

    if not result.applied:
        raise click.ClickException(result.message)

    if to_stdout:
        click.echo(buffer.text, nl=False)
        return

    if buffer.text == original:
        click.echo(f"No changes: {filepath.name} already has the requested indentation", err=True)
        return

    try:
        save_document(
            filepath,
            buffer.text,
            snapshot,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"{result.message} ({result.lines_affected} lines): {filepath.name}", err=True)


def document_looks_indented(lines: list[str], config: IndentConfig) -> bool:
    """Seed the whole-document toggle from the first plain line of a file."""
    for line in lines:
        if is_plain(line, config):
            return has_indent(line, config)
    return False


if __name__ == "__main__":
    cli()
