"""Adding and removing first-line indents on plain Markdown lines."""

from __future__ import annotations

import re

from .classifier import is_plain
from .config import IndentConfig
from .constants import LEADING_INDENT_PATTERN

_INDENT_RUN_PATTERN = re.compile(r"\s{2,}")


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n`` only; ``\\r`` stays part of the line."""
    return text.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


def strip_leading_indent(line: str) -> str:
    """Remove the whole leading whitespace run, full-width spaces included."""
    return LEADING_INDENT_PATTERN.sub("", line, count=1)


def add_indent(lines: list[str], config: IndentConfig) -> list[str]:
    """Prefix every plain line with exactly one indent marker.

    Existing leading whitespace on a plain line is discarded before the marker
    is added, so applying the function twice gives the same result as applying
    it once. Blank and structural lines are returned unchanged.

    Args:
        lines: Document lines without trailing newlines.
        config: Configuration providing the marker and exclusion rules.

    Returns:
        list[str]: New list with the same number of lines.

    Examples:
        add_indent(["这是一个普通段落。"], IndentConfig())  # ["　　这是一个普通段落。"]
        add_indent(["# 标题"], IndentConfig())  # ["# 标题"]
    """
    return [
        config.indent_marker + strip_leading_indent(line) if is_plain(line, config) else line
        for line in lines
    ]


def remove_indent(lines: list[str], config: IndentConfig) -> list[str]:
    """Strip the entire leading whitespace run from every plain line.

    Pre-existing indentation is not restored after `add_indent`; plain lines
    always end up flush left.

    Examples:
        remove_indent(["　　已缩进的段落"], IndentConfig())  # ["已缩进的段落"]
    """
    return [strip_leading_indent(line) if is_plain(line, config) else line for line in lines]


def clean_existing_indent(lines: list[str], config: IndentConfig) -> list[str]:
    """Flush existing indentation before a whole-document `add_indent`.

    With `preserve_list_indent` only plain lines are cleaned; otherwise every
    line loses its leading whitespace, list items and code included.
    """
    if config.preserve_list_indent:
        return remove_indent(lines, config)
    return [strip_leading_indent(line) for line in lines]


def has_indent(line: str, config: IndentConfig) -> bool:
    """Guess whether a block already carries a first-line indent.

    Only the block's first line is inspected. Any run of two or more leading
    whitespace characters counts, so incidental indentation reads as indented.

    Examples:
        has_indent("　　正文", IndentConfig())  # True
        has_indent("正文", IndentConfig())  # False
    """
    return line.startswith(config.indent_marker) or _INDENT_RUN_PATTERN.match(line) is not None
