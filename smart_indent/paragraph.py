"""Locating the paragraph around a cursor line."""

from __future__ import annotations

from .classifier import classify
from .config import IndentConfig
from .models import LineClass, LineRange


def locate_paragraph(lines: list[str], cursor_line: int, config: IndentConfig) -> LineRange:
    """Find the run of plain lines surrounding `cursor_line`.

    Scans upward and downward from the cursor while the neighbouring line is
    plain; blank and structural lines stop the scan. The cursor line itself is
    always part of the result, whatever its classification.

    Args:
        lines: Document lines without trailing newlines.
        cursor_line: Zero-based index of the cursor; clamped to the document.
        config: Configuration used to classify neighbouring lines.

    Returns:
        LineRange: Inclusive range inside the document bounds.

    Raises:
        ValueError: If `lines` is empty.

    Examples:
        locate_paragraph(["正文A", "正文B", "", "- 列表项"], 1, IndentConfig())
        # LineRange(start_line=0, end_line=1)
    """
    if not lines:
        raise ValueError("cannot locate a paragraph in an empty document")

    cursor_line = min(max(cursor_line, 0), len(lines) - 1)

    start_line = cursor_line
    while start_line > 0 and classify(lines[start_line - 1], config) is LineClass.PLAIN:
        start_line -= 1

    end_line = cursor_line
    while end_line < len(lines) - 1 and classify(lines[end_line + 1], config) is LineClass.PLAIN:
        end_line += 1

    return LineRange(start_line, end_line)


def is_paragraph_excluded(lines: list[str], config: IndentConfig) -> bool:
    """Return True when any of `lines` is structural."""
    return any(classify(line, config) is LineClass.STRUCTURAL for line in lines)
