"""Editor abstraction used by the indent session."""

from __future__ import annotations

from typing import Protocol

from .models import LineRange
from .transform import join_lines, split_lines


class EditorPort(Protocol):
    """Narrow view of a host editor holding one Markdown document.

    Hosts adapt their own editor object to this interface; the indent session
    never touches anything else.
    """

    def get_lines(self) -> list[str]: ...

    def get_selection(self) -> LineRange | None: ...

    def get_cursor_line(self) -> int | None: ...

    def replace_range(self, target: LineRange, lines: list[str]) -> None: ...

    def replace_all(self, lines: list[str]) -> None: ...


class TextBuffer:
    """In-memory `EditorPort` over a newline-delimited string.

    Args:
        text: Document text, split on ``\\n`` only.
        selection: Selected lines, if any.
        cursor_line: Zero-based cursor line, if any.

    Examples:
        buffer = TextBuffer("正文A\\n正文B", cursor_line=1)
        buffer.text  # "正文A\\n正文B"
    """

    def __init__(
        self,
        text: str = "",
        selection: LineRange | None = None,
        cursor_line: int | None = None,
    ):
        self.lines = split_lines(text)
        self.selection = selection
        self.cursor_line = cursor_line
        self.writes = 0

    @property
    def text(self) -> str:
        return join_lines(self.lines)

    def get_lines(self) -> list[str]:
        return list(self.lines)

    def get_selection(self) -> LineRange | None:
        return self.selection

    def get_cursor_line(self) -> int | None:
        return self.cursor_line

    def replace_range(self, target: LineRange, lines: list[str]) -> None:
        if target.end_line >= len(self.lines):
            raise IndexError(f"{target} is outside a document of {len(self.lines)} lines")
        self.lines[target.start_line : target.end_line + 1] = lines
        self.writes += 1

    def replace_all(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.writes += 1
