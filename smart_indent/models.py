"""Data models for smart-indent."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class LineClass(Enum):
    """Classification of a single Markdown line.

    Attributes:
        BLANK: Empty or whitespace-only line.
        STRUCTURAL: Markdown structure that must be left verbatim.
        PLAIN: Ordinary prose eligible for a first-line indent.
    """

    BLANK = auto()
    STRUCTURAL = auto()
    PLAIN = auto()


@dataclass(frozen=True)
class LineRange:
    """Inclusive, zero-based span of lines in a document.

    Attributes:
        start_line: Index of the first line in the range.
        end_line: Index of the last line in the range.

    Examples:
        LineRange(0, 1).lines_of(["a", "b", "c"])  # ["a", "b"]
    """

    start_line: int
    end_line: int

    def __post_init__(self):
        if self.start_line < 0:
            raise ValueError(f"start_line must be >= 0, got {self.start_line}")
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not precede start_line ({self.start_line})"
            )

    def __len__(self) -> int:
        return self.end_line - self.start_line + 1

    @property
    def line_count(self) -> int:
        return len(self)

    def contains(self, index: int) -> bool:
        return self.start_line <= index <= self.end_line

    def lines_of(self, lines: list[str]) -> list[str]:
        return lines[self.start_line : self.end_line + 1]


class IndentStatus(Enum):
    """Terminal status of an indent operation.

    Attributes:
        APPLIED: The target was transformed and written back.
        NO_TARGET: No editable document, or nothing to operate on.
        EMPTY_SELECTION: The selection was empty or whitespace-only.
        EXCLUDED_PARAGRAPH: The cursor paragraph contains a structural line.
        FAILED: An unexpected error occurred; nothing was written.
    """

    APPLIED = auto()
    NO_TARGET = auto()
    EMPTY_SELECTION = auto()
    EXCLUDED_PARAGRAPH = auto()
    FAILED = auto()


@dataclass(frozen=True)
class IndentResult:
    """Outcome reported back to the caller of an indent operation.

    Attributes:
        status: Terminal status of the operation.
        lines_affected: Number of lines in the transformed target, 0 when skipped.
        message: Human-readable notice for the user.
        target: Range that was transformed, or None for whole-document and
            skipped operations.
    """

    status: IndentStatus
    lines_affected: int = 0
    message: str = ""
    target: LineRange | None = None

    @property
    def applied(self) -> bool:
        return self.status is IndentStatus.APPLIED


@dataclass
class ToggleState:
    """Whole-document indent state, local to one session and never persisted."""

    is_indented: bool = False
