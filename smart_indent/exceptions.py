"""Package-specific exception types."""

from __future__ import annotations

from .models import LineRange


class IndentError(Exception):
    """Base class for errors raised while resolving or transforming a target."""


class NoTargetError(IndentError):
    """Raised when there is no editable document or no line to operate on."""


class EmptySelectionError(IndentError):
    """Raised when a selection command is given an empty or blank selection."""

    def __init__(self):
        super().__init__("Select the text to indent first")


class ExcludedParagraphError(IndentError):
    """Raised when the cursor paragraph contains a structural line.

    Args:
        target: Range of the paragraph that was skipped.
    """

    def __init__(self, target: LineRange):
        self.target = target
        super().__init__(
            f"Paragraph at lines {target.start_line + 1}-{target.end_line + 1} "
            "contains Markdown structure; skipped"
        )


class TransformError(IndentError):
    """Raised when classification or transformation fails unexpectedly."""
