"""Indent operations on a whole document, a selection, or the cursor paragraph."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from .classifier import classify
from .config import IndentConfig, normalize_config, validate_config
from .editor import EditorPort
from .exceptions import (
    EmptySelectionError,
    ExcludedParagraphError,
    IndentError,
    NoTargetError,
    TransformError,
)
from .models import IndentResult, IndentStatus, LineClass, ToggleState
from .paragraph import is_paragraph_excluded, locate_paragraph
from .transform import add_indent, clean_existing_indent, has_indent, join_lines, remove_indent

LOGGER = logging.getLogger(__name__)

Operation = Callable[[EditorPort, IndentConfig], IndentResult]


class IndentSession:
    """Entry points for adding, removing, and toggling first-line indents.

    A session owns a configuration snapshot and the whole-document toggle
    state. Every operation reads the editor once, transforms the resolved
    target in memory, and writes it back with a single call; it reports the
    outcome as an `IndentResult` instead of raising.

    Args:
        config: Configuration to use; defaults to `IndentConfig()`.
        state: Whole-document toggle state; defaults to not indented.

    Raises:
        ConfigError: If `config` is invalid.

    Examples:
        session = IndentSession()
        buffer = TextBuffer("正文A\\n正文B\\n\\n- 列表项", cursor_line=1)
        session.toggle_paragraph(buffer).status  # IndentStatus.APPLIED
    """

    def __init__(self, config: IndentConfig | None = None, state: ToggleState | None = None):
        self.update_config(config or IndentConfig())
        self.state = state or ToggleState()

    @property
    def is_indented(self) -> bool:
        return self.state.is_indented

    def update_config(self, config: IndentConfig) -> None:
        """Replace the configuration used by subsequent operations."""
        validate_config(config)
        self.config = normalize_config(config)

    # Whole document

    def add_document(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_document(ed, cfg, add=True))

    def remove_document(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_document(ed, cfg, add=False))

    def toggle_document(self, editor: EditorPort | None) -> IndentResult:
        add = not self.state.is_indented
        return self._run(editor, lambda ed, cfg: self._apply_document(ed, cfg, add=add))

    # Selection

    def add_selection(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_selection(ed, cfg, add=True))

    def remove_selection(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_selection(ed, cfg, add=False))

    def toggle_selection(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_selection(ed, cfg, add=None))

    # Cursor paragraph

    def add_paragraph(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_paragraph(ed, cfg, add=True))

    def remove_paragraph(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_paragraph(ed, cfg, add=False))

    def toggle_paragraph(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_paragraph(ed, cfg, add=None))

    # Mode resolved from editor state

    def add(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_resolved(ed, cfg, add=True))

    def remove(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_resolved(ed, cfg, add=False))

    def toggle(self, editor: EditorPort | None) -> IndentResult:
        return self._run(editor, lambda ed, cfg: self._apply_resolved(ed, cfg, add=None))

    def _run(self, editor: EditorPort | None, operation: Operation) -> IndentResult:
        if editor is None:
            LOGGER.info("Skipped: no editable Markdown document")
            return IndentResult(
                IndentStatus.NO_TARGET, message="Open a Markdown document to use this command"
            )

        config = self.config
        try:
            result = operation(editor, config)
        except EmptySelectionError as error:
            LOGGER.info("Skipped: %s", error)
            return IndentResult(IndentStatus.EMPTY_SELECTION, message=str(error))
        except ExcludedParagraphError as error:
            LOGGER.info("Skipped: %s", error)
            return IndentResult(
                IndentStatus.EXCLUDED_PARAGRAPH, message=str(error), target=error.target
            )
        except NoTargetError as error:
            LOGGER.info("Skipped: %s", error)
            return IndentResult(IndentStatus.NO_TARGET, message=str(error))
        except IndentError as error:
            LOGGER.exception("Indent operation failed: %s", error)
            return IndentResult(
                IndentStatus.FAILED, message="Indent operation failed; see the log for details"
            )
        except Exception:
            LOGGER.exception("Unexpected error during indent operation")
            return IndentResult(
                IndentStatus.FAILED, message="Indent operation failed; see the log for details"
            )

        LOGGER.info("%s (%d lines)", result.message, result.lines_affected)
        return result

    def _apply_resolved(
        self, editor: EditorPort, config: IndentConfig, add: bool | None
    ) -> IndentResult:
        selection = editor.get_selection()
        if selection is not None:
            lines = editor.get_lines()
            if selection.end_line >= len(lines) or join_lines(selection.lines_of(lines)).strip():
                return self._apply_selection(editor, config, add)
        if editor.get_cursor_line() is not None:
            return self._apply_paragraph(editor, config, add)
        if add is None:
            add = not self.state.is_indented
        return self._apply_document(editor, config, add)

    def _apply_document(self, editor: EditorPort, config: IndentConfig, add: bool) -> IndentResult:
        lines = editor.get_lines()
        if add:
            updated = _transform(lambda: add_indent(clean_existing_indent(lines, config), config))
        else:
            updated = _transform(lambda: remove_indent(lines, config))

        editor.replace_all(updated)
        self.state.is_indented = add
        action = "added to" if add else "removed from"
        return IndentResult(
            IndentStatus.APPLIED,
            lines_affected=len(lines),
            message=f"First-line indent {action} the document",
        )

    def _apply_selection(
        self, editor: EditorPort, config: IndentConfig, add: bool | None
    ) -> IndentResult:
        target = editor.get_selection()
        if target is None:
            raise EmptySelectionError()

        lines = editor.get_lines()
        if target.end_line >= len(lines):
            raise NoTargetError(
                f"Selection ends at line {target.end_line + 1} "
                f"but the document has {len(lines)} lines"
            )

        block = target.lines_of(lines)
        if not join_lines(block).strip():
            raise EmptySelectionError()

        if add is None:
            add = not has_indent(block[0], config)
        updated = _transform(lambda: _apply(block, config, add))

        editor.replace_range(target, updated)
        action = "added to" if add else "removed from"
        return IndentResult(
            IndentStatus.APPLIED,
            lines_affected=len(block),
            message=f"First-line indent {action} the selection",
            target=target,
        )

    def _apply_paragraph(
        self, editor: EditorPort, config: IndentConfig, add: bool | None
    ) -> IndentResult:
        cursor_line = editor.get_cursor_line()
        lines = editor.get_lines()
        if cursor_line is None or not 0 <= cursor_line < len(lines):
            raise NoTargetError("No cursor position inside the document")
        if classify(lines[cursor_line], config) is LineClass.BLANK:
            raise NoTargetError("The cursor is on a blank line; no paragraph to indent")

        target = locate_paragraph(lines, cursor_line, config)
        block = target.lines_of(lines)
        if is_paragraph_excluded(block, config):
            raise ExcludedParagraphError(target)

        if add is None:
            add = not has_indent(block[0], config)
        updated = _transform(lambda: _apply(block, config, add))

        editor.replace_range(target, updated)
        action = "added to" if add else "removed from"
        return IndentResult(
            IndentStatus.APPLIED,
            lines_affected=len(block),
            message=f"First-line indent {action} the paragraph",
            target=target,
        )


def _apply(lines: list[str], config: IndentConfig, add: bool) -> list[str]:
    return add_indent(lines, config) if add else remove_indent(lines, config)


def _transform(step: Callable[[], list[str]]) -> list[str]:
    try:
        return step()
    except (AttributeError, TypeError, ValueError, re.error) as error:
        raise TransformError(f"Unable to transform lines: {error}") from error
