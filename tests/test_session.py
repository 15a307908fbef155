from __future__ import annotations

import logging

import pytest

from smart_indent.config import ConfigError, IndentConfig
from smart_indent.editor import TextBuffer
from smart_indent.models import IndentStatus, LineRange, ToggleState
from smart_indent.session import IndentSession

DOCUMENT = "\n".join(
    [
        "# 标题",
        "",
        "  正文一",
        "正文二",
        "",
        "- 列表",
        "  - 子项",
    ]
)


class BrokenWriteBuffer(TextBuffer):
    def replace_all(self, lines: list[str]) -> None:
        raise RuntimeError("disk on fire")


def test_add_document_indents_plain_lines_only():
    session = IndentSession()
    buffer = TextBuffer(DOCUMENT)

    result = session.add_document(buffer)

    assert result.status is IndentStatus.APPLIED
    assert result.lines_affected == 7
    assert buffer.text == "\n".join(
        ["# 标题", "", "　　正文一", "　　正文二", "", "- 列表", "  - 子项"]
    )
    assert session.is_indented is True
    assert buffer.writes == 1


def test_add_document_flushes_lists_without_list_preservation():
    session = IndentSession(IndentConfig(preserve_list_indent=False))
    buffer = TextBuffer(DOCUMENT)

    session.add_document(buffer)

    assert buffer.lines[-1] == "- 子项"
    assert buffer.lines[2] == "　　正文一"


def test_remove_document_clears_indent_and_state():
    session = IndentSession(state=ToggleState(is_indented=True))
    buffer = TextBuffer("　　正文一\n\n　　正文二")

    result = session.remove_document(buffer)

    assert result.applied
    assert buffer.text == "正文一\n\n正文二"
    assert session.is_indented is False


def test_toggle_document_alternates():
    session = IndentSession()
    buffer = TextBuffer("正文")

    session.toggle_document(buffer)
    assert buffer.text == "　　正文"

    session.toggle_document(buffer)
    assert buffer.text == "正文"
    assert session.is_indented is False


def test_add_selection_transforms_exactly_selected_lines():
    session = IndentSession()
    buffer = TextBuffer("一\n二\n三", selection=LineRange(1, 2))

    result = session.add_selection(buffer)

    assert result.status is IndentStatus.APPLIED
    assert result.lines_affected == 2
    assert result.target == LineRange(1, 2)
    assert buffer.text == "一\n　　二\n　　三"
    assert session.is_indented is False


def test_toggle_selection_removes_when_first_line_is_indented():
    session = IndentSession()
    buffer = TextBuffer("　　一\n二", selection=LineRange(0, 1))

    session.toggle_selection(buffer)

    assert buffer.text == "一\n二"


def test_toggle_selection_adds_when_first_line_is_flush():
    session = IndentSession()
    buffer = TextBuffer("一\n　　二", selection=LineRange(0, 1))

    session.toggle_selection(buffer)

    assert buffer.text == "　　一\n　　二"


@pytest.mark.parametrize("selection", [None, LineRange(1, 2)])
def test_empty_selection_is_skipped(selection):
    session = IndentSession()
    buffer = TextBuffer("正文\n\n   ", selection=selection)

    result = session.add_selection(buffer)

    assert result.status is IndentStatus.EMPTY_SELECTION
    assert buffer.writes == 0
    assert buffer.text == "正文\n\n   "


def test_selection_outside_document_has_no_target():
    buffer = TextBuffer("正文", selection=LineRange(0, 5))

    result = IndentSession().add_selection(buffer)

    assert result.status is IndentStatus.NO_TARGET
    assert buffer.writes == 0


def test_paragraph_at_cursor_is_indented():
    buffer = TextBuffer("正文A\n正文B\n\n- 列表项", cursor_line=1)

    result = IndentSession().toggle_paragraph(buffer)

    assert result.status is IndentStatus.APPLIED
    assert result.target == LineRange(0, 1)
    assert buffer.text == "　　正文A\n　　正文B\n\n- 列表项"


def test_paragraph_with_heading_is_excluded():
    buffer = TextBuffer("# 标题\n正文", cursor_line=0)

    result = IndentSession().add_paragraph(buffer)

    assert result.status is IndentStatus.EXCLUDED_PARAGRAPH
    assert result.target == LineRange(0, 1)
    assert buffer.text == "# 标题\n正文"
    assert buffer.writes == 0


def test_excluded_and_empty_selection_messages_differ():
    session = IndentSession()
    excluded = session.add_paragraph(TextBuffer("# 标题\n正文", cursor_line=0))
    empty = session.add_selection(TextBuffer("正文"))

    assert excluded.message != empty.message


def test_remove_paragraph_strips_indent():
    buffer = TextBuffer("　　甲\n　　乙\n\n　　丙", cursor_line=0)

    IndentSession().remove_paragraph(buffer)

    assert buffer.text == "甲\n乙\n\n　　丙"


@pytest.mark.parametrize("cursor_line", [None, 1, 7])
def test_paragraph_without_usable_cursor_has_no_target(cursor_line):
    buffer = TextBuffer("正文\n\n正文", cursor_line=cursor_line)

    result = IndentSession().add_paragraph(buffer)

    assert result.status is IndentStatus.NO_TARGET
    assert buffer.writes == 0


@pytest.mark.parametrize(
    "operation",
    [
        "add_document",
        "remove_document",
        "toggle_document",
        "add_selection",
        "toggle_selection",
        "add_paragraph",
        "toggle_paragraph",
        "add",
        "remove",
        "toggle",
    ],
)
def test_missing_editor_reports_no_target(operation: str):
    session = IndentSession()

    result = getattr(session, operation)(None)

    assert result.status is IndentStatus.NO_TARGET
    assert session.is_indented is False


def test_transform_failure_is_reported_without_writing(caplog):
    buffer = TextBuffer("正文")
    buffer.lines = ["正文", None]
    session = IndentSession()

    with caplog.at_level(logging.ERROR, logger="smart_indent.session"):
        result = session.add_document(buffer)

    assert result.status is IndentStatus.FAILED
    assert buffer.writes == 0
    assert session.is_indented is False
    assert "Indent operation failed" in caplog.text


def test_editor_failure_is_reported_not_raised():
    session = IndentSession()

    result = session.add_document(BrokenWriteBuffer("正文"))

    assert result.status is IndentStatus.FAILED
    assert session.is_indented is False


def test_mode_follows_selection_then_cursor_then_document():
    session = IndentSession()

    selected = TextBuffer("一\n二\n\n三", selection=LineRange(3, 3), cursor_line=0)
    session.add(selected)
    assert selected.text == "一\n二\n\n　　三"

    blank_selection = TextBuffer("一\n二\n\n三", selection=LineRange(2, 2), cursor_line=0)
    session.add(blank_selection)
    assert blank_selection.text == "　　一\n　　二\n\n三"

    whole = TextBuffer("一\n二\n\n三")
    session.add(whole)
    assert whole.text == "　　一\n　　二\n\n　　三"
    assert session.is_indented is True


@pytest.mark.parametrize("selection", [LineRange(5, 6), LineRange(1, 4)])
@pytest.mark.parametrize("operation", ["add", "remove", "toggle"])
def test_resolved_mode_reports_selection_beyond_document(selection: LineRange, operation: str):
    buffer = TextBuffer("一\n二", selection=selection, cursor_line=0)

    result = getattr(IndentSession(), operation)(buffer)

    assert result.status is IndentStatus.NO_TARGET
    assert buffer.text == "一\n二"
    assert buffer.writes == 0


def test_toggle_without_selection_or_cursor_uses_document_state():
    session = IndentSession(state=ToggleState(is_indented=True))
    buffer = TextBuffer("　　正文")

    session.toggle(buffer)

    assert buffer.text == "正文"


def test_session_normalizes_indent_style():
    session = IndentSession(IndentConfig(indent_style="tab"))

    assert session.config.indent_marker == "\t"


def test_session_rejects_invalid_configuration():
    with pytest.raises(ConfigError):
        IndentSession(IndentConfig(indent_marker="x"))


def test_update_config_applies_to_next_operation():
    session = IndentSession()
    session.update_config(IndentConfig(indent_marker="  "))
    buffer = TextBuffer("正文")

    session.add_document(buffer)

    assert buffer.text == "  正文"
