from __future__ import annotations

import pytest

from smart_indent.config import IndentConfig
from smart_indent.models import LineRange
from smart_indent.paragraph import is_paragraph_excluded, locate_paragraph
from smart_indent.transform import add_indent


def test_locates_paragraph_above_blank_line():
    lines = ["正文A", "正文B", "", "- 列表项"]

    target = locate_paragraph(lines, 1, IndentConfig())

    assert target == LineRange(0, 1)


def test_transforming_located_range_leaves_lines_outside_untouched():
    lines = ["正文A", "正文B", "", "- 列表项"]
    config = IndentConfig()
    target = locate_paragraph(lines, 1, config)

    lines[target.start_line : target.end_line + 1] = add_indent(target.lines_of(lines), config)

    assert lines == ["　　正文A", "　　正文B", "", "- 列表项"]


def test_scan_stops_at_structural_neighbours():
    lines = ["# 标题", "第一行", "第二行", "- 列表", "第三行"]

    assert locate_paragraph(lines, 2, IndentConfig()) == LineRange(1, 2)
    assert locate_paragraph(lines, 4, IndentConfig()) == LineRange(4, 4)


def test_structural_cursor_line_is_included():
    lines = ["# 标题", "正文"]

    target = locate_paragraph(lines, 0, IndentConfig())

    assert target == LineRange(0, 1)
    assert is_paragraph_excluded(target.lines_of(lines), IndentConfig())


def test_scan_reaches_document_edges():
    lines = ["一", "二", "三"]

    assert locate_paragraph(lines, 1, IndentConfig()) == LineRange(0, 2)


def test_cursor_is_clamped_to_document():
    lines = ["一", "", "三", "四"]

    assert locate_paragraph(lines, 99, IndentConfig()) == LineRange(2, 3)
    assert locate_paragraph(lines, -5, IndentConfig()) == LineRange(0, 0)


def test_configuration_changes_paragraph_boundaries():
    lines = ["正文", "| a | b |", "正文"]

    assert locate_paragraph(lines, 0, IndentConfig()) == LineRange(0, 0)
    assert locate_paragraph(lines, 0, IndentConfig(ignore_tables=False)) == LineRange(0, 2)


def test_empty_document_is_rejected():
    with pytest.raises(ValueError):
        locate_paragraph([], 0, IndentConfig())


def test_paragraph_with_quote_is_excluded():
    assert is_paragraph_excluded(["正文", "> 引用"], IndentConfig())
    assert not is_paragraph_excluded(["正文", "正文"], IndentConfig())
    assert not is_paragraph_excluded(["正文", ""], IndentConfig())
