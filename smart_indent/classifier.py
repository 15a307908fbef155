"""Line classification for first-line indentation."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .config import IndentConfig
from .models import LineClass


def _always(config: IndentConfig) -> bool:
    return True


@dataclass(frozen=True)
class StructureRule:
    """One structural Markdown category recognized by the classifier.

    Attributes:
        name: Short identifier reported by `match_rule`.
        pattern: Compiled pattern matched against the start of a line.
        enabled: Predicate telling whether the rule is active for a configuration.
    """

    name: str
    pattern: re.Pattern[str]
    enabled: Callable[[IndentConfig], bool] = _always

    def matches(self, line: str) -> bool:
        return self.pattern.match(line) is not None


# Evaluated in order; the first active rule that matches wins.
STRUCTURE_RULES: tuple[StructureRule, ...] = (
    StructureRule("horizontal-rule", re.compile(r"\s*[-*]{3,}")),
    StructureRule("html", re.compile(r"\s*<[^>]+>")),
    StructureRule("image", re.compile(r"\s*!\[")),
    StructureRule("link-reference", re.compile(r"\s*\[.*?\]:")),
    StructureRule("callout", re.compile(r"\s*:::")),
    StructureRule("heading", re.compile(r"\s*#+\s"), lambda config: config.ignore_headers),
    StructureRule(
        "list-item", re.compile(r" {0,4}(?:\d+\.|[-*+])\s"), lambda config: config.ignore_lists
    ),
    StructureRule(
        "nested-list-item",
        re.compile(r"\s{2,4}(?:\d+\.|[-*+])\s"),
        lambda config: config.ignore_lists and config.preserve_list_indent,
    ),
    StructureRule(
        "quote",
        re.compile(r"\s*>(?:\s|$)"),
        lambda config: config.ignore_quotes or config.ignore_lists,
    ),
    StructureRule("table", re.compile(r"\s*\|[^|]*\|"), lambda config: config.ignore_tables),
    StructureRule("code-fence", re.compile(r"\s*```"), lambda config: config.ignore_code),
    StructureRule("indented-code", re.compile(r" {4}"), lambda config: config.ignore_code),
)


def active_rules(config: IndentConfig) -> list[StructureRule]:
    """Return the rules that apply under `config`, in evaluation order."""
    return [rule for rule in STRUCTURE_RULES if rule.enabled(config)]


def match_rule(line: str, config: IndentConfig) -> str | None:
    """Name the first active structural rule matching `line`.

    Args:
        line: A single line without its trailing newline.
        config: Configuration deciding which rules are active.

    Returns:
        str | None: Name of the matching rule, or None when the line carries no
            recognized structure.

    Examples:
        match_rule("## Title", IndentConfig())  # "heading"
        match_rule("Some prose.", IndentConfig())  # None
    """
    for rule in active_rules(config):
        if rule.matches(line):
            return rule.name
    return None


def classify(line: str, config: IndentConfig) -> LineClass:
    """Classify a Markdown line as blank, structural, or plain prose.

    Args:
        line: A single line without its trailing newline.
        config: Configuration deciding which structures are protected.

    Returns:
        LineClass: `BLANK` for empty or whitespace-only lines, `STRUCTURAL`
            when an active rule matches, otherwise `PLAIN`.

    Examples:
        classify("# 标题", IndentConfig())  # LineClass.STRUCTURAL
        classify("  1. 子列表项", IndentConfig())  # LineClass.STRUCTURAL
        classify("这是一个普通段落。", IndentConfig())  # LineClass.PLAIN
    """
    if not line.strip():
        return LineClass.BLANK
    if match_rule(line, config) is not None:
        return LineClass.STRUCTURAL
    return LineClass.PLAIN


def is_plain(line: str, config: IndentConfig) -> bool:
    return classify(line, config) is LineClass.PLAIN
