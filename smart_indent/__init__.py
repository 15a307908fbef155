"""
smart-indent: first-line paragraph indentation for Markdown documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    smart-indent chapter.md --mode add

Library Usage:
    from smart_indent import IndentConfig, IndentSession, TextBuffer, add_indent

    lines = add_indent(["这是一个普通段落。", "# 标题"], IndentConfig())

    session = IndentSession()
    buffer = TextBuffer(text, cursor_line=3)
    result = session.toggle_paragraph(buffer)
"""

from .classifier import STRUCTURE_RULES, StructureRule, classify, match_rule
from .config import ConfigError, IndentConfig, build_config, config_from_settings
from .editor import EditorPort, TextBuffer
from .exceptions import (
    EmptySelectionError,
    ExcludedParagraphError,
    IndentError,
    NoTargetError,
    TransformError,
)
from .models import IndentResult, IndentStatus, LineClass, LineRange, ToggleState
from .paragraph import is_paragraph_excluded, locate_paragraph
from .session import IndentSession
from .transform import add_indent, clean_existing_indent, has_indent, remove_indent

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "classify",
    "match_rule",
    "add_indent",
    "remove_indent",
    "clean_existing_indent",
    "has_indent",
    "locate_paragraph",
    "is_paragraph_excluded",
    "IndentSession",
    # Data models
    "IndentConfig",
    "IndentResult",
    "IndentStatus",
    "LineClass",
    "LineRange",
    "ToggleState",
    "StructureRule",
    "STRUCTURE_RULES",
    # Editor integration
    "EditorPort",
    "TextBuffer",
    # Configuration
    "build_config",
    "config_from_settings",
    # Exceptions
    "ConfigError",
    "IndentError",
    "NoTargetError",
    "EmptySelectionError",
    "ExcludedParagraphError",
    "TransformError",
    # Version
    "__version__",
]
