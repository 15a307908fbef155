"""Constants used across the smart-indent package."""

from __future__ import annotations

import re

FULL_WIDTH_SPACE = "\u3000"
ZERO_WIDTH_NON_JOINER = "\u200c"

# Named indent presets offered to users; values are literal markers.
INDENT_MARKERS = {
    "full-width": FULL_WIDTH_SPACE * 2,
    "4-spaces": " " * 4,
    "2-spaces": " " * 2,
    "tab": "\t",
}
DEFAULT_INDENT_STYLE = "full-width"
DEFAULT_INDENT_MARKER = INDENT_MARKERS[DEFAULT_INDENT_STYLE]

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")

# `\s` covers U+3000; U+200C is stripped along with it as a leftover indent artifact.
LEADING_INDENT_PATTERN = re.compile(rf"^[\s{ZERO_WIDTH_NON_JOINER}]+")
