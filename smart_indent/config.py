"""Configuration loading and management."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_INDENT_MARKER, DEFAULT_MAX_FILE_SIZE, INDENT_MARKERS


@dataclass(frozen=True)
class IndentConfig:
    """Configuration for adding and removing first-line indents.

    Attributes:
        ignore_headers: Leave ``#`` heading lines untouched.
        ignore_lists: Leave ordered and unordered list items (and ``>`` quote
            lines) untouched.
        ignore_tables: Leave ``|``-delimited table rows untouched.
        ignore_code: Leave code fences and lines indented by four spaces
            untouched.
        ignore_quotes: Leave ``>`` block quote lines untouched.
        preserve_list_indent: Also recognize list items and quotes nested by
            two to four whitespace characters of any kind.
        indent_marker: Literal string prepended to plain lines.
        indent_style: Optional preset name (``"full-width"``, ``"4-spaces"``,
            ``"2-spaces"``, ``"tab"``) resolved into `indent_marker`.
        max_file_size: Maximum file size in bytes that the CLI will process.

    Examples:
        IndentConfig(ignore_tables=False, indent_marker="    ")
    """

    # Exclusion rules
    ignore_headers: bool = True
    ignore_lists: bool = True
    ignore_tables: bool = True
    ignore_code: bool = True
    ignore_quotes: bool = True
    preserve_list_indent: bool = True

    # Formatting
    indent_marker: str = DEFAULT_INDENT_MARKER
    indent_style: str | None = None

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_marker` must not be empty")
    """


_FLAG_FIELDS = (
    "ignore_headers",
    "ignore_lists",
    "ignore_tables",
    "ignore_code",
    "ignore_quotes",
    "preserve_list_indent",
)

# Key names used by the editor host when it persists settings as key/value data.
SETTINGS_KEYS = {
    "ignore_headers": "shouldIgnoreHeaders",
    "ignore_lists": "shouldIgnoreLists",
    "ignore_tables": "shouldIgnoreTables",
    "ignore_code": "shouldIgnoreCode",
    "ignore_quotes": "shouldIgnoreQuotes",
    "preserve_list_indent": "shouldPreserveListIndent",
    "indent_marker": "indentChar",
}


# Files read in each directory, with their candidate tables in lookup order.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "smart-indent"),)),
    (".smart-indent.toml", (("smart-indent",), ("tool", "smart-indent"))),
)


def load_config(search_path: Path) -> IndentConfig:
    """Load configuration from the nearest directory that defines it.

    Starting at `search_path` and moving towards the filesystem root, each
    directory is checked for the files in `CONFIG_SOURCES`: the
    ``[tool.smart-indent]`` table of `pyproject.toml`, then the
    ``[smart-indent]`` (or ``[tool.smart-indent]``) table of
    `.smart-indent.toml`. The first table found wins. Unreadable or malformed
    TOML files are ignored.

    Raises:
        ConfigError: If the table found is not a table or holds keys that
            `IndentConfig` does not define.

    Examples:
        load_config(Path("notes"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            document = _read_toml(config_file)
            if document is None:
                continue
            for table_path in table_paths:
                table = _lookup(document, table_path)
                if table is not None:
                    return normalize_config(_config_from_table(table, config_file, table_path))

    return IndentConfig()


def _read_toml(config_file: Path) -> dict | None:
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _lookup(document: dict, table_path: tuple[str, ...]) -> object | None:
    # TOML has no null, so None always means the key is absent.
    node: object = document
    for key in table_path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _config_from_table(
    table: object, config_file: Path, table_path: tuple[str, ...]
) -> IndentConfig:
    location = f"`[{'.'.join(table_path)}]` in {config_file}"
    if not isinstance(table, dict):
        raise ConfigError(f"Expected a table for {location}")

    unknown = sorted(set(table) - {field.name for field in fields(IndentConfig)})
    if unknown:
        raise ConfigError(f"Unsupported keys {', '.join(unknown)} for {location}")
    return IndentConfig(**table)


def normalize_config(config: IndentConfig) -> IndentConfig:
    """Resolve the `indent_style` preset into a literal `indent_marker`."""
    if config.indent_style is None:
        return config

    try:
        indent_marker = INDENT_MARKERS[config.indent_style]
    except (KeyError, TypeError) as error:
        raise ConfigError(
            f"`indent_style` must be one of: {', '.join(INDENT_MARKERS)}"
        ) from error

    return replace(config, indent_marker=indent_marker, indent_style=None)


def validate_config(config: IndentConfig) -> None:
    """Validate an `IndentConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If an exclusion flag is not a boolean, the indent marker
            is empty or contains visible characters, the indent style is
            unknown, or the file size limit is not a positive integer.

    Examples:
        validate_config(IndentConfig(indent_marker="\\t"))
    """
    config = normalize_config(config)

    for name in _FLAG_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    marker = config.indent_marker
    if not isinstance(marker, str) or not marker:
        raise ConfigError("`indent_marker` must not be empty")
    if not marker.isspace():
        raise ConfigError("`indent_marker` must contain only whitespace characters")
    if "\n" in marker or "\r" in marker:
        raise ConfigError("`indent_marker` must not contain line breaks")

    size = config.max_file_size
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: IndentConfig, **overrides: object) -> IndentConfig:
    """Apply override values to an `IndentConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        IndentConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `IndentConfig`.

    Examples:
        updated = apply_overrides(config, ignore_tables=False, indent_style="tab")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "indent_marker" in changes and "indent_style" not in changes:
        changes["indent_style"] = None
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> IndentConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        IndentConfig: Validated configuration ready for use.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), ignore_code=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def config_from_settings(settings: dict[str, object] | None) -> IndentConfig:
    """Build a configuration from host key/value settings.

    Missing keys and keys stored as ``None`` fall back to their defaults.

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """
    defaults = IndentConfig()
    values = {}
    for name, key in SETTINGS_KEYS.items():
        value = (settings or {}).get(key)
        values[name] = getattr(defaults, name) if value is None else value

    config = IndentConfig(**values)
    validate_config(config)
    return config


def config_to_settings(config: IndentConfig) -> dict[str, object]:
    """Return the host key/value representation of `config`."""
    config = normalize_config(config)
    return {key: getattr(config, name) for name, key in SETTINGS_KEYS.items()}


def load_settings(settings_file: Path) -> IndentConfig:
    """Load host settings stored as a JSON object.

    Returns defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or holds
            invalid values.
    """
    if not settings_file.exists():
        return IndentConfig()

    try:
        with open(settings_file, encoding="UTF-8") as stream:
            data = json.load(stream)
    except (OSError, json.JSONDecodeError) as error:
        raise ConfigError(f"Unable to read settings from {settings_file}: {error}") from error

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings in {settings_file}")

    return config_from_settings(data)


def save_settings(config: IndentConfig, settings_file: Path) -> None:
    """Write host settings for `config` as a JSON object."""
    validate_config(config)
    with open(settings_file, "w", encoding="UTF-8") as stream:
        json.dump(config_to_settings(config), stream, ensure_ascii=False, indent=2)

