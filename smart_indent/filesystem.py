"""Reading and rewriting Markdown documents on disk."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .config import IndentConfig
from .constants import MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "SMART_INDENT_MAX_FILE_SIZE"


def resolve_markdown_path(raw_path: str) -> Path:
    """Return the absolute path of an existing Markdown file.

    Raises:
        ValueError: If nothing exists at `raw_path`, it is not a regular file,
            or its extension is not one of `MARKDOWN_EXTENSIONS`.
    """
    try:
        path = Path(raw_path).expanduser().resolve(strict=True)
    except OSError as error:
        raise ValueError(f"Cannot open {raw_path}: {error.strerror or error}") from error

    if not path.is_file():
        raise ValueError(f"{path} is not a regular file.")
    if path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{path.name} is not a Markdown file (expected one of: "
            f"{', '.join(MARKDOWN_EXTENSIONS)})"
        )
    return path


def size_limit(config: IndentConfig) -> int:
    """Byte limit for a document: the environment override, else `config.max_file_size`.

    Raises:
        ValueError: If `SMART_INDENT_MAX_FILE_SIZE` is set to anything but a
            positive integer.
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return config.max_file_size

    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return limit


def open_document(path: Path, config: IndentConfig) -> tuple[str, os.stat_result]:
    """Read a Markdown document together with the stat taken before reading.

    The text is decoded as UTF-8 and ``\\r\\n`` line endings are kept as stored.
    The returned stat is later handed to `save_document` so that a file edited
    in the meantime is not overwritten.

    Args:
        path: Markdown file to read.
        config: Configuration supplying the default size limit.

    Returns:
        tuple[str, os.stat_result]: Document text and its stat snapshot.

    Raises:
        ValueError: If the size limit override is invalid.
        IOError: If the file cannot be read, is not a regular file, is larger
            than the size limit, or is not valid UTF-8.

    Examples:
        text, snapshot = open_document(Path("chapter.md"), IndentConfig())
    """
    limit = size_limit(config)
    snapshot = _stat_regular_file(path)
    if snapshot.st_size > limit:
        raise IOError(f"{path.name} exceeds the maximum allowed size of {limit} bytes.")

    try:
        with open(path, "r", encoding="UTF-8", newline="") as file:
            text = file.read()
    except UnicodeDecodeError as error:
        raise IOError(f"{path.name} is not valid UTF-8: {error}") from error
    except OSError as error:
        raise IOError(f"Cannot read {path}: {error.strerror or error}") from error

    return text, snapshot


def save_document(
    path: Path,
    text: str,
    snapshot: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Replace a document with `text` through a temporary file in the same directory.

    Permission bits and, where allowed, ownership are carried over from
    `snapshot`; the access time is restored after the replace.

    Raises:
        IOError: If the file changed since `snapshot` was taken or cannot be
            replaced.
    """
    if _fingerprint(_stat_regular_file(path)) != _fingerprint(snapshot):
        raise IOError(f"{path.name} changed on disk after it was read; not overwriting it.")

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="UTF-8",
            newline="",
            delete=False,
            dir=path.parent,
            prefix=f".{path.name}.",
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        os.chmod(temp_path, stat.S_IMODE(snapshot.st_mode))
        if hasattr(os, "chown"):
            try:
                os.chown(temp_path, snapshot.st_uid, snapshot.st_gid)
            except PermissionError:
                if warn is not None:
                    warn(f"Warning: ownership of {path.name} could not be preserved")

        os.replace(temp_path, path)
        temp_path = None
        os.utime(path, ns=(snapshot.st_atime_ns, path.stat().st_mtime_ns))
    except OSError as error:
        raise IOError(f"Cannot write {path}: {error.strerror or error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)


def _stat_regular_file(path: Path) -> os.stat_result:
    try:
        result = os.stat(path)
    except OSError as error:
        raise IOError(f"Cannot access {path}: {error.strerror or error}") from error
    if not stat.S_ISREG(result.st_mode):
        raise IOError(f"{path} is not a regular file.")
    return result


def _fingerprint(result: os.stat_result) -> tuple[int, int, int, int]:
    return (result.st_ino, result.st_dev, result.st_size, result.st_mtime_ns)
