"""Filesystem helpers for project mutations.

All helpers translate unexpected ``OSError`` into
:class:`~nextprep.domain.errors.FilesystemError` and undecodable text into
:class:`~nextprep.domain.errors.ParseError`. Expected conditions
(file missing on delete, file already present on exclusive create) are
reported through return values, not exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from nextprep.domain.errors import FilesystemError, ParseError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def find_file_path(
    project_root: Path,
    candidates: Sequence[str],
    *,
    description: str,
) -> Path | None:
    """Return the first existing ``project_root / candidate``, or None.

    Candidates are checked in order; the first regular file wins.
    """
    for candidate in candidates:
        path = project_root / candidate
        if path.is_file():
            logger.debug("Found %s at %s", description, candidate)
            return path
    logger.debug("Could not find %s (%s)", description, ", ".join(candidates))
    return None


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_text(path: Path) -> str:
    """Read *path* as UTF-8.

    Raises:
        ParseError: The file is not valid UTF-8.
        FilesystemError: The file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise FilesystemError(path, "read", exc) from exc


def write_text(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(path, "write", exc) from exc


def write_bytes_exclusive(path: Path, content: bytes) -> bool:
    """Create *path* with *content* unless it already exists.

    Returns True if the file was created, False if it already existed.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(path.parent, "create", exc) from exc
    try:
        with path.open("xb") as fh:
            fh.write(content)
    except FileExistsError:
        return False
    except OSError as exc:
        raise FilesystemError(path, "create", exc) from exc
    return True


def try_delete_file(path: Path) -> bool:
    """Delete *path*. Returns False if it did not exist."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise FilesystemError(path, "delete", exc) from exc
    return True
