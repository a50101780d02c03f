"""Read and write ``package.json``.

INVARIANT: The file is truth. Every step loads the manifest fresh,
transforms it in memory, and saves it back immediately. Nothing holds a
long-lived copy between steps.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

from nextprep.domain.errors import FilesystemError, NotFoundError, ParseError
from nextprep.domain.manifest import MANIFEST_FILENAME, Manifest

logger = logging.getLogger(__name__)


def manifest_path(directory: Path) -> Path:
    return directory / MANIFEST_FILENAME


def load(directory: Path) -> Manifest:
    """Read and parse ``package.json`` from *directory*.

    Raises:
        NotFoundError: The file does not exist.
        ParseError: The contents are not UTF-8 text holding a JSON object.
        FilesystemError: Any other read failure.
    """
    path = manifest_path(directory)
    logger.debug("Loading manifest from %s", path)
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(path, f"No package.json found in {directory}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise FilesystemError(path, "read", exc) from exc

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ParseError(path, exc.msg) from exc
    if not isinstance(data, dict):
        raise ParseError(path, "top-level value is not an object")
    return Manifest(data)


def dumps(manifest: Manifest) -> str:
    """Serialize with 2-space indent, original key order, and a trailing newline."""
    return json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False) + "\n"


def save(directory: Path, manifest: Manifest) -> None:
    """Overwrite ``package.json`` in *directory* with *manifest*.

    Full replacement, not a patch: concurrent out-of-band edits are lost.
    """
    path = manifest_path(directory)
    try:
        path.write_text(dumps(manifest), encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(path, "write", exc) from exc
    logger.debug("Saved manifest to %s", path)


def update(directory: Path, updater: Callable[[Manifest], Manifest]) -> Manifest:
    """Load, apply *updater*, save, and return the updated manifest.

    The file is only rewritten when the updater returns a different value.
    """
    current = load(directory)
    updated = updater(current)
    if updated != current:
        save(directory, updated)
    return updated
