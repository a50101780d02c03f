"""Locate the nextprep config file for a project.

Lookup order:

1. ``NEXTPREP_CONFIG``: used as-is; a dangling path means no config.
2. From the project directory upward, the first directory holding either
   ``nextprep.toml`` or ``.nextprep/config.toml`` (the directory that also
   carries template overrides). ``nextprep.toml`` wins within a directory.

The ``--config`` flag bypasses discovery entirely (see settings).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "nextprep.toml"
CONFIG_DIR_FILENAME = Path(".nextprep") / "config.toml"
CONFIG_ENV_VAR = "NEXTPREP_CONFIG"


def _candidates(directory: Path) -> Iterator[Path]:
    yield directory / CONFIG_FILENAME
    yield directory / CONFIG_DIR_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        for candidate in _candidates(directory):
            if candidate.is_file():
                return candidate
    return None
