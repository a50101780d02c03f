"""Packaged templates and static config resources.

Jinja2 templates load user overrides from ``.nextprep/templates/`` inside
the project before the packaged defaults. Static config files are copied
byte-for-byte from the package.
"""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(*, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with project overrides before packaged defaults."""
    loaders: list[BaseLoader] = []
    if project_root is not None:
        loaders.append(FileSystemLoader(str(project_root / ".nextprep" / "templates")))

    loaders.append(PackageLoader("nextprep", "templates"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def read_resource(name: str) -> bytes:
    """Return the bytes of a packaged file under ``nextprep/templates/``."""
    return files("nextprep").joinpath("templates", name).read_bytes()
