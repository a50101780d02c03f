"""Manifest — immutable view over ``package.json`` contents.

The raw JSON object is kept as-is so that unknown keys and key order
survive a load/mutate/save cycle. All transformations return a new
:class:`Manifest`; callers rebind to the returned value.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

MANIFEST_FILENAME = "package.json"

DEPENDENCY_COLLECTIONS: tuple[str, ...] = ("dependencies", "devDependencies")


@dataclass(frozen=True)
class Manifest:
    """Structured project metadata loaded from ``package.json``."""

    raw: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        return self.raw.get("name")

    @property
    def version(self) -> str | None:
        return self.raw.get("version")

    @property
    def dependencies(self) -> Mapping[str, str]:
        return self.collection("dependencies")

    @property
    def dev_dependencies(self) -> Mapping[str, str]:
        return self.collection("devDependencies")

    @property
    def scripts(self) -> Mapping[str, str]:
        return self.collection("scripts")

    def collection(self, name: str) -> Mapping[str, Any]:
        """Return a top-level mapping field, or an empty mapping if absent."""
        value = self.raw.get(name)
        if isinstance(value, Mapping):
            return value
        return {}

    def with_entry(self, collection: str, key: str, value: str) -> Manifest:
        """Return a copy with ``raw[collection][key] = value``.

        The collection is created (appended after existing keys) when absent.
        Existing keys keep their position.
        """
        data = self.to_dict()
        current = data.get(collection)
        entries = dict(current) if isinstance(current, Mapping) else {}
        entries[key] = value
        data[collection] = entries
        return Manifest(data)

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the raw JSON object, safe to mutate."""
        return copy.deepcopy(dict(self.raw))


def has_package(manifest: Manifest, package_name: str) -> bool:
    """True iff *package_name* is a key of either dependency map.

    A package listed in both maps counts as present.
    """
    return any(package_name in manifest.collection(name) for name in DEPENDENCY_COLLECTIONS)


def missing_packages(manifest: Manifest, package_names: list[str]) -> list[str]:
    """Filter *package_names* down to those absent from both dependency maps."""
    return [name for name in package_names if not has_package(manifest, name)]


def duplicated_packages(manifest: Manifest) -> list[str]:
    """Packages declared in both ``dependencies`` and ``devDependencies``."""
    runtime = manifest.dependencies
    return sorted(name for name in manifest.dev_dependencies if name in runtime)
