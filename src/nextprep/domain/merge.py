"""Idempotent field merge for flat string-valued manifest collections.

The merge never overwrites a value a human has already set: a divergent
value is reported to the caller and the manifest comes back unchanged.
Running a step twice therefore yields ``ALREADY_CORRECT`` wherever the
first pass yielded ``ADDED``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from nextprep.domain.errors import ValidationError
from nextprep.domain.manifest import Manifest


class MergeResult(StrEnum):
    """Outcome of merging one field into a manifest collection."""

    ADDED = "added"
    ALREADY_CORRECT = "already_correct"
    SKIPPED_DIVERGENT = "skipped_divergent"


def merge_field(
    manifest: Manifest,
    collection: str,
    key: str,
    desired: str,
) -> tuple[Manifest, MergeResult]:
    """Merge ``collection[key] = desired`` into *manifest*.

    Returns the (possibly new) manifest and the merge outcome.

    Examples:
        >>> m, r = merge_field(Manifest({}), "scripts", "format", "prettier . --write")
        >>> r, dict(m.scripts)
        (<MergeResult.ADDED: 'added'>, {'format': 'prettier . --write'})
        >>> merge_field(m, "scripts", "format", "prettier . --write")[1]
        <MergeResult.ALREADY_CORRECT: 'already_correct'>
    """
    entries = manifest.raw.get(collection)
    if entries is not None and not isinstance(entries, Mapping):
        msg = f"'{collection}' in package.json is not an object"
        raise ValidationError(msg)

    current = (entries or {}).get(key)
    if current == desired:
        return manifest, MergeResult.ALREADY_CORRECT
    if current is not None:
        return manifest, MergeResult.SKIPPED_DIVERGENT
    return manifest.with_entry(collection, key, desired), MergeResult.ADDED


def merge_fields(
    manifest: Manifest,
    collection: str,
    desired: Mapping[str, str],
) -> tuple[Manifest, dict[str, MergeResult]]:
    """Apply :func:`merge_field` for every item of *desired*, in order."""
    outcomes: dict[str, MergeResult] = {}
    for key, value in desired.items():
        manifest, outcomes[key] = merge_field(manifest, collection, key, value)
    return manifest, outcomes
