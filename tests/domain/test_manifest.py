"""Tests for the Manifest record and package presence checks."""

from __future__ import annotations

import pytest

from nextprep.domain.manifest import (
    Manifest,
    duplicated_packages,
    has_package,
    missing_packages,
)


class TestManifest:
    def test_scalar_fields(self) -> None:
        m = Manifest({"name": "app", "version": "1.2.3"})
        assert m.name == "app"
        assert m.version == "1.2.3"

    def test_missing_fields(self) -> None:
        m = Manifest({})
        assert m.name is None
        assert m.version is None
        assert m.scripts == {}
        assert m.dependencies == {}
        assert m.dev_dependencies == {}

    def test_non_mapping_collection_reads_as_empty(self) -> None:
        assert Manifest({"scripts": "oops"}).scripts == {}

    def test_with_entry_returns_new_record(self) -> None:
        m = Manifest({"private": True, "scripts": {"dev": "next dev"}})
        updated = m.with_entry("scripts", "build", "next build")
        assert updated is not m
        assert "build" not in m.scripts
        assert updated.raw == {
            "private": True,
            "scripts": {"dev": "next dev", "build": "next build"},
        }

    def test_with_entry_appends_new_collection_last(self) -> None:
        m = Manifest({"name": "app", "version": "1.0.0"})
        updated = m.with_entry("scripts", "format", "prettier . --write")
        assert list(updated.raw) == ["name", "version", "scripts"]

    def test_to_dict_is_a_deep_copy(self) -> None:
        m = Manifest({"scripts": {"dev": "next dev"}})
        data = m.to_dict()
        data["scripts"]["dev"] = "changed"
        assert m.scripts["dev"] == "next dev"


class TestHasPackage:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ({}, False),
            ({"dependencies": {"next": "15"}}, True),
            ({"devDependencies": {"next": "15"}}, True),
            ({"dependencies": {"react": "19"}, "devDependencies": {"eslint": "9"}}, False),
            ({"dependencies": {"next": "15"}, "devDependencies": {"next": "15"}}, True),
            ({"dependencies": {"next": ""}}, True),
        ],
    )
    def test_presence(self, raw: dict, expected: bool) -> None:
        assert has_package(Manifest(raw), "next") is expected

    def test_does_not_match_other_collections(self) -> None:
        m = Manifest({"peerDependencies": {"next": "15"}, "scripts": {"next": "next"}})
        assert has_package(m, "next") is False


class TestPackageHelpers:
    def test_missing_packages_keeps_order(self) -> None:
        m = Manifest({"devDependencies": {"eslint": "^9"}})
        missing = missing_packages(m, ["eslint", "@antfu/eslint-config", "prettier"])
        assert missing == ["@antfu/eslint-config", "prettier"]

    def test_duplicated_packages(self) -> None:
        m = Manifest(
            {
                "dependencies": {"next": "15", "zod": "3"},
                "devDependencies": {"zod": "3", "eslint": "9", "next": "15"},
            }
        )
        assert duplicated_packages(m) == ["next", "zod"]
