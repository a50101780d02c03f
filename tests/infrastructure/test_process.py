"""Tests for package-manager detection and ProcessRunner."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from nextprep.domain.errors import ExternalToolError
from nextprep.infrastructure.process import ProcessRunner, detect_package_manager, install_args


class TestDetectPackageManager:
    @pytest.mark.parametrize(
        ("lockfile", "expected"),
        [
            ("bun.lockb", "bun"),
            ("bun.lock", "bun"),
            ("pnpm-lock.yaml", "pnpm"),
            ("yarn.lock", "yarn"),
            ("package-lock.json", "npm"),
        ],
    )
    def test_lockfiles(self, tmp_path: Path, lockfile: str, expected: str) -> None:
        (tmp_path / lockfile).write_text("", encoding="utf-8")
        assert detect_package_manager(tmp_path) == expected

    def test_default_is_npm(self, tmp_path: Path) -> None:
        assert detect_package_manager(tmp_path) == "npm"

    def test_override_wins(self, tmp_path: Path) -> None:
        (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
        assert detect_package_manager(tmp_path, "pnpm") == "pnpm"


class TestInstallArgs:
    def test_npm_uses_install(self) -> None:
        assert install_args("npm", ["prettier"], dev=True) == ["install", "-D", "prettier"]

    @pytest.mark.parametrize("manager", ["pnpm", "yarn", "bun"])
    def test_others_use_add(self, manager: str) -> None:
        assert install_args(manager, ["a", "b"], dev=True) == ["add", "-D", "a", "b"]

    def test_runtime_dependency(self) -> None:
        assert install_args("npm", ["geist"], dev=False) == ["install", "geist"]


class TestProcessRunner:
    def test_runs_in_project_root(self, tmp_path: Path) -> None:
        with patch("nextprep.infrastructure.process.subprocess.run") as run:
            ProcessRunner().install("pnpm", ["prettier"], cwd=tmp_path)
        run.assert_called_once_with(
            ["pnpm", "add", "-D", "prettier"], cwd=tmp_path, check=True, stdout=None
        )

    def test_stdout_forwarded_to_stderr(self, tmp_path: Path) -> None:
        with patch("nextprep.infrastructure.process.subprocess.run") as run:
            ProcessRunner(stdout_to_stderr=True).run_script("npm", "format", cwd=tmp_path)
        assert run.call_args.kwargs["stdout"] == 2

    def test_install_failure_is_critical(self, tmp_path: Path) -> None:
        failure = subprocess.CalledProcessError(1, ["npm"])
        with patch("nextprep.infrastructure.process.subprocess.run", side_effect=failure):
            with pytest.raises(ExternalToolError) as exc_info:
                ProcessRunner().install("npm", ["prettier"], cwd=tmp_path)
        assert exc_info.value.critical is True
        assert exc_info.value.cause == "exit code 1"
        assert exc_info.value.command == ["npm", "install", "-D", "prettier"]

    def test_script_failure_is_not_critical(self, tmp_path: Path) -> None:
        failure = subprocess.CalledProcessError(2, ["npm"])
        with patch("nextprep.infrastructure.process.subprocess.run", side_effect=failure):
            with pytest.raises(ExternalToolError) as exc_info:
                ProcessRunner().run_script("npm", "format", cwd=tmp_path)
        assert exc_info.value.critical is False

    def test_missing_executable(self, tmp_path: Path) -> None:
        with pytest.raises(ExternalToolError, match="definitely-not-a-package-manager"):
            ProcessRunner().run("definitely-not-a-package-manager", ["install"], cwd=tmp_path)
