"""Tests for NextprepSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from nextprep.config.settings import NextprepSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = NextprepSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path.resolve()
        assert settings.json_output is False
        assert settings.no_interact is False
        assert settings.prettier.config_path is None
        assert settings.prettier.script_command == "prettier . --write"
        assert settings.eslint.script_name == "lint:fix"
        assert settings.skipped_steps() == frozenset()

    def test_frozen(self, tmp_path: Path) -> None:
        settings = NextprepSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "nextprep.toml").write_text(
            '[project]\npackage_manager = "pnpm"\n[eslint]\nrun_script = false\n'
        )
        settings = NextprepSettings.from_cli(project_root=tmp_path)
        assert settings.project.package_manager == "pnpm"
        assert settings.eslint.run_script is False
        assert settings.eslint.script_name == "lint:fix"  # default preserved

    def test_discovered_from_parent(self, tmp_path: Path) -> None:
        (tmp_path / "nextprep.toml").write_text("[skip]\nfont = true\n")
        app = tmp_path / "apps" / "web"
        app.mkdir(parents=True)
        settings = NextprepSettings.from_cli(project_root=app)
        assert settings.config_path == tmp_path.resolve() / "nextprep.toml"
        assert settings.skipped_steps() == {"font"}

    def test_discovered_from_nextprep_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".nextprep").mkdir()
        (tmp_path / ".nextprep" / "config.toml").write_text("[skip]\neslint = true\n")
        settings = NextprepSettings.from_cli(project_root=tmp_path)
        assert settings.skipped_steps() == {"eslint"}

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[home_page]\nphrases = ["Hi"]\n')
        settings = NextprepSettings.from_cli(project_root=tmp_path, config_path=str(custom))
        assert settings.home_page.phrases == ["Hi"]
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "nextprep.toml").write_text("[skip\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            NextprepSettings.from_cli(project_root=tmp_path)


class TestCliOverrides:
    def test_flags(self, tmp_path: Path) -> None:
        settings = NextprepSettings.from_cli(
            project_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_skip_flags_merge_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "nextprep.toml").write_text("[skip]\nfont = true\n")
        settings = NextprepSettings.from_cli(
            project_root=tmp_path, skip=["home-page", "container-utility"]
        )
        assert settings.skipped_steps() == {"font", "home-page", "container-utility"}

    def test_prettier_config_resolved(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        settings = NextprepSettings.from_cli(project_root=tmp_path, prettier_config="conf.json")
        assert settings.prettier.config_path == tmp_path.resolve() / "conf.json"
        assert settings.prettier.script_name == "format"

    def test_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEXTPREP_PROJECT__PACKAGE_MANAGER", "bun")
        settings = NextprepSettings.from_cli(project_root=tmp_path)
        assert settings.project.package_manager == "bun"
