"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``NEXTPREP_*`` prefix
  3. TOML file    — ``nextprep.toml`` or ``.nextprep/config.toml``, found by walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`nextprep.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from nextprep.config.discovery import find_config
from nextprep.config.models import (
    ContainerUtilityConfig,
    EslintConfig,
    FontConfig,
    HomePageConfig,
    PrettierConfig,
    ProjectConfig,
    PublicCleanupConfig,
    SkipConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``nextprep.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class NextprepSettings(BaseSettings):
    """Unified settings for a nextprep run.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        project_root: Directory of the Next.js project being set up.
        config_path: The ``nextprep.toml`` in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NEXTPREP_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    skip: SkipConfig = Field(default_factory=SkipConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    prettier: PrettierConfig = Field(default_factory=PrettierConfig)
    eslint: EslintConfig = Field(default_factory=EslintConfig)
    home_page: HomePageConfig = Field(default_factory=HomePageConfig)
    public_cleanup: PublicCleanupConfig = Field(default_factory=PublicCleanupConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    container_utility: ContainerUtilityConfig = Field(default_factory=ContainerUtilityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        project_root: Path | None = None,
        config_path: str | None = None,
        skip: list[str] | None = None,
        prettier_config: str | None = None,
        **cli_flags: Any,
    ) -> NextprepSettings:
        """Construct settings from a CLI invocation.

        Discovers ``nextprep.toml`` by walking up from *project_root* (or
        uses an explicit *config_path*). Skip flags and the Prettier config
        override are merged into their TOML sections so unset flags never
        mask values from the file.
        """
        root = (project_root or Path.cwd()).resolve()

        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        overrides: dict[str, Any] = {}
        if skip:
            overrides["skip"] = {name.replace("-", "_"): True for name in skip}
        if prettier_config:
            overrides["prettier"] = {"config_path": Path(prettier_config).resolve()}

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=root,
                config_path=toml_path,
                **overrides,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def skipped_steps(self) -> frozenset[str]:
        return self.skip.names()
