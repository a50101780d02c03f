"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, nextprep.toml only contains
overrides. A project needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- nextprep.toml sections ---


class SkipConfig(BaseModel):
    """[skip] section — steps to leave out of the run."""

    model_config = {"frozen": True}

    prettier: bool = False
    eslint: bool = False
    home_page: bool = False
    public_cleanup: bool = False
    font: bool = False
    container_utility: bool = False

    def names(self) -> frozenset[str]:
        """Skipped step names in CLI spelling (``home_page`` -> ``home-page``)."""
        return frozenset(
            key.replace("_", "-") for key, value in self.model_dump().items() if value
        )


class ProjectConfig(BaseModel):
    """[project] section."""

    model_config = {"frozen": True}

    package_manager: str | None = None
    next_config_files: list[str] = Field(
        default_factory=lambda: [
            "next.config.js",
            "next.config.mjs",
            "next.config.ts",
            "next.config.cjs",
        ]
    )


class PrettierConfig(BaseModel):
    """[prettier] section."""

    model_config = {"frozen": True}

    config_path: Path | None = None
    packages: list[str] = Field(default_factory=lambda: ["prettier"])
    config_target: str = ".prettierrc"
    script_name: str = "format"
    script_command: str = "prettier . --write"
    run_script: bool = True
    editor_settings: bool = True
    editor_settings_target: str = ".vscode/settings.json"


class EslintConfig(BaseModel):
    """[eslint] section."""

    model_config = {"frozen": True}

    packages: list[str] = Field(
        default_factory=lambda: ["eslint", "@antfu/eslint-config", "@next/eslint-plugin-next"]
    )
    default_extension: str = "mjs"
    other_extensions: list[str] = Field(
        default_factory=lambda: ["js", "cjs", "ts", "mts", "cts"]
    )
    script_name: str = "lint:fix"
    script_command: str = "eslint --fix"
    run_script: bool = True


class HomePageConfig(BaseModel):
    """[home_page] section."""

    model_config = {"frozen": True}

    candidates: list[str] = Field(default_factory=lambda: ["src/app/page.tsx", "app/page.tsx"])
    phrases: list[str] = Field(
        default_factory=lambda: [
            "Hello, handsome!",
            "This project is going to be a killer!",
            "Let's ship something great!",
            "Ready to build something legendary?",
            "Time to create some magic! ✨",
        ]
    )


class PublicCleanupConfig(BaseModel):
    """[public_cleanup] section."""

    model_config = {"frozen": True}

    directory: str = "public"
    files: list[str] = Field(
        default_factory=lambda: ["file.svg", "globe.svg", "next.svg", "vercel.svg", "window.svg"]
    )


class FontConfig(BaseModel):
    """[font] section."""

    model_config = {"frozen": True}

    package: str = "geist"
    candidates: list[str] = Field(
        default_factory=lambda: ["src/app/layout.tsx", "app/layout.tsx"]
    )


class ContainerUtilityConfig(BaseModel):
    """[container_utility] section."""

    model_config = {"frozen": True}

    candidates: list[str] = Field(
        default_factory=lambda: ["src/app/globals.css", "app/globals.css"]
    )
    classes: str = "max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 h-full"
