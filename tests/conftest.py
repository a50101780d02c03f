"""Shared pytest fixtures and test helpers for nextprep tests."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from nextprep.config.settings import NextprepSettings
from nextprep.domain.errors import ExternalToolError
from nextprep.services.setup import build_context
from nextprep.steps.base import StepContext

DEFAULT_PACKAGE_JSON: dict[str, Any] = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev --turbopack",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
    },
    "dependencies": {
        "react": "^19.0.0",
        "react-dom": "^19.0.0",
        "next": "15.3.1",
    },
    "devDependencies": {
        "typescript": "^5",
        "@types/node": "^20",
        "eslint": "^9",
        "eslint-config-next": "15.3.1",
        "tailwindcss": "^4",
    },
}

DEFAULT_LAYOUT = """\
import type { Metadata } from "next";
import { Geist, Geist_Mono } from "next/font/google";
import "./globals.css";

const geistSans = Geist({
  variable: "--font-geist-sans",
  subsets: ["latin"],
});

const geistMono = Geist_Mono({
  variable: "--font-geist-mono",
  subsets: ["latin"],
});

export const metadata: Metadata = {
  title: "Create Next App",
  description: "Generated by create next app",
};

export default function RootLayout({
  children,
}: Readonly<{
  children: React.ReactNode;
}>) {
  return (
    <html lang="en">
      <body
        className={`${geistSans.variable} ${geistMono.variable} antialiased`}
      >
        {children}
      </body>
    </html>
  );
}
"""

DEFAULT_PAGE = """\
import Image from "next/image";

export default function Home() {
  return (
    <div className="grid min-h-screen items-center justify-items-center">
      <Image src="/next.svg" alt="Next.js logo" width={180} height={38} priority />
    </div>
  );
}
"""

DEFAULT_GLOBALS = """\
@import "tailwindcss";

:root {
  --background: #ffffff;
  --foreground: #171717;
}
"""

DEFAULT_ESLINT_CONFIG = """\
import { FlatCompat } from "@eslint/eslintrc";

const compat = new FlatCompat({ baseDirectory: import.meta.dirname });

export default [...compat.extends("next/core-web-vitals", "next/typescript")];
"""

SAMPLE_ASSETS = ("file.svg", "globe.svg", "next.svg", "vercel.svg", "window.svg")


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeRunner:
    """Records commands instead of spawning processes.

    Successful installs add the packages to ``package.json`` the way a
    real package manager would, so a second run sees them as present.
    """

    def __init__(
        self,
        *,
        fail_install: bool = False,
        fail_scripts: Sequence[str] = (),
    ) -> None:
        self.calls: list[list[str]] = []
        self.fail_install = fail_install
        self.fail_scripts = set(fail_scripts)

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path,
        critical: bool = True,
    ) -> None:
        self.calls.append([executable, *args])

    def install(
        self,
        package_manager: str,
        packages: Sequence[str],
        *,
        cwd: Path,
        dev: bool = True,
    ) -> None:
        action = "install" if package_manager == "npm" else "add"
        command = [package_manager, action, *(["-D"] if dev else []), *packages]
        self.calls.append(command)
        if self.fail_install:
            raise ExternalToolError(command, "exit code 1")
        path = cwd / "package.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        section = data.setdefault("devDependencies" if dev else "dependencies", {})
        for name in packages:
            section[name] = "^1.0.0"
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    def run_script(self, package_manager: str, script: str, *, cwd: Path) -> None:
        command = [package_manager, "run", script]
        self.calls.append(command)
        if script in self.fail_scripts:
            raise ExternalToolError(command, "exit code 2", critical=False)

    @property
    def installs(self) -> list[list[str]]:
        return [c for c in self.calls if c[1] in ("install", "add")]

    @property
    def scripts(self) -> list[str]:
        return [c[2] for c in self.calls if c[1] == "run"]


class ScriptedPrompter:
    """Answers questions from a fixed list (or *default*) and records them."""

    def __init__(self, answers: Sequence[bool] = (), *, default: bool = True) -> None:
        self._answers = list(answers)
        self._default = default
        self.questions: list[str] = []

    def confirm(self, question: str, *, default: bool = True) -> bool:
        self.questions.append(question)
        if self._answers:
            return self._answers.pop(0)
        return self._default


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's NEXTPREP_* environment out of the tests."""
    monkeypatch.delenv("NEXTPREP_CONFIG", raising=False)
    monkeypatch.delenv("NEXTJS_PROJECT_PATH", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A freshly scaffolded create-next-app project (src/ layout).

    This is the single source of truth for the project layout used by
    step, service, and CLI tests.
    """
    root = tmp_path / "my-app"
    (root / "src" / "app").mkdir(parents=True)
    (root / "public").mkdir()
    write_package_json(root, DEFAULT_PACKAGE_JSON)
    (root / "next.config.ts").write_text("export default {};\n", encoding="utf-8")
    (root / "eslint.config.mjs").write_text(DEFAULT_ESLINT_CONFIG, encoding="utf-8")
    (root / "src" / "app" / "layout.tsx").write_text(DEFAULT_LAYOUT, encoding="utf-8")
    (root / "src" / "app" / "page.tsx").write_text(DEFAULT_PAGE, encoding="utf-8")
    (root / "src" / "app" / "globals.css").write_text(DEFAULT_GLOBALS, encoding="utf-8")
    for name in SAMPLE_ASSETS:
        (root / "public" / name).write_text("<svg/>", encoding="utf-8")
    return root


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def step_context(project: Path, runner: FakeRunner, prompter: ScriptedPrompter) -> StepContext:
    """Step context over the default project with recording collaborators."""
    return make_context(project, runner=runner, prompter=prompter)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_package_json(root: Path, data: dict[str, Any]) -> None:
    (root / "package.json").write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def read_package_json(root: Path) -> dict[str, Any]:
    return json.loads((root / "package.json").read_text(encoding="utf-8"))


def make_context(
    root: Path,
    *,
    runner: FakeRunner | None = None,
    prompter: ScriptedPrompter | None = None,
    **settings: Any,
) -> StepContext:
    """Build a StepContext for *root* with test doubles and settings overrides."""
    return build_context(
        NextprepSettings(project_root=root, no_interact=True, **settings),
        prompter=prompter or ScriptedPrompter(),
        runner=runner or FakeRunner(),  # type: ignore[arg-type]
    )
