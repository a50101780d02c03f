"""Package-manager detection and external process execution.

Child processes inherit the terminal so install and formatter output
stays visible. When stdout is reserved for machine-readable output
(``--json``), child stdout is forwarded to stderr instead.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from nextprep.domain.errors import ExternalToolError

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_MANAGER = "npm"

# Lockfile → package manager, checked in order.
LOCKFILES: tuple[tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)

_STDERR_FD = 2


def detect_package_manager(project_root: Path, override: str | None = None) -> str:
    """Return the package manager executable for *project_root*.

    An explicit *override* wins; otherwise the first lockfile found
    decides, falling back to npm.
    """
    if override:
        return override
    for lockfile, manager in LOCKFILES:
        if (project_root / lockfile).is_file():
            logger.debug("Detected %s from %s", manager, lockfile)
            return manager
    return DEFAULT_PACKAGE_MANAGER


def install_args(package_manager: str, packages: Sequence[str], *, dev: bool) -> list[str]:
    """Build the argument list for installing *packages*.

    npm uses ``install``; pnpm, yarn and bun use ``add``.
    """
    action = "install" if package_manager == "npm" else "add"
    args = [action]
    if dev:
        args.append("-D")
    args.extend(packages)
    return args


class ProcessRunner:
    """Runs external commands in the project root."""

    def __init__(self, *, stdout_to_stderr: bool = False) -> None:
        self._stdout_to_stderr = stdout_to_stderr

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path,
        critical: bool = True,
    ) -> None:
        """Run ``executable *args`` in *cwd*, blocking until it exits.

        Raises:
            ExternalToolError: Non-zero exit or the executable is missing.
        """
        command = [executable, *args]
        logger.debug("Running %s in %s", " ".join(command), cwd)
        try:
            subprocess.run(
                command,
                cwd=cwd,
                check=True,
                stdout=_STDERR_FD if self._stdout_to_stderr else None,
            )
        except subprocess.CalledProcessError as exc:
            raise ExternalToolError(
                command, f"exit code {exc.returncode}", critical=critical
            ) from exc
        except OSError as exc:
            raise ExternalToolError(command, str(exc), critical=critical) from exc

    def install(
        self,
        package_manager: str,
        packages: Sequence[str],
        *,
        cwd: Path,
        dev: bool = True,
    ) -> None:
        """Install *packages*; failures are critical."""
        self.run(package_manager, install_args(package_manager, packages, dev=dev), cwd=cwd)

    def run_script(self, package_manager: str, script: str, *, cwd: Path) -> None:
        """Run a ``package.json`` script; failures are non-critical."""
        self.run(package_manager, ["run", script], cwd=cwd, critical=False)
