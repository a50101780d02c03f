"""Typed error taxonomy for setup operations.

Every error raised by the tool carries an :class:`ErrorKind` tag set at
the point of raise. The orchestrator decides whether to abort or degrade
by checking ``error.kind`` and ``error.critical``, never by inspecting
the exception's shape.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class ErrorKind(StrEnum):
    """Classification tag attached to every :class:`SetupError`."""

    NOT_FOUND = "NOT_FOUND"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    EXTERNAL_TOOL = "EXTERNAL_TOOL"
    IO = "IO"


class SetupError(Exception):
    """Base class for all errors raised by nextprep.

    Attributes:
        kind: Error classification.
        critical: Whether the error aborts the remaining run.
        detail: Extra structured context for ``--verbose`` / ``--json``.
    """

    kind: ErrorKind = ErrorKind.IO
    default_critical: bool = True

    def __init__(
        self,
        message: str,
        *,
        critical: bool | None = None,
        detail: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.critical = self.default_critical if critical is None else critical
        self.detail = detail or {}


class NotFoundError(SetupError):
    """A required file is missing."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: Path, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"File not found: {path}", detail={"path": str(path)})


class ParseError(SetupError):
    """A file exists but does not contain valid structured data."""

    kind = ErrorKind.PARSE

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to parse {path}: {reason}", detail={"path": str(path)})


class ValidationError(SetupError):
    """The project does not satisfy a prerequisite (dependency, config file, option)."""

    kind = ErrorKind.VALIDATION


class ExternalToolError(SetupError):
    """A spawned process exited non-zero or could not be started."""

    kind = ErrorKind.EXTERNAL_TOOL

    def __init__(self, command: list[str], cause: str, *, critical: bool = True) -> None:
        self.command = command
        self.cause = cause
        super().__init__(
            f"Command failed: {' '.join(command)} ({cause})",
            critical=critical,
            detail={"command": " ".join(command), "cause": cause},
        )


class FilesystemError(SetupError):
    """Unexpected filesystem failure (permissions, not-a-directory, ...)."""

    kind = ErrorKind.IO

    def __init__(self, path: Path, action: str, cause: OSError) -> None:
        self.path = path
        super().__init__(
            f"Failed to {action} {path}: {cause.strerror or cause}",
            detail={"path": str(path), "action": action},
        )
