"""Rich Console factory and theme for nextprep output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NEXTPREP_THEME = Theme(
    {
        "np.ok": "bold green",
        "np.error": "bold red",
        "np.warning": "bold yellow",
        "np.op": "bold cyan",
        "np.key": "dim",
        "np.path": "dim",
        "np.step": "bold",
        "np.status.success": "green",
        "np.status.unchanged": "dim",
        "np.status.skipped": "blue",
        "np.status.warning": "yellow",
        "np.status.failed": "red",
    }
)

_STATUS_ICONS: dict[str, str] = {
    "success": "✔",
    "unchanged": "·",
    "skipped": "↷",
    "warning": "!",
    "failed": "✘",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=NEXTPREP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a step status."""
    return f"np.status.{status}" if status in _STATUS_ICONS else ""


def icon_for_status(status: str) -> str:
    return _STATUS_ICONS.get(status, "?")
