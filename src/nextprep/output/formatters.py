"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich table of step outcomes)
or machines (--json). ``--quiet`` reduces output to a single status line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.table import Table
from rich.text import Text

from nextprep.output.console import create_console, get_output, icon_for_status, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from nextprep.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render the status line plus a table of step outcomes."""
    console = create_console()

    if result.ok:
        console.print(Text("OK", style="np.ok"), Text(f"  {result.op}", style="np.op"))
    else:
        err = result.error
        msg = err.message if err else "Unknown error"
        console.print(
            Text("ERROR", style="np.error"), Text(f"  {result.op}", style="np.op"), " — ", msg
        )

    project_root = result.data.get("project_root")
    if project_root:
        _field(console, "project", project_root)
    if verbose and result.data.get("package_manager"):
        _field(console, "package_manager", result.data["package_manager"])

    steps: list[dict[str, Any]] = result.data.get("steps", [])
    if steps:
        console.print(_step_table(steps, verbose=verbose))

    if verbose:
        _render_detail(console, result)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    console.print(Text(f"  {key}: ", style="np.key"), Text(str(value), style="np.path"))


def _step_table(steps: list[dict[str, Any]], *, verbose: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("Step", style="np.step", no_wrap=True)
    table.add_column("Status")
    table.add_column("Message")
    if verbose:
        table.add_column("Data", style="dim")

    for step in steps:
        status = str(step.get("status", ""))
        style = style_for_status(status)
        row = [
            Text(icon_for_status(status), style=style),
            str(step.get("step", "")),
            Text(status, style=style),
            str(step.get("message", "")),
        ]
        if verbose:
            data = step.get("data") or {}
            row.append(", ".join(f"{k}={v}" for k, v in data.items()))
        table.add_row(*row)
    return table


def _render_detail(console: Console, result: ServiceResult) -> None:
    if result.error and result.error.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in result.error.detail.items():
            console.print(f"    {k}: {v}")
    if result.meta:
        console.print(Text("  meta:", style="dim"))
        for k, v in result.meta.items():
            console.print(f"    {k}: {v}")
