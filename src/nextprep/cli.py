"""Root CLI command for nextprep with global flags and step skip flags."""

from __future__ import annotations

from pathlib import Path

import click

from nextprep import __version__
from nextprep.commands._base import NextprepCommand
from nextprep.commands._context import AppContext
from nextprep.config.settings import NextprepSettings
from nextprep.steps import Step, skippable_steps

_EXAMPLES = """\
  nextprep
  nextprep ./my-app
  nextprep --no-interact --skip-font --skip-public-cleanup
  nextprep --prettier-config ~/dotfiles/prettierrc.json
  nextprep --json --no-interact . > setup-report.json"""


def _skip_dest(step: Step) -> str:
    return "skip_" + step.name.replace("-", "_")


def _skip_options(func):
    """Add one --skip-<step> flag per skippable step, in run order."""
    for step in reversed(skippable_steps()):
        func = click.option(
            f"--skip-{step.name}",
            _skip_dest(step),
            is_flag=True,
            help=f"Skip: {step.description}.",
        )(func)
    return func


@click.command("nextprep", cls=NextprepCommand, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="nextprep")
@click.argument("path", required=False, default=".", envvar="NEXTJS_PROJECT_PATH")
@_skip_options
@click.option(
    "--prettier-config",
    default=None,
    help="Custom Prettier config to copy instead of the bundled one.",
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--no-interact",
    "--yes",
    "-y",
    "no_interact",
    is_flag=True,
    help="Non-interactive mode (answer yes to prompts).",
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
def cli(
    path: str,
    prettier_config: str | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    **skip_flags: bool,
) -> None:
    """nextprep — opinionated setup for a freshly created Next.js project.

    Installs and configures Prettier and ESLint, rewrites the home page,
    cleans sample assets, swaps Geist fonts, and adds a container utility.
    Every step is idempotent; re-run safely after a failure.
    """
    settings = NextprepSettings.from_cli(
        project_root=Path(path),
        config_path=config_path,
        skip=[step.name for step in skippable_steps() if skip_flags[_skip_dest(step)]],
        prettier_config=prettier_config,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    app = AppContext(settings)

    from nextprep.services.setup import SetupService

    app.emit(SetupService(app.step_context()).run())
