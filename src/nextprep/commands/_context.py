"""AppContext — shared state for one CLI invocation.

Created once by the root command. Configures logging, builds the step
context, and centralizes result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nextprep.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nextprep.config.settings import NextprepSettings
    from nextprep.services.result import ServiceResult
    from nextprep.steps.base import StepContext


class AppContext:
    """Process-wide context: settings plus the collaborators built from them."""

    def __init__(self, settings: NextprepSettings) -> None:
        self.settings = settings

        from nextprep.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

    def step_context(self) -> StepContext:
        from nextprep.services.setup import build_context

        return build_context(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
