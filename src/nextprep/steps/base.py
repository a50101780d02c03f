"""Step — uniform contract for mutation steps.

Every step receives a :class:`StepContext` and returns a
:class:`~nextprep.services.result.StepResult`. Steps catch their own
non-critical failures and report them as warnings; anything they raise
is classified by the orchestrator via ``SetupError.kind``/``critical``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from nextprep.config.logging import get_step_logger
from nextprep.domain.errors import ExternalToolError, FilesystemError, ParseError, SetupError
from nextprep.domain.manifest import Manifest, missing_packages
from nextprep.domain.merge import MergeResult, merge_field
from nextprep.infrastructure import manifest_store
from nextprep.services.result import StepResult, StepStatus

# Failures reading or writing a project source file. Non-critical steps
# turn these into warnings instead of aborting the run.
EDIT_ERRORS = (FilesystemError, ParseError)

if TYPE_CHECKING:
    import structlog
    from jinja2 import Environment

    from nextprep.config.settings import NextprepSettings
    from nextprep.infrastructure.process import ProcessRunner
    from nextprep.infrastructure.prompts import Prompter


@dataclass(frozen=True)
class StepContext:
    """Collaborators and options shared by all steps in a run."""

    project_root: Path
    settings: NextprepSettings
    prompter: Prompter
    runner: ProcessRunner
    templates: Environment
    package_manager: str
    log: structlog.stdlib.BoundLogger

    def for_step(self, name: str) -> StepContext:
        """Copy of this context whose logger is tagged with *name*."""
        return dataclasses.replace(self, log=get_step_logger(name))


class Step:
    """Base class for mutation steps.

    Subclasses set ``name``/``description`` and implement :meth:`run`.
    ``critical`` steps abort the run on any failure.

    Usage::

        class FooStep(Step):
            name = "foo"
            description = "Do foo"

            def run(self, ctx: StepContext) -> StepResult:
                ...
                return self.result(StepStatus.SUCCESS, "Foo done")
    """

    name: ClassVar[str]
    description: ClassVar[str]
    critical: ClassVar[bool] = False

    def run(self, ctx: StepContext) -> StepResult:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def result(
        self,
        status: StepStatus,
        message: str,
        *,
        warnings: list[str] | None = None,
        **data: Any,
    ) -> StepResult:
        return StepResult(
            step=self.name,
            status=status,
            message=message,
            data=data,
            warnings=warnings or [],
        )

    def declined(self) -> StepResult:
        return self.result(StepStatus.SKIPPED, "Declined by user")

    def edit_warning(self, ctx: StepContext, exc: SetupError, what: str) -> str:
        """Log a failed file edit and return the warning asking for a manual update."""
        ctx.log.warning("edit failed", target=what, kind=str(exc.kind), error=exc.message)
        return f"Failed to update {what}. Please update it manually: {exc.message}"

    def manual_fallback(self, ctx: StepContext, exc: SetupError, what: str) -> StepResult:
        """End the step with a warning after a failed file edit."""
        msg = self.edit_warning(ctx, exc, what)
        return self.result(StepStatus.WARNING, msg, warnings=[msg])

    def install_missing(
        self,
        ctx: StepContext,
        packages: list[str],
        *,
        dev: bool = True,
    ) -> list[str]:
        """Install the subset of *packages* absent from ``package.json``.

        Returns the packages that were installed (empty if none needed).
        Install failures propagate as critical ``ExternalToolError``.
        """
        missing = missing_packages(manifest_store.load(ctx.project_root), packages)
        if not missing:
            ctx.log.debug("packages already present", packages=packages)
            return []
        ctx.log.info("installing packages", packages=missing, dev=dev)
        ctx.runner.install(ctx.package_manager, missing, cwd=ctx.project_root, dev=dev)
        return missing

    def merge_script(
        self,
        ctx: StepContext,
        script: str,
        command: str,
        warnings: list[str],
    ) -> MergeResult:
        """Merge a named script into ``package.json``; divergence becomes a warning."""
        outcome = MergeResult.ALREADY_CORRECT

        def add_script(manifest: Manifest) -> Manifest:
            nonlocal outcome
            manifest, outcome = merge_field(manifest, "scripts", script, command)
            return manifest

        manifest_store.update(ctx.project_root, add_script)
        if outcome is MergeResult.ADDED:
            ctx.log.debug("script added", script=script)
        elif outcome is MergeResult.SKIPPED_DIVERGENT:
            warnings.append(
                f"Script '{script}' already exists with a different command; left unchanged"
            )
            ctx.log.warning("divergent script left unchanged", script=script)
        return outcome

    def run_script(self, ctx: StepContext, script: str, warnings: list[str]) -> bool:
        """Run a ``package.json`` script; failure degrades to a warning."""
        try:
            ctx.runner.run_script(ctx.package_manager, script, cwd=ctx.project_root)
        except ExternalToolError as exc:
            if exc.critical:
                raise
            warnings.append(f"'{script}' script failed: {exc.cause}")
            ctx.log.warning("script failed", script=script, cause=exc.cause)
            return False
        return True


def outcome_status(*, changed: bool, warnings: list[str]) -> StepStatus:
    """WARNING if anything went wrong, else SUCCESS/UNCHANGED by whether files changed."""
    if warnings:
        return StepStatus.WARNING
    return StepStatus.SUCCESS if changed else StepStatus.UNCHANGED
