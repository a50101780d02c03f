"""SetupService — runs the mutation steps against a project.

Pipeline: VALIDATE → PRETTIER → ESLINT → HOME PAGE → PUBLIC CLEANUP → FONT → CONTAINER

INVARIANT: Steps run strictly in order. Only critical failures stop the
run; every other failure is recorded as a warning and the next step runs.
There is no rollback: each step is idempotent, so re-running recovers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from nextprep.domain.errors import ErrorKind, SetupError
from nextprep.infrastructure.process import ProcessRunner, detect_package_manager
from nextprep.infrastructure.prompts import Prompter, build_prompter
from nextprep.infrastructure.templates import build_template_environment
from nextprep.services.result import ServiceError, ServiceResult, StepResult, StepStatus
from nextprep.steps import Step, StepContext, build_steps

if TYPE_CHECKING:
    from nextprep.config.settings import NextprepSettings

logger = logging.getLogger(__name__)


def build_context(
    settings: NextprepSettings,
    *,
    prompter: Prompter | None = None,
    runner: ProcessRunner | None = None,
) -> StepContext:
    """Assemble the collaborators shared by every step of one run."""
    root = settings.project_root
    return StepContext(
        project_root=root,
        settings=settings,
        prompter=prompter or build_prompter(interactive=not settings.no_interact),
        runner=runner or ProcessRunner(stdout_to_stderr=settings.json_output),
        templates=build_template_environment(project_root=root),
        package_manager=detect_package_manager(root, settings.project.package_manager),
        log=structlog.get_logger("nextprep.steps"),
    )


class SetupService:
    """Runs a fixed list of steps and folds their outcomes into a ServiceResult."""

    def __init__(self, context: StepContext, steps: Sequence[Step] | None = None) -> None:
        self._ctx = context
        self._steps = list(steps) if steps is not None else build_steps()

    def run(self) -> ServiceResult:
        op = "setup"
        started = time.perf_counter()
        skipped = self._ctx.settings.skipped_steps()
        outcomes: list[StepResult] = []
        warnings: list[str] = []

        logger.debug("Working in directory: %s", self._ctx.project_root)

        for step in self._steps:
            if step.name in skipped and not step.critical:
                outcomes.append(
                    StepResult(step=step.name, status=StepStatus.SKIPPED, message="Skipped by flag")
                )
                continue

            try:
                outcome = step.run(self._ctx.for_step(step.name))
            except SetupError as exc:
                if step.critical or exc.critical:
                    return self._abort(op, step, exc.kind, exc.message, exc.detail, outcomes)
                logger.warning("Step %s failed: %s", step.name, exc.message)
                outcome = StepResult(
                    step=step.name,
                    status=StepStatus.WARNING,
                    message=exc.message,
                    warnings=[exc.message],
                )
            except OSError as exc:
                detail = {"path": str(exc.filename)} if exc.filename else {}
                return self._abort(op, step, ErrorKind.IO, str(exc), detail, outcomes)

            outcomes.append(outcome)
            warnings.extend(f"{step.name}: {w}" for w in outcome.warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data=self._data(outcomes),
            warnings=warnings,
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )

    def _abort(
        self,
        op: str,
        step: Step,
        kind: ErrorKind,
        message: str,
        detail: dict[str, Any],
        outcomes: list[StepResult],
    ) -> ServiceResult:
        logger.error("Setup failed at step %s: %s", step.name, message)
        outcomes.append(StepResult(step=step.name, status=StepStatus.FAILED, message=message))
        return ServiceResult(
            ok=False,
            op=op,
            data=self._data(outcomes),
            error=ServiceError(
                code=str(kind),
                message=message,
                detail={"step": step.name, **detail},
            ),
        )

    def _data(self, outcomes: list[StepResult]) -> dict[str, Any]:
        return {
            "project_root": str(self._ctx.project_root),
            "package_manager": self._ctx.package_manager,
            "steps": [o.model_dump(mode="json") for o in outcomes],
        }
