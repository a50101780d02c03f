"""Remove the create-next-app sample assets from ``public/``."""

from __future__ import annotations

from nextprep.domain.errors import FilesystemError
from nextprep.infrastructure.filesystem import try_delete_file
from nextprep.services.result import StepResult, StepStatus
from nextprep.steps.base import Step, StepContext, outcome_status


class PublicCleanupStep(Step):
    name = "public-cleanup"
    description = "Delete default sample assets from public/"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.settings.public_cleanup
        public_dir = ctx.project_root / cfg.directory
        present = [name for name in cfg.files if (public_dir / name).is_file()]
        if not present:
            return self.result(StepStatus.UNCHANGED, "No sample assets to remove", removed=[])

        if not ctx.prompter.confirm(f"Delete {len(present)} sample file(s) from {cfg.directory}/?"):
            return self.declined()

        removed: list[str] = []
        warnings: list[str] = []
        for name in present:
            try:
                if try_delete_file(public_dir / name):
                    removed.append(name)
            except FilesystemError as exc:
                warnings.append(f"Could not delete {cfg.directory}/{name}: {exc.message}")
                ctx.log.warning("delete failed", file=name, error=exc.message)
        ctx.log.info("sample assets removed", files=removed)
        return self.result(
            outcome_status(changed=bool(removed), warnings=warnings),
            f"Removed {len(removed)} sample asset(s)",
            warnings=warnings,
            removed=[f"{cfg.directory}/{name}" for name in removed],
        )
