"""Install and configure ESLint with the antfu flat config.

Next.js scaffolds ``eslint.config.mjs`` by default, so that file is
preferred; other extensions are checked next and ``mjs`` is used when
no config exists yet.
"""

from __future__ import annotations

from pathlib import Path

from nextprep.domain.merge import MergeResult
from nextprep.infrastructure.filesystem import find_file_path, read_text, write_text
from nextprep.infrastructure.templates import read_resource
from nextprep.services.result import StepResult
from nextprep.steps.base import EDIT_ERRORS, Step, StepContext, outcome_status

_BUNDLED_CONFIG = "eslint.config.mjs"


class EslintStep(Step):
    name = "eslint"
    description = "Install ESLint, write its flat config and lint:fix script"

    def run(self, ctx: StepContext) -> StepResult:
        if not ctx.prompter.confirm("Setup ESLint?"):
            ctx.log.info("skipping eslint setup")
            return self.declined()

        cfg = ctx.settings.eslint
        warnings: list[str] = []

        installed = self.install_missing(ctx, cfg.packages)

        config_path = self._config_path(ctx)
        config_name = config_path.relative_to(ctx.project_root).as_posix()
        bundled = read_resource(_BUNDLED_CONFIG).decode("utf-8")
        config_written = False
        try:
            if not config_path.is_file() or read_text(config_path) != bundled:
                write_text(config_path, bundled)
                config_written = True
                ctx.log.info("eslint config written", path=config_name)
        except EDIT_ERRORS as exc:
            warnings.append(self.edit_warning(ctx, exc, config_name))

        merge = self.merge_script(ctx, cfg.script_name, cfg.script_command, warnings)

        linted = False
        if cfg.run_script:
            linted = self.run_script(ctx, cfg.script_name, warnings)

        changed = bool(installed or config_written or merge is MergeResult.ADDED)
        return self.result(
            outcome_status(changed=changed, warnings=warnings),
            "ESLint configured" if changed else "ESLint already configured",
            warnings=warnings,
            installed=installed,
            config=config_name,
            config_written=config_written,
            script=str(merge),
            linted=linted,
        )

    def _config_path(self, ctx: StepContext) -> Path:
        cfg = ctx.settings.eslint
        extensions = [cfg.default_extension, *cfg.other_extensions]
        existing = find_file_path(
            ctx.project_root,
            [f"eslint.config.{ext}" for ext in extensions],
            description="eslint config",
        )
        return existing or ctx.project_root / f"eslint.config.{cfg.default_extension}"
