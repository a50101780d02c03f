"""Install and configure Prettier.

Pipeline: CHECK CONFIG → INSTALL → COPY CONFIG → EDITOR SETTINGS → SCRIPT → FORMAT
"""

from __future__ import annotations

from nextprep.domain.errors import ValidationError
from nextprep.domain.merge import MergeResult
from nextprep.infrastructure.filesystem import write_bytes_exclusive
from nextprep.infrastructure.templates import read_resource
from nextprep.services.result import StepResult
from nextprep.steps.base import EDIT_ERRORS, Step, StepContext, outcome_status

_BUNDLED_CONFIG = "prettierrc.json"
_BUNDLED_EDITOR_SETTINGS = "vscode-settings.json"


class PrettierStep(Step):
    name = "prettier"
    description = "Install Prettier, add its config and format script"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.settings.prettier
        warnings: list[str] = []
        files_created: list[str] = []

        # Resolve the config source before touching the project.
        config_source = self._config_source(ctx)

        installed = self.install_missing(ctx, cfg.packages)

        copies = [(cfg.config_target, config_source)]
        if cfg.editor_settings:
            copies.append((cfg.editor_settings_target, read_resource(_BUNDLED_EDITOR_SETTINGS)))
        for target, content in copies:
            try:
                created = write_bytes_exclusive(ctx.project_root / target, content)
            except EDIT_ERRORS as exc:
                warnings.append(self.edit_warning(ctx, exc, target))
                continue
            if created:
                files_created.append(target)
                ctx.log.info("file created", path=target)
            else:
                ctx.log.info("file already exists", path=target)

        merge = self.merge_script(ctx, cfg.script_name, cfg.script_command, warnings)

        formatted = False
        if cfg.run_script:
            formatted = self.run_script(ctx, cfg.script_name, warnings)

        changed = bool(installed or files_created or merge is MergeResult.ADDED)
        return self.result(
            outcome_status(changed=changed, warnings=warnings),
            "Prettier configured" if changed else "Prettier already configured",
            warnings=warnings,
            installed=installed,
            files_created=files_created,
            script=str(merge),
            formatted=formatted,
        )

    def _config_source(self, ctx: StepContext) -> bytes:
        """Bytes of the custom config if one is set, else the bundled config.

        Raises:
            ValidationError: The custom config path is not an existing file.
        """
        custom = ctx.settings.prettier.config_path
        if custom is None:
            return read_resource(_BUNDLED_CONFIG)

        path = custom if custom.is_absolute() else ctx.project_root / custom
        if not path.is_file():
            msg = f"Custom Prettier config not found: {path}"
            raise ValidationError(msg, detail={"path": str(path)})
        ctx.log.debug("using custom prettier config", path=str(path))
        return path.read_bytes()
