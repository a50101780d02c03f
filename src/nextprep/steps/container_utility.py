"""Append a ``container`` Tailwind utility to ``globals.css``.

The utility provides consistent max-width, centering, and responsive padding.
"""

from __future__ import annotations

from nextprep.infrastructure.filesystem import find_file_path, read_text, write_text
from nextprep.services.result import StepResult, StepStatus
from nextprep.steps.base import EDIT_ERRORS, Step, StepContext

_TEMPLATE = "container-utility.css.j2"
_MARKER = "@utility container"


class ContainerUtilityStep(Step):
    name = "container-utility"
    description = "Add the container utility to globals.css"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.settings.container_utility
        stylesheet = find_file_path(ctx.project_root, cfg.candidates, description="globals.css")
        if stylesheet is None:
            msg = f"Could not find globals.css ({', '.join(cfg.candidates)})"
            return self.result(StepStatus.WARNING, msg, warnings=[msg])

        path = stylesheet.relative_to(ctx.project_root).as_posix()
        try:
            existing = read_text(stylesheet)
            if _MARKER in existing:
                ctx.log.info("container utility already exists", path=path)
                return self.result(
                    StepStatus.UNCHANGED, "Container utility already exists", path=path
                )
            snippet = ctx.templates.get_template(_TEMPLATE).render(classes=cfg.classes)
            write_text(stylesheet, existing.rstrip() + "\n" + snippet)
        except EDIT_ERRORS as exc:
            return self.manual_fallback(ctx, exc, "globals.css")

        ctx.log.info("container utility added", path=path)
        return self.result(StepStatus.SUCCESS, "Container utility added", path=path)
