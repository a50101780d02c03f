"""Replace the create-next-app landing page with a minimal one."""

from __future__ import annotations

import random

from nextprep.infrastructure.filesystem import find_file_path, read_text, write_text
from nextprep.services.result import StepResult, StepStatus
from nextprep.steps.base import EDIT_ERRORS, Step, StepContext

_TEMPLATE = "page.tsx.j2"

# Present in every page this step writes; used to detect a previous run.
_MARKER = "export default function HomePage()"


class HomePageStep(Step):
    name = "home-page"
    description = "Rewrite the default home page"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.settings.home_page
        page = find_file_path(ctx.project_root, cfg.candidates, description="home page")
        if page is None:
            msg = f"Could not find home page ({', '.join(cfg.candidates)})"
            ctx.log.warning("home page not found", candidates=cfg.candidates)
            return self.result(StepStatus.WARNING, msg, warnings=[msg])

        path = page.relative_to(ctx.project_root).as_posix()
        try:
            current = read_text(page)
        except EDIT_ERRORS as exc:
            return self.manual_fallback(ctx, exc, "home page")
        if _MARKER in current:
            return self.result(StepStatus.UNCHANGED, "Home page already updated", path=path)

        if not ctx.prompter.confirm(f"Replace {path} with a minimal home page?"):
            return self.declined()

        phrase = random.choice(cfg.phrases)
        try:
            write_text(page, ctx.templates.get_template(_TEMPLATE).render(phrase=phrase))
        except EDIT_ERRORS as exc:
            return self.manual_fallback(ctx, exc, "home page")
        ctx.log.info("home page updated", path=path)
        return self.result(StepStatus.SUCCESS, "Home page updated", path=path, phrase=phrase)
