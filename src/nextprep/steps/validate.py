"""Validate that the target directory is a Next.js project."""

from __future__ import annotations

from nextprep.domain.errors import ValidationError
from nextprep.domain.manifest import duplicated_packages, has_package
from nextprep.infrastructure import manifest_store
from nextprep.services.result import StepResult, StepStatus
from nextprep.steps.base import Step, StepContext


class ValidateProjectStep(Step):
    """Require ``package.json`` with a ``next`` dependency and a ``next.config.*`` file.

    Every failure here is critical: no other step runs against a project
    that is not recognised.
    """

    name = "validate"
    description = "Check the target is a Next.js project"
    critical = True

    def run(self, ctx: StepContext) -> StepResult:
        manifest = manifest_store.load(ctx.project_root)

        has_next = has_package(manifest, "next")
        ctx.log.debug("checked next dependency", present=has_next)
        if not has_next:
            msg = "This doesn't appear to be a Next.js project: missing 'next' dependency"
            raise ValidationError(msg)

        config_files = ctx.settings.project.next_config_files
        found = next((f for f in config_files if (ctx.project_root / f).is_file()), None)
        ctx.log.debug("checked next config", found=found)
        if found is None:
            msg = "This doesn't appear to be a Next.js project: missing next.config.* file"
            raise ValidationError(msg)

        warnings: list[str] = []
        duplicates = duplicated_packages(manifest)
        if duplicates:
            warnings.append(
                "Packages listed in both dependencies and devDependencies: "
                + ", ".join(duplicates)
            )

        return self.result(
            StepStatus.SUCCESS,
            "Next.js project detected",
            warnings=warnings,
            name=manifest.name,
            next_version=manifest.dependencies.get("next")
            or manifest.dev_dependencies.get("next"),
            next_config=found,
        )
