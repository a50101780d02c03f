"""Mutation steps applied to a Next.js project.

Provides build_steps(), the fixed run order used by the orchestrator.
"""

from __future__ import annotations

from nextprep.steps.base import Step, StepContext
from nextprep.steps.container_utility import ContainerUtilityStep
from nextprep.steps.eslint import EslintStep
from nextprep.steps.font import FontStep
from nextprep.steps.home_page import HomePageStep
from nextprep.steps.prettier import PrettierStep
from nextprep.steps.public_cleanup import PublicCleanupStep
from nextprep.steps.validate import ValidateProjectStep

__all__ = ["Step", "StepContext", "build_steps", "skippable_steps"]


def build_steps() -> list[Step]:
    """Return the step list in run order. Validation always comes first."""
    return [
        ValidateProjectStep(),
        PrettierStep(),
        EslintStep(),
        HomePageStep(),
        PublicCleanupStep(),
        FontStep(),
        ContainerUtilityStep(),
    ]


def skippable_steps() -> list[Step]:
    """Steps the user may turn off with a skip flag or the [skip] config table."""
    return [step for step in build_steps() if not step.critical]
