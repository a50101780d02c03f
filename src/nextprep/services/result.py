"""ServiceResult, ServiceError, and StepResult — the result contract.

INVARIANT: Every mutation step returns a StepResult; the orchestrator
returns a ServiceResult. The CLI consumes only these types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class StepStatus(StrEnum):
    """Outcome classification of a single mutation step."""

    SUCCESS = "success"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    WARNING = "warning"
    FAILED = "failed"


class StepResult(BaseModel):
    """Outcome of one mutation step.

    Attributes:
        step: Step name (e.g. ``"prettier"``).
        status: Outcome classification.
        message: One-line human summary.
        data: Step-specific payload (files written, merge outcomes, ...).
        warnings: Non-fatal issues encountered while running the step.
    """

    model_config = {"frozen": True}

    step: str
    status: StepStatus
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"setup"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
