"""Interactive yes/no confirmation."""

from __future__ import annotations

import logging
from typing import Protocol

import click

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Asks the user a yes/no question."""

    def confirm(self, question: str, *, default: bool = True) -> bool: ...


class ClickPrompter:
    """Blocks on stdin via :func:`click.confirm`."""

    def confirm(self, question: str, *, default: bool = True) -> bool:
        return click.confirm(question, default=default, err=True)


class DefaultPrompter:
    """Non-interactive mode: every question resolves to its default."""

    def confirm(self, question: str, *, default: bool = True) -> bool:
        logger.debug("Auto-answering %r with %s", question, default)
        return default


def build_prompter(*, interactive: bool) -> Prompter:
    return ClickPrompter() if interactive else DefaultPrompter()
