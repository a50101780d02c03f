"""structlog setup for nextprep runs.

Step loggers and stdlib loggers under ``nextprep`` share one stderr
handler so log lines never mix with the report on stdout. Console
rendering is the default; ``--log-json`` switches to JSON lines.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def app_log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """DEBUG with --verbose, ERROR with --quiet, WARNING otherwise. Verbose wins."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call more than once; the root handler is replaced, not added.
    Third-party loggers stay at WARNING whatever the flags.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger("nextprep").setLevel(app_log_level(verbose=verbose, quiet=quiet))


def get_step_logger(step_name: str) -> structlog.stdlib.BoundLogger:
    """Logger handed to a mutation step, tagged with the step name."""
    return structlog.get_logger(f"nextprep.steps.{step_name}").bind(step=step_name)
