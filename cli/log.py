"""structlog setup for the CLI.

Log lines go to stderr so the report on stdout stays clean. The stream is
looked up on every logger creation rather than captured once, so redirected
or replaced ``sys.stderr`` objects are honored.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger(*_args: object) -> structlog.PrintLogger:
    return structlog.PrintLogger(sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for one CLI run.

    Args:
        verbose: Emit debug events (per-path scan errors, config loading);
            otherwise only warnings and errors are shown.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
