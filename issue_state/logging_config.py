"""structlog setup for the command line.

Log lines go to stderr as JSON so stdout only ever carries the confirmation
printed after a successful transition.
"""

import logging
import sys

import structlog


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # looked up per logger so a swapped sys.stderr (e.g. under click's CliRunner) is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(log_level: str = "WARNING") -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelNamesMapping()[log_level.upper()]),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
