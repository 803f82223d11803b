"""Logging configuration for jcal."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator, TextIO

import structlog

# Handler installed by configure_logging, replaced on reconfiguration
_handler: logging.Handler | None = None


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger on top of a standard library logger.

    Records are filtered by the standard library level, so jcal stays quiet
    until the application configures logging.
    """
    return structlog.wrap_logger(logging.getLogger(name or "jcal"))


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure jcal logging.

    Calendar lines go to stdout, so log records default to stderr to keep
    the two apart. Rendering is done by structlog, emission by a standard
    library handler on the ``jcal`` logger.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_output: True for JSON output, False for console
        stream: Where log records are written. Defaults to sys.stderr.
    """
    global _handler
    numeric_level = getattr(logging, level.upper())

    logger = logging.getLogger("jcal")
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(numeric_level)

    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        # module level loggers must follow later reconfiguration
        cache_logger_on_first_use=False,
    )


@contextmanager
def timed_block(
    logger: structlog.BoundLogger,
    event: str,
    level: str = "debug",
    **context: Any,
) -> Generator[None, None, None]:
    """Context manager that logs ``event`` with the elapsed milliseconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        getattr(logger, level)(event, elapsed_ms=round(elapsed_ms, 2), **context)
