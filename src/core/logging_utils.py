"""Structured logging (structlog) for pokedex-d2.

`configure_logging` is called once by entry-points; library code only calls
`get_logger`. Without configuration structlog falls back to its defaults, so
importing the core never requires a logging setup.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor


def configure_logging(log_level: str = "WARNING", log_format: str = "console") -> None:
    """Configure stdlib logging + structlog.

    Args:
        log_level: stdlib level name ("DEBUG", "INFO", ...).
        log_format: "json" for machine-readable output, anything else renders
            human-readable console lines.
    """

    shared: list[Processor] = [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if log_format.lower() == "json":
        processors: list[Processor] = [
            *shared,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared,
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    # stderr keeps stdout free for tables and JSON output.
    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        level=getattr(logging, log_level.upper(), logging.WARNING),
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a lazy structlog logger tagged with `component=name`.

    Initial values go through `get_logger` instead of `.bind()` so module-level
    loggers pick up `configure_logging` even when created before it runs.
    """

    if name:
        return structlog.get_logger(name, component=name)
    return structlog.get_logger()
