"""
structlog setup shared by the bridge and the entry point.

- configure_logging(): processors + renderer, binds a fresh run_id
- get_logger(): named FilteringBoundLogger
"""

from __future__ import annotations

import logging
import sys
from typing import cast
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars
from structlog.typing import FilteringBoundLogger


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> str:
    """Configure structlog and return the run_id bound to all later events."""
    renderer: structlog.typing.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    run_id = uuid4().hex[:12]
    bind_contextvars(run_id=run_id)
    return run_id


def get_logger(name: str) -> FilteringBoundLogger:
    # lazy proxy: picks up configure_logging() even when created at import time
    return cast(FilteringBoundLogger, structlog.get_logger(logger_name=name))
