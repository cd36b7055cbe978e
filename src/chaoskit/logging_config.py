"""Structured logging configuration for chaoskit.

Library modules obtain their loggers through :func:`get_logger`; nothing here
configures logging on import. Test suites or host applications that want the failpoint
events rendered as JSON call :func:`configure_logging` once.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from .config import log_level


def configure_logging() -> None:
    """Configure structured logging for failpoint events.

    Sets up:
    - JSON output format on stderr, next to the test runner's own output
    - ISO timestamp format
    - Log level filtering (INFO by default, configurable via LOG_LEVEL env var)
    - Exception formatting
    """
    level = log_level()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Example:
        logger = get_logger(__name__)
        logger.info("failpoint_triggered", tag="db_error", outcome="error")
    """
    return structlog.get_logger(name)
