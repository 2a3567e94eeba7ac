"""
Structured logging configuration for the contract parser.
Console output for interactive use, JSON for batch runs.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.typing import FilteringBoundLogger

from contract_parser.core.config import get_settings


def configure_logging(
    log_level: Optional[str] = None, log_format: Optional[str] = None
) -> None:
    """Configure structured logging; unset arguments come from settings."""
    settings = get_settings()
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_format = log_format or settings.log_format

    # Logs go to stderr so reports printed to stdout stay clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    # PIL logs every decoder at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> FilteringBoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_error_with_context(
    logger: FilteringBoundLogger,
    error: Exception,
    context: Dict[str, Any]
) -> None:
    """Log an error with additional context."""
    logger.error(
        "Error occurred",
        error=str(error),
        error_type=type(error).__name__,
        **context,
        exc_info=True
    )
