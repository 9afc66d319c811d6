"""
Structured logging configuration for the Galxe canvas service.

Provides consistent, structured logging with per-request correlation IDs and
rich formatting for local development.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

CORRELATION_ID_KEY = "correlation_id"


def new_correlation_id() -> str:
    return str(uuid.uuid4())[:8]


def bind_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Bind a correlation ID to the current execution context."""
    correlation_id = correlation_id or new_correlation_id()
    structlog.contextvars.bind_contextvars(**{CORRELATION_ID_KEY: correlation_id})
    return correlation_id


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def clear_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars(CORRELATION_ID_KEY)


def setup_logging(debug: bool = False, rich_output: bool = True) -> None:
    """
    Configure structured logging for the application.

    Args:
        debug: Enable debug level logging
        rich_output: Use rich formatting for console output, JSON lines otherwise
    """
    level = logging.DEBUG if debug else logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.dev.set_exc_info,
    ]

    if rich_output:
        # Rich console output for development
        stream = sys.stderr
        console = Console(stderr=True)
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.rich_traceback,
            )
        )
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )
    else:
        # JSON output for production
        stream = sys.stdout
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
        logging.basicConfig(level=level, format="%(message)s", stream=stream, force=True)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )