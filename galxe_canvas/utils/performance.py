"""Timing helpers for remote query operations."""

import time
from functools import wraps
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


def track_performance(operation_name: str):
    """
    Decorator to log duration and outcome of an operation.

    Args:
        operation_name: Name of the operation for logging
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            logger.debug("Operation started", operation=operation_name)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.info(
                    "Operation failed",
                    operation=operation_name,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
                    status="failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            logger.debug(
                "Operation completed",
                operation=operation_name,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
                status="success",
            )
            return result

        return wrapper

    return decorator
