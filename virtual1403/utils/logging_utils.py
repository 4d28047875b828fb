"""
Centralized logging utilities for virtual1403.

Provides standardized logging functions for common scanner events so log
lines keep one format across the codebase.
"""

import logging
from typing import Any, Optional


def log_job_event(
    logger: logging.Logger,
    event_type: str,
    details: str = "",
    jobinfo: Optional[str] = None,
) -> None:
    """Log job lifecycle events with consistent format.

    ``jobinfo`` is attached to the record so structured formatters can pick it up.
    """
    detail_str = f": {details}" if details else ""
    extra = {"jobinfo": jobinfo} if jobinfo is not None else None
    logger.info(f"[JOB] {event_type}{detail_str}", extra=extra)


def log_scanner_warning(logger: logging.Logger, operation: str, reason: str) -> None:
    """Log scanner contract warnings with consistent format."""
    logger.warning(f"[SCANNER] {operation}: {reason}")


def log_debug_operation(
    logger: logging.Logger, operation: str, details: Any = None
) -> None:
    """Log debug information for operations."""
    if details is not None:
        logger.debug(f"{operation}: {details}")
    else:
        logger.debug(f"{operation}")


def log_data_processing(
    logger: logging.Logger, operation: str, data_info: str = ""
) -> None:
    """Log data processing operations with consistent format."""
    info_str = f" - {data_info}" if data_info else ""
    logger.debug(f"[DATA] {operation}{info_str}")


__all__ = [
    "log_job_event",
    "log_scanner_warning",
    "log_debug_operation",
    "log_data_processing",
]
