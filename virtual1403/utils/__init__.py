"""
Utilities package for virtual1403.

Contains common utility functions used across the virtual1403 codebase.
"""

from .logging_utils import (
    log_data_processing,
    log_debug_operation,
    log_job_event,
    log_scanner_warning,
)

__all__ = [
    "log_job_event",
    "log_scanner_warning",
    "log_debug_operation",
    "log_data_processing",
]
