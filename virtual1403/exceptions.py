"""Exceptions for virtual1403 with contextual information."""

from typing import Any, Dict, Optional


class Virtual1403Error(Exception):
    """Base error for virtual1403 with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize a virtual1403 error.

        Args:
            message: Error message
            context: Optional context information (operation, jobinfo, column, setting, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Get string representation with context."""
        base_msg = super().__str__()
        if self.context:
            context_items = []
            for key, value in self.context.items():
                if isinstance(value, str) and len(value) > 50:
                    value = value[:47] + "..."
                context_items.append(f"{key}={value}")
            return f"{base_msg} (Context: {', '.join(context_items)})"
        return base_msg

    def add_context(self, key: str, value: Any) -> None:
        """Add context information to the exception."""
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """Get context information from the exception, or ``default``."""
        return self.context.get(key, default)


class ScannerStateError(Virtual1403Error):
    """A scanner was driven in a way its caller contract forbids.

    Raised for feeding or closing after close, and for re-entrant use of one
    scanner instance. These are programming errors, not input errors.
    """

    pass


class ConfigurationError(Virtual1403Error):
    """Invalid scanner or logging configuration value."""

    pass
