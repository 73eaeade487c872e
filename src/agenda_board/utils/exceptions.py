"""Custom exceptions for Agenda Board.

This module defines application-specific exceptions for better
error handling and debugging.
"""

from typing import Optional, Any


class AgendaBoardError(Exception):
    """Base exception for all Agenda Board errors.

    All custom exceptions in the package inherit from this class
    to allow for easy catching of application-specific errors.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(AgendaBoardError):
    """Raised when there's an error in configuration.

    This includes missing configuration files, invalid YAML syntax,
    missing required fields, or invalid field values.
    """

    pass


class DataInconsistencyError(AgendaBoardError):
    """Raised when agenda data cannot be turned into a valid hierarchy.

    Recoverable inconsistencies (such as an item pointing at an unknown
    parent) are reported as diagnostics instead; this error is reserved
    for input that would corrupt the hierarchy.
    """

    def __init__(
        self,
        message: str,
        item_ids: Optional[list[Any]] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize data inconsistency error.

        Args:
            message: Error message.
            item_ids: Ids of the offending items.
            details: Additional error details.
        """
        super().__init__(message, details)
        self.item_ids = list(item_ids or [])


class DuplicateItemError(DataInconsistencyError):
    """Raised when the same item id occurs more than once."""

    pass


class DragStateError(AgendaBoardError):
    """Raised when the drag engine is driven outside its state machine.

    Gesture handlers never raise this; it guards calls made by the host
    outside a gesture, such as replacing the hierarchy mid-drag.
    """

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        active_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize drag state error.

        Args:
            message: Error message.
            phase: Engine phase when the error occurred.
            active_id: Id being dragged, if any.
            details: Additional error details.
        """
        super().__init__(message, details)
        self.phase = phase
        self.active_id = active_id
