"""Utility functions and helpers for Agenda Board.

This module contains shared utilities including logging setup
and custom exceptions.
"""

from .logging import setup_logging, get_logger
from .exceptions import (
    AgendaBoardError,
    ConfigurationError,
    DataInconsistencyError,
    DuplicateItemError,
    DragStateError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "AgendaBoardError",
    "ConfigurationError",
    "DataInconsistencyError",
    "DuplicateItemError",
    "DragStateError",
]
