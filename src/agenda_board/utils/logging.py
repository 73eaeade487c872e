"""Logging configuration and utilities for Agenda Board.

This module provides centralized logging setup and helper functions
for consistent logging across the package.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler


# Global logger cache
_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: str = "WARNING",
    log_dir: Optional[Path] = None,
    log_name: str = "agenda_board",
) -> Optional[Path]:
    """Set up logging configuration for the package.

    Args:
        level: Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.
        log_dir: Directory for a DEBUG level log file. No file is written when omitted.
        log_name: Base name of the log file.

    Returns:
        Path to the log file, or None when only console logging is set up.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = RichHandler(
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
    )
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{log_name}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    logger = get_logger(__name__)
    logger.debug(f"Console log level: {level}")
    if log_file:
        logger.debug(f"Log file: {log_file.absolute()}")

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the specified name.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]
