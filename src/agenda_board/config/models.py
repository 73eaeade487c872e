"""Configuration schema definitions for Agenda Board.

This module defines the Pydantic model for validating and parsing
the YAML configuration file.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgendaViewConfig(BaseModel):
    """Behaviour of an agenda view.

    Example YAML::

        show_completed: false
        drag_enabled: true
        log_level: INFO
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    show_completed: bool = Field(
        default=True, description="Whether completed sections and items start visible"
    )
    drag_enabled: bool = Field(
        default=True,
        description="Whether items and sections can be reordered (admin views)",
    )
    log_level: str = Field(default="WARNING", description="Console logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level
