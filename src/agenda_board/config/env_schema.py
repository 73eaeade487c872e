"""Environment variable schema definitions for Agenda Board.

This module defines the Pydantic settings model for the environment
variables the package reads.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentConfig(BaseSettings):
    """Environment configuration using Pydantic settings.

    This provides validated access to environment variables with
    type conversion and default values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )

    config_path: Optional[Path] = Field(
        None,
        alias="AGENDA_BOARD_CONFIG",
        description="Path to the YAML configuration file",
    )
    log_level: Optional[str] = Field(
        None,
        alias="AGENDA_BOARD_LOG_LEVEL",
        description="Overrides the configured console log level",
    )
