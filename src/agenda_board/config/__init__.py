"""Configuration management for Agenda Board.

This module handles loading, parsing, and validating configuration
from YAML files and environment variables.
"""

from .models import AgendaViewConfig
from .loader import ConfigLoader, load_config
from .env_schema import EnvironmentConfig

__all__ = [
    "AgendaViewConfig",
    "ConfigLoader",
    "EnvironmentConfig",
    "load_config",
]
