"""Configuration loader for Agenda Board.

This module handles loading and parsing YAML configuration files
with proper error handling and validation.
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from agenda_board.config.env_schema import EnvironmentConfig
from agenda_board.config.models import AgendaViewConfig
from agenda_board.utils.exceptions import ConfigurationError
from agenda_board.utils.logging import get_logger, setup_logging


logger = get_logger(__name__)


class ConfigLoader:
    """Loads and validates configuration from YAML files."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file.
                        Defaults to 'agenda_board.yml' in current directory.
        """
        if config_path is None:
            config_path = Path("agenda_board.yml")

        self.config_path = Path(config_path)
        self._config: Optional[AgendaViewConfig] = None

    def load(self) -> AgendaViewConfig:
        """Load and validate the configuration file.

        Returns:
            Validated configuration object.

        Raises:
            ConfigurationError: If the configuration is invalid or cannot be loaded.
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}",
                details={"path": str(self.config_path.absolute())},
            )

        try:
            logger.info(f"Loading configuration from: {self.config_path}")
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML syntax in configuration file: {e}",
                details={
                    "path": str(self.config_path),
                    "error": str(e),
                },
            )

        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                details={"path": str(self.config_path)},
            )

        try:
            self._config = AgendaViewConfig(**raw_config)
        except ValidationError as e:
            # Format Pydantic validation errors nicely
            error_messages = []
            for error in e.errors():
                loc = " -> ".join(str(x) for x in error["loc"])
                msg = error["msg"]
                error_messages.append(f"{loc}: {msg}")

            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(error_messages),
                details={
                    "path": str(self.config_path),
                    "errors": e.errors(),
                },
            )

        logger.info(
            f"Configuration loaded: show_completed={self._config.show_completed}, "
            f"drag_enabled={self._config.drag_enabled}"
        )
        return self._config

    def reload(self) -> AgendaViewConfig:
        """Reload the configuration file.

        Returns:
            Validated configuration object.
        """
        self._config = None
        return self.load()

    @property
    def config(self) -> AgendaViewConfig:
        """Get the loaded configuration, loading it if necessary."""
        if self._config is None:
            self.load()
        return self._config


def load_config(
    env: Optional[EnvironmentConfig] = None, configure_logging: bool = True
) -> AgendaViewConfig:
    """Resolve the configuration from the environment.

    The YAML file named by ``AGENDA_BOARD_CONFIG`` is loaded when set,
    defaults are used otherwise, and ``AGENDA_BOARD_LOG_LEVEL`` overrides
    the log level. The resulting level is applied to the console handler.

    Args:
        env: Environment settings; read from the process when omitted
        configure_logging: Set up logging at the configured level

    Returns:
        Validated configuration object.

    Raises:
        ConfigurationError: If the configuration file is invalid.
    """
    env = env or EnvironmentConfig()

    if env.config_path is not None:
        config = ConfigLoader(env.config_path).load()
    else:
        config = AgendaViewConfig()

    if env.log_level:
        try:
            config = AgendaViewConfig(
                **config.model_dump(exclude={"log_level"}), log_level=env.log_level
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid AGENDA_BOARD_LOG_LEVEL: {env.log_level}",
                details={"errors": e.errors()},
            )

    if configure_logging:
        setup_logging(level=config.log_level)

    return config
