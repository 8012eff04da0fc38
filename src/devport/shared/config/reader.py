from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from pydantic import ValidationError

from devport.shared.logging import get_logger
from devport.shared.settings import app_settings
from devport.shared.utils.path import get_config_path
from .exceptions import ConfigurationError
from .models import ProjectConfig


class ProjectConfigReader:
    """Handles loading, parsing, and validation of the project configuration file."""

    def __init__(self, config_path: Optional[Path] = None, logger_: Optional[logging.Logger] = None):
        """Initialize the config reader.

        Args:
            config_path: Path to the configuration file. If None, uses DEVPORT_CONFIG_FILE.
            logger_: Logger instance. If None, creates a new one.
        """
        self.config_path = config_path or get_config_path(app_settings.config_file)
        self.logger = logger_ or get_logger()
        self._config: Optional[ProjectConfig] = None

    def load_config_file(self) -> Dict[str, Any]:
        """Load and parse the YAML configuration file.

        Returns:
            Parsed configuration dictionary from YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        try:
            with self.config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML syntax in configuration file",
                details=str(e),
                file_path=self.config_path
            ) from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(
                "Configuration file encoding error",
                details=f"Expected UTF-8 encoding. Error: {e}",
                file_path=self.config_path
            ) from e
        except OSError as e:
            raise ConfigurationError(
                "Failed to read configuration file",
                details=str(e),
                file_path=self.config_path
            ) from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a YAML mapping (dictionary) at the root level",
                details=f"Found: {type(data).__name__}",
                file_path=self.config_path
            )

        return data

    def _normalize_config_structure(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Extract configuration from under 'devport' key.

        Args:
            config_data: Raw configuration data from YAML

        Returns:
            Configuration data extracted from 'devport' section (empty if absent)

        Raises:
            ConfigurationError: If the 'devport' section is not a mapping
        """
        devport_data = config_data.get("devport")
        if devport_data is None:
            return {}

        if not isinstance(devport_data, dict):
            raise ConfigurationError(
                "The 'devport' section must be a dictionary",
                details=f"Found: {type(devport_data).__name__}",
                file_path=self.config_path
            )

        return devport_data

    @staticmethod
    def _format_pydantic_error(error: ValidationError) -> str:
        """Format Pydantic validation errors into readable messages."""
        error_messages = []

        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err["loc"])
            if err["type"] == "missing":
                error_messages.append(f"Required field '{location}' is missing")
            elif err["type"] == "value_error":
                error_messages.append(f"Invalid value for '{location}': {err['msg']}")
            else:
                error_messages.append(f"Validation error for '{location}': {err['msg']}")

        return "\n".join(error_messages)

    def validate_and_parse_config(self, config_data: Dict[str, Any]) -> ProjectConfig:
        """Validate and parse the configuration data.

        Args:
            config_data: Raw configuration dictionary from YAML.

        Returns:
            Validated ProjectConfig instance.

        Raises:
            ConfigurationError: If validation fails.
        """
        normalized_data = self._normalize_config_structure(config_data)

        try:
            return ProjectConfig(**normalized_data)
        except ValidationError as e:
            raise ConfigurationError(
                "Configuration validation failed",
                details=self._format_pydantic_error(e),
                file_path=self.config_path
            ) from e

    def load_and_validate_config(self) -> ProjectConfig:
        """Load the configuration file, falling back to defaults when it does not exist.

        Returns:
            Validated ProjectConfig instance.

        Raises:
            ConfigurationError: If loading or validation fails.
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self.logger.debug("No configuration file at %s, using defaults", self.config_path)
            self._config = ProjectConfig()
            return self._config

        self.logger.debug("Loading configuration from %s", self.config_path)
        self._config = self.validate_and_parse_config(self.load_config_file())
        self.logger.debug(
            "Loaded configuration with environments: %s",
            list(self._config.environments.keys())
        )
        return self._config

    def base_url(self, environment: str) -> str:
        """Return the base URL configured for an environment ('/' if absent)."""
        return self.load_and_validate_config().base_url(environment)
