"""Configuration manager for i18n-retrofit.

This module provides functionality for loading and validating
YAML configuration files with Pydantic model validation.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.core.exceptions import ConfigurationError
from .schema import RetrofitConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "i18n-retrofit.yml"


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    All methods are static; the class groups loading, defaults and sample
    generation in one place.
    """

    @staticmethod
    def load_config(config_path: Path) -> RetrofitConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            RetrofitConfig: Validated configuration object

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML, or
                fails validation
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                user_message=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        try:
            config = RetrofitConfig(**config_data)  # pyright: ignore[reportArgumentType]
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {config_path}: {e}",
                user_message=f"Invalid configuration in {config_path}",
                context=e.errors(),
            ) from e

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def load_or_default(config_path: Path | None) -> RetrofitConfig:
        """
        Load configuration, falling back to defaults.

        An explicitly given path must exist; without one, ``i18n-retrofit.yml``
        in the current directory is used when present.
        """
        if config_path is not None:
            return ConfigManager.load_config(config_path)

        default_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if default_path.exists():
            return ConfigManager.load_config(default_path)

        logger.debug("No configuration file found, using defaults")
        return ConfigManager.get_default_config()

    @staticmethod
    def get_default_config() -> RetrofitConfig:
        """Get a configuration object with default values."""
        return RetrofitConfig()

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(ConfigManager._generate_sample_content(), encoding="utf-8")

    @staticmethod
    def _generate_sample_content() -> str:
        """
        Generate sample configuration file content.

        Returns:
            str: Sample configuration file content
        """
        return """# i18n-retrofit configuration file
# Every option has a default; remove what you do not need to change.

scanner:
  # Files or directories scanned when none are given on the command line
  paths:
    - resources/views
    - app
  # Directory names or sub-paths skipped wherever they appear in a path
  excluded_dirs:
    - vendor
    - node_modules
    - storage
    - bootstrap/cache
  # File names or paths skipped on suffix or exact match
  excluded_files: []
  # Optional globs; when set, only matching files are scanned
  include_patterns: []

analysis:
  # Suggestions scoring below this confidence (0-100) are dropped
  min_confidence: 0

rewriter:
  # Directory relative change paths are resolved against (current directory when unset)
  base_path: null
  # Count the changes that would apply without writing files
  dry_run: false
"""
