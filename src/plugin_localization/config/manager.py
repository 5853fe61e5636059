"""Configuration manager for plugin localization.

This module provides functionality for loading and validating YAML
configuration files with Pydantic model validation, and for writing a
documented sample configuration.
"""

import logging
from pathlib import Path

import yaml

from ..config.schema import PluginLocalizationConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    Provides methods for loading configuration files, falling back to
    defaults, and creating a sample configuration.
    """

    @staticmethod
    def load_config(config_path: Path) -> PluginLocalizationConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            PluginLocalizationConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the file does not contain a mapping
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        config = PluginLocalizationConfig.model_validate(config_data)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def load_config_or_default(config_path: Path | None) -> PluginLocalizationConfig:
        """
        Load configuration, using defaults when no file is present.

        Args:
            config_path: Path to the YAML configuration file, or None

        Returns:
            PluginLocalizationConfig: Loaded or default configuration
        """
        if config_path is None or not config_path.exists():
            logger.info("No configuration file found, using defaults")
            return ConfigManager.get_default_config()
        return ConfigManager.load_config(config_path)

    @staticmethod
    def get_default_config() -> PluginLocalizationConfig:
        """
        Get a configuration object with default values.

        Returns:
            PluginLocalizationConfig: Configuration with default values
        """
        return PluginLocalizationConfig()

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(SAMPLE_CONFIG, encoding="utf-8")


SAMPLE_CONFIG = """# Plugin Localization Configuration File
# Copy this file to config.yml and modify the values as needed.

paths:
  # Folder whose subdirectories are deployed plugins (each with a package.json)
  plugins_folder: plugins
  # Folder with stand-alone language pack JSON files (null to disable)
  language_packs_folder: language-packs
  # Folder for log files
  log_folder: logs

localization:
  # Which NLS catalogs are localized:
  #   first_bundle - entry files until the first nls.metadata.json, which ends the scan
  #   bundle_only  - one nls.metadata.json if present, otherwise all *.nls.metadata.json
  #   all          - every bundle and every entry file
  scan_policy: bundle_only

logging:
  # Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
  level: INFO
  # Size in MB at which log files are rotated (1-100)
  max_file_size_mb: 5
  # Number of size-rotated log files to keep (0-50)
  backup_count: 5
  # Number of logs from previous runs to keep (0-100)
  keep_session_logs: 10
"""
