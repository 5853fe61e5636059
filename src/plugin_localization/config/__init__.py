"""Configuration loading and validation."""

from .manager import ConfigManager
from .schema import (
    LocalizationConfig,
    LoggingConfig,
    PathsConfig,
    PluginLocalizationConfig,
)

__all__ = [
    "ConfigManager",
    "LocalizationConfig",
    "LoggingConfig",
    "PathsConfig",
    "PluginLocalizationConfig",
]
