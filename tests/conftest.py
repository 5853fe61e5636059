"""
Global test fixtures for plugin localization tests.

This module provides reusable pytest fixtures for localization providers,
language packs and configuration objects.
"""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from src.plugin_localization.config.schema import PluginLocalizationConfig
from src.plugin_localization.i18n.localization import Localization
from src.plugin_localization.i18n.provider import LocalizationProvider


@pytest.fixture
def german_pack() -> Localization:
    """
    Create a German language pack for the ``myext`` plugin.

    Returns:
        Localization: Pack with package and source file translations
    """
    return Localization(
        language_id="de",
        language_name="German",
        localized_language_name="Deutsch",
        language_pack=True,
        translations={
            "myext/package/title": "Hallo",
            "myext/src_a_ts/k1": "Nachricht",
        },
    )


@pytest.fixture
def french_pack() -> Localization:
    """
    Create a French language pack for the ``myext`` plugin.

    Returns:
        Localization: Pack with package and source file translations
    """
    return Localization(
        language_id="fr",
        language_name="French",
        localized_language_name="Français",
        language_pack=True,
        translations={
            "myext/package/title": "Bonjour",
            "myext/src_a_ts/k1": "Msg-fr",
        },
    )


@pytest.fixture
def provider(german_pack: Localization, french_pack: Localization) -> LocalizationProvider:
    """
    Create a provider with the German and French packs registered.

    Returns:
        LocalizationProvider: Provider reporting ``de`` and ``fr`` as available
    """
    localization_provider = LocalizationProvider()
    localization_provider.add_localizations(german_pack, french_pack)
    return localization_provider


@pytest.fixture
def empty_provider() -> LocalizationProvider:
    """Create a provider without any language packs."""
    return LocalizationProvider()


@pytest.fixture
def base_config() -> PluginLocalizationConfig:
    """
    Create a standard test configuration.

    Returns:
        PluginLocalizationConfig: Configuration with explicit values for every section
    """
    return PluginLocalizationConfig.model_validate(
        {
            "paths": {
                "plugins_folder": "plugins",
                "language_packs_folder": "language-packs",
                "log_folder": "logs",
            },
            "localization": {"scan_policy": "bundle_only"},
            "logging": {
                "level": "INFO",
                "max_file_size_mb": 5,
                "backup_count": 5,
                "keep_session_logs": 10,
            },
        }
    )


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after tests that configure logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
