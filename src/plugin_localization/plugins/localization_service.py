"""
Localization of deployed plugins.

This module registers the language packs contributed by plugins and writes
translated NLS sidecar files into a plugin's directory:

- ``package.nls.<lang>.json`` next to ``package.nls.json``
- ``nls.bundle.<lang>.json`` next to a ``nls.metadata.json`` bundle
- ``<filePath>.nls.<lang>.json`` for every ``*.nls.metadata.json`` entry

Generated files are only written when missing and are never read back.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..i18n.localization import (
    Localization,
    build_translation_key,
    check_language_id,
    localize,
    transform_key,
)
from ..utils.fs.json_files import (
    path_exists,
    read_dir_recursive,
    read_json,
    write_json,
)
from .models import (
    DeployedPlugin,
    LocalizationBundle,
    LocalizationEntry,
    PluginLocalization,
)

logger = logging.getLogger(__name__)

PACKAGE_NLS_FILE = "package.nls.json"
BUNDLE_FILE = "nls.metadata.json"
ENTRY_FILE_SUFFIX = ".nls.metadata.json"


class LocalizationSource(Protocol):
    """The part of a localization provider the service depends on."""

    def get_available_languages(self) -> list[str]: ...

    def load_localization(self, language_id: str) -> Localization: ...

    def add_localizations(self, *localizations: Localization) -> None: ...


class BundleScanPolicy(Enum):
    """Which NLS catalog files of a plugin tree get localized."""

    FIRST_BUNDLE = "first_bundle"
    """Entries are processed in listing order until the first bundle, which ends the scan."""

    BUNDLE_ONLY = "bundle_only"
    """One bundle and no entries when a bundle exists, otherwise every entry."""

    ALL = "all"
    """Every bundle and every entry file."""


def resolve_package_dir(package_uri: str) -> Path:
    """
    Convert a plugin package URI into a filesystem path.

    Plain paths without a scheme are accepted as well.

    Raises:
        ValueError: If the URI uses a scheme other than file
    """
    parsed = urlparse(package_uri)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    # Single letters are Windows drive letters, not schemes
    if len(parsed.scheme) <= 1:
        return Path(package_uri)
    raise ValueError(f"Unsupported package URI scheme '{parsed.scheme}': {package_uri}")


def build_localizations(
    plugin_localizations: list[PluginLocalization],
) -> list[Localization]:
    """
    Flatten plugin language pack contributions into provider localizations.

    Every (translation id, scope, key) triple becomes one entry keyed by
    ``{translationId}/{transform_key(scope)}/{key}``.
    """
    localizations: list[Localization] = []
    for plugin_localization in plugin_localizations:
        localization = Localization(
            language_id=plugin_localization.language_id,
            language_name=plugin_localization.language_name,
            localized_language_name=plugin_localization.localized_language_name,
            language_pack=True,
        )
        for translation in plugin_localization.translations:
            for scope, values in translation.contents.items():
                for key, item in values.items():
                    translation_key = build_translation_key(translation.id, scope, key)
                    localization.translations[translation_key] = item
        localizations.append(localization)
    return localizations


def _localize_messages(
    localization: Localization,
    plugin_id: str,
    nls_file_key: str,
    keys: list[str],
    messages: list[str],
) -> list[str | None]:
    output: list[str | None] = []
    for index, key in enumerate(keys):
        default_value = messages[index] if index < len(messages) else None
        nls_key = f"{plugin_id}/{nls_file_key}/{key}"
        output.append(localize(localization, nls_key, default_value))
    return output


class PluginLocalizationService:
    """
    Generates translated NLS files for deployed plugins.

    The localization source is injected; every language it reports as
    available gets its own set of generated files.
    """

    def __init__(
        self,
        localization_provider: LocalizationSource,
        scan_policy: BundleScanPolicy = BundleScanPolicy.BUNDLE_ONLY,
    ) -> None:
        """
        Initialize the service.

        Args:
            localization_provider: Provider used for language lookups and pack registration
            scan_policy: Which catalog files localize_files() processes
        """
        self.localization_provider: LocalizationSource = localization_provider
        self.scan_policy: BundleScanPolicy = scan_policy

    def deploy_localizations(self, plugin: DeployedPlugin) -> None:
        """
        Register the language packs a plugin contributes.

        Plugins without contributed language packs cause no provider call.
        Errors raised by the provider propagate to the caller.
        """
        if plugin.localizations:
            localizations = build_localizations(plugin.localizations)
            self.localization_provider.add_localizations(*localizations)
            logger.info(
                f"Registered {len(localizations)} language pack(s) from plugin '{plugin.id}'"
            )

    async def localize_plugin(self, plugin: DeployedPlugin) -> bool:
        """
        Write missing translated NLS files for a plugin.

        Nothing raised while localizing escapes this method; failures are
        logged with the plugin id.

        Returns:
            False if an error was logged, True otherwise
        """
        plugin_id = plugin.id
        try:
            package_dir = resolve_package_dir(plugin.model.package_uri)
            if await self.localize_package(plugin_id, package_dir):
                await self.localize_files(plugin_id, package_dir)
            return True
        except Exception:
            logger.exception(f"Failed to localize plugin '{plugin_id}'.")
            return False

    async def localize_package(self, plugin_id: str, plugin_path: Path) -> bool:
        """
        Generate ``package.nls.<lang>.json`` files.

        Returns:
            True if the plugin has a package.nls.json, whether or not any
            file had to be written
        """
        languages = self.localization_provider.get_available_languages()
        if not languages:
            return False

        nls_path = plugin_path / PACKAGE_NLS_FILE
        if not await path_exists(nls_path):
            return False

        nls_content = await read_json(nls_path)
        if not isinstance(nls_content, dict):
            raise ValueError(f"{nls_path} must contain a JSON object")

        for language in languages:
            _ = check_language_id(language)
            nls_localization_path = plugin_path / f"package.nls.{language}.json"
            if await path_exists(nls_localization_path):
                continue

            localization = self.localization_provider.load_localization(language)
            nls_localization: dict[str, object] = {}
            for key, original in nls_content.items():
                translation_key = f"{plugin_id}/package/{key}"
                # Non-string values ({"message", "comment"} objects) are kept unless translated
                default_value = original if isinstance(original, str) else None
                translated = localize(localization, translation_key, default_value)
                nls_localization[key] = translated if translated is not None else original
            await write_json(nls_localization_path, nls_localization)
            logger.debug(f"Generated {nls_localization_path.name} for plugin '{plugin_id}'")

        return True

    async def localize_files(self, plugin_id: str, plugin_path: Path) -> None:
        """Localize the bundle and entry catalogs below plugin_path."""
        files = sorted(await read_dir_recursive(plugin_path))
        bundles = [file for file in files if file.name == BUNDLE_FILE]
        entries = [
            file
            for file in files
            if file.name != BUNDLE_FILE and file.name.endswith(ENTRY_FILE_SUFFIX)
        ]

        match self.scan_policy:
            case BundleScanPolicy.FIRST_BUNDLE:
                for file in files:
                    if file.name == BUNDLE_FILE:
                        await self.localize_bundle(plugin_id, file)
                        break
                    if file.name.endswith(ENTRY_FILE_SUFFIX):
                        await self.localize_entry(plugin_id, file)

            case BundleScanPolicy.BUNDLE_ONLY:
                if bundles:
                    if len(bundles) > 1:
                        logger.warning(
                            f"Plugin '{plugin_id}' has {len(bundles)} {BUNDLE_FILE} files, "
                            f"only {bundles[0]} is localized"
                        )
                    await self.localize_bundle(plugin_id, bundles[0])
                else:
                    for entry in entries:
                        await self.localize_entry(plugin_id, entry)

            case BundleScanPolicy.ALL:
                for bundle in bundles:
                    await self.localize_bundle(plugin_id, bundle)
                for entry in entries:
                    await self.localize_entry(plugin_id, entry)

    async def localize_bundle(self, plugin_id: str, bundle_path: Path) -> None:
        """Generate ``nls.bundle.<lang>.json`` files next to a bundle."""
        nls_content: LocalizationBundle = await read_json(bundle_path)  # pyright: ignore[reportAssignmentType]
        parent_dir = bundle_path.parent

        for language in self.localization_provider.get_available_languages():
            _ = check_language_id(language)
            nls_localization_path = parent_dir / f"nls.bundle.{language}.json"
            if await path_exists(nls_localization_path):
                continue

            localization = self.localization_provider.load_localization(language)
            bundle: dict[str, list[str | None]] = {}
            for file_key, entry in nls_content.items():
                bundle[file_key] = _localize_messages(
                    localization,
                    plugin_id,
                    transform_key(file_key),
                    entry["keys"],
                    entry["messages"],
                )
            await write_json(nls_localization_path, bundle)
            logger.debug(f"Generated {nls_localization_path} for plugin '{plugin_id}'")

    async def localize_entry(self, plugin_id: str, entry_path: Path) -> None:
        """Generate ``<filePath>.nls.<lang>.json`` files for one entry."""
        entry: LocalizationEntry = await read_json(entry_path)  # pyright: ignore[reportAssignmentType]
        parent_dir = entry_path.parent
        file_path = entry["filePath"]
        nls_file_key = transform_key(file_path)

        for language in self.localization_provider.get_available_languages():
            _ = check_language_id(language)
            nls_localization_path = parent_dir / f"{file_path}.nls.{language}.json"
            if await path_exists(nls_localization_path):
                continue

            localization = self.localization_provider.load_localization(language)
            output = _localize_messages(
                localization, plugin_id, nls_file_key, entry["keys"], entry["messages"]
            )
            await write_json(nls_localization_path, output)
            logger.debug(f"Generated {nls_localization_path} for plugin '{plugin_id}'")
