"""
Reading plugin manifests.

A plugin directory holds a VS Code style ``package.json``. Language pack
plugins list their translations under ``contributes.localizations``; each
translation points at a JSON file whose ``contents`` member holds the
scope -> key -> string mapping::

    "contributes": {
        "localizations": [{
            "languageId": "de",
            "languageName": "German",
            "localizedLanguageName": "Deutsch",
            "translations": [
                {"id": "vscode.git", "path": "./translations/extensions/vscode.git.i18n.json"}
            ]
        }]
    }
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ..utils.core.exceptions import ManifestError
from ..utils.fs.json_files import path_exists, read_json
from .models import (
    DeployedPlugin,
    PluginContributions,
    PluginLocalization,
    PluginModel,
    Translation,
)

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
DEFAULT_PUBLISHER = "undefined_publisher"


async def _read_object(path: Path, description: str) -> dict[str, object]:
    try:
        data = await read_json(path)
    except (OSError, ValueError) as e:
        raise ManifestError(f"Failed to read {description} {path}: {e}", context=path) from e

    if not isinstance(data, dict):
        raise ManifestError(
            f"{description.capitalize()} {path} must contain a JSON object, got {type(data).__name__}",
            context=path,
        )
    return data  # pyright: ignore[reportUnknownVariableType]


async def _resolve_translation(
    plugin_dir: Path, raw_translation: dict[str, object]
) -> Translation:
    """Load the contents of a translation that references a file."""
    translation_path = raw_translation.get("path")
    if isinstance(translation_path, str) and "contents" not in raw_translation:
        translation_file = (plugin_dir / translation_path).resolve()
        translation_data = await _read_object(translation_file, "translation file")
        contents = translation_data.get("contents", {})
        raw_translation = {**raw_translation, "contents": contents}

    return Translation.model_validate(raw_translation)


async def _read_localizations(
    plugin_dir: Path, raw_localizations: object
) -> list[PluginLocalization]:
    if not isinstance(raw_localizations, list):
        raise ManifestError(
            f"contributes.localizations of {plugin_dir} must be a list",
            context=plugin_dir,
        )

    localizations: list[PluginLocalization] = []
    for raw_localization in raw_localizations:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(raw_localization, dict):
            raise ManifestError(
                f"Invalid localization contribution in {plugin_dir}: {raw_localization!r}",
                context=plugin_dir,
            )
        raw_translations = raw_localization.get("translations", [])  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
        translations = [
            await _resolve_translation(plugin_dir, raw_translation)  # pyright: ignore[reportUnknownArgumentType]
            for raw_translation in raw_translations  # pyright: ignore[reportUnknownVariableType]
            if isinstance(raw_translation, dict)
        ]
        localizations.append(
            PluginLocalization.model_validate(
                {**raw_localization, "translations": translations}  # pyright: ignore[reportUnknownArgumentType]
            )
        )
    return localizations


async def read_plugin_manifest(plugin_dir: Path) -> DeployedPlugin:
    """
    Build the deployment metadata of a plugin from its directory.

    Args:
        plugin_dir: Root directory of the plugin

    Returns:
        DeployedPlugin with id ``publisher.name`` and a file URI package location

    Raises:
        ManifestError: If package.json or a referenced translation file is
            missing or malformed
    """
    plugin_dir = plugin_dir.resolve()
    manifest_path = plugin_dir / MANIFEST_FILE
    if not await path_exists(manifest_path):
        raise ManifestError(f"No {MANIFEST_FILE} found in {plugin_dir}", context=plugin_dir)

    manifest = await _read_object(manifest_path, "manifest")

    name = manifest.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"{manifest_path} has no 'name'", context=manifest_path)

    publisher = manifest.get("publisher")
    if not isinstance(publisher, str) or not publisher:
        publisher = DEFAULT_PUBLISHER

    version = manifest.get("version")

    contributes: PluginContributions | None = None
    raw_contributes = manifest.get("contributes")
    try:
        if isinstance(raw_contributes, dict) and "localizations" in raw_contributes:
            contributes = PluginContributions(
                localizations=await _read_localizations(
                    plugin_dir,
                    raw_contributes["localizations"],  # pyright: ignore[reportUnknownArgumentType]
                )
            )

        plugin = DeployedPlugin(
            model=PluginModel(
                id=f"{publisher}.{name}",
                name=name,
                publisher=publisher,
                version=version if isinstance(version, str) else "0.0.0",
                package_uri=plugin_dir.as_uri(),
            ),
            contributes=contributes,
        )
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {manifest_path}: {e}", context=manifest_path) from e

    logger.debug(f"Read manifest of plugin '{plugin.id}' from {plugin_dir}")
    return plugin
