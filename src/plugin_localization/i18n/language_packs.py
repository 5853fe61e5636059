"""
Loading of stand-alone language pack files.

A language pack file is a JSON document in the Localization shape::

    {
        "languageId": "de",
        "languageName": "German",
        "localizedLanguageName": "Deutsch",
        "translations": {"publisher.plugin/package/title": "Titel"}
    }

Packs loaded from disk are always flagged as language packs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ..utils.core.exceptions import LanguagePackError
from ..utils.fs.json_files import read_json
from .localization import Localization
from .provider import LocalizationProvider

logger = logging.getLogger(__name__)


async def load_language_pack(pack_file: Path) -> Localization:
    """
    Load a single language pack file.

    Args:
        pack_file: Path to the JSON file

    Returns:
        The parsed Localization

    Raises:
        LanguagePackError: If the file cannot be read or has the wrong shape
    """
    try:
        data = await read_json(pack_file)
    except (OSError, ValueError) as e:
        raise LanguagePackError(
            f"Failed to read language pack {pack_file}: {e}", context=pack_file
        ) from e

    if not isinstance(data, dict):
        raise LanguagePackError(
            f"Language pack {pack_file} must contain a JSON object, got {type(data).__name__}",
            context=pack_file,
        )

    try:
        localization = Localization.model_validate(data)
    except ValidationError as e:
        raise LanguagePackError(
            f"Invalid language pack {pack_file}: {e}", context=pack_file
        ) from e

    localization.language_pack = True
    return localization


async def load_language_packs(packs_dir: Path) -> list[Localization]:
    """
    Load every ``*.json`` language pack in a directory.

    Files that fail to load are logged and skipped.

    Args:
        packs_dir: Directory holding the pack files

    Returns:
        Loaded localizations sorted by file name
    """
    if not packs_dir.is_dir():
        logger.warning(f"Language packs directory does not exist: {packs_dir}")
        return []

    localizations: list[Localization] = []
    for pack_file in sorted(packs_dir.glob("*.json")):
        try:
            localizations.append(await load_language_pack(pack_file))
        except LanguagePackError as e:
            logger.error(str(e))

    logger.info(f"Loaded {len(localizations)} language pack(s) from {packs_dir}")
    return localizations


async def register_language_packs(
    provider: LocalizationProvider, packs_dir: Path
) -> list[Localization]:
    """Load the packs in packs_dir and add them to the provider."""
    localizations = await load_language_packs(packs_dir)
    if localizations:
        provider.add_localizations(*localizations)
    return localizations
