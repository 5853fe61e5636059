"""
In-process localization provider.

The provider is the registry of every language pack known to the deployment
host. Several packs may target the same language (for example a core pack plus
packs contributed by individual plugins); load_localization() merges them into
one Localization and keeps the merged object until another pack for that
language is added.
"""

import logging
import threading

from .localization import Localization

logger = logging.getLogger(__name__)


class LocalizationProvider:
    """
    Registry of language packs with per-language merged lookups.

    All public methods are safe to call from several threads.
    """

    def __init__(self) -> None:
        """Initialize an empty provider."""
        self._localizations: list[Localization] = []
        self._merged: dict[str, Localization] = {}
        self._lock: threading.RLock = threading.RLock()

    def add_localizations(self, *localizations: Localization) -> None:
        """
        Register one or more localizations.

        Args:
            *localizations: Localizations to add, in priority order (later wins)
        """
        with self._lock:
            for localization in localizations:
                self._localizations.append(localization)
                _ = self._merged.pop(localization.language_id, None)

        if localizations:
            languages = sorted({loc.language_id for loc in localizations})
            logger.debug(
                f"Registered {len(localizations)} localization(s) for: {', '.join(languages)}"
            )

    def get_available_languages(self, include_all: bool = False) -> list[str]:
        """
        Get the language ids that translations can be generated for.

        Args:
            include_all: Also report languages that only have non language-pack
                localizations registered

        Returns:
            Unique language ids in registration order
        """
        with self._lock:
            languages: list[str] = []
            for localization in self._localizations:
                if not include_all and not localization.language_pack:
                    continue
                if localization.language_id not in languages:
                    languages.append(localization.language_id)
            return languages

    def load_localization(self, language_id: str) -> Localization:
        """
        Get the merged localization for a language.

        Unknown languages yield an empty Localization, which makes every
        lookup fall back to its default value.

        Args:
            language_id: Language to load

        Returns:
            Localization combining every registered pack for the language
        """
        with self._lock:
            cached = self._merged.get(language_id)
            if cached is not None:
                return cached

            merged = Localization(language_id=language_id)
            for localization in self._localizations:
                if localization.language_id != language_id:
                    continue
                merged.language_name = localization.language_name or merged.language_name
                merged.localized_language_name = (
                    localization.localized_language_name
                    or merged.localized_language_name
                )
                merged.language_pack = merged.language_pack or localization.language_pack
                merged.translations.update(localization.translations)

            self._merged[language_id] = merged
            logger.debug(
                f"Loaded localization for {language_id} with {len(merged.translations)} translations"
            )
            return merged
