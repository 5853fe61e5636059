"""
Localization objects and translation key helpers.

A Localization maps flat translation keys of the form
``{pluginId}/{scope}/{key}`` to localized strings for one language. The
scope part always goes through transform_key(), both when language packs are
registered and when plugin files are localized, so the two sides agree on the
exact key.
"""

import re
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_KEY_SEPARATORS = re.compile(r"[\\/.]")


def check_language_id(language_id: str) -> str:
    """
    Validate a language id that ends up in generated file names.

    Raises:
        ValueError: If the id contains a path separator or is a relative
            directory reference
    """
    if "/" in language_id or "\\" in language_id or language_id in {".", ".."}:
        raise ValueError(f"Invalid language id {language_id!r}")
    return language_id


class Localization(BaseModel):
    """Translations for a single language."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    language_id: str = Field(..., min_length=1)
    language_name: str | None = None
    localized_language_name: str | None = None
    language_pack: bool = False
    translations: dict[str, str] = Field(default_factory=dict)

    @field_validator("language_id")
    @classmethod
    def validate_language_id(cls, value: str) -> str:
        return check_language_id(value)


def transform_key(key: str) -> str:
    """
    Turn a scope or relative file path into a single translation key segment.

    Path separators and dots are replaced with underscores, so
    ``src/a.ts`` and ``src\\a.ts`` both become ``src_a_ts``. Applying the
    transform to its own output returns the output unchanged.
    """
    return _KEY_SEPARATORS.sub("_", key)


def build_translation_key(plugin_id: str, scope: str, key: str) -> str:
    """Build the ``{pluginId}/{scope}/{key}`` lookup key for one string."""
    return f"{plugin_id}/{transform_key(scope)}/{key}"


def localize(
    localization: Localization | None,
    key: str,
    default_value: str | None,
) -> str | None:
    """
    Look up a translation, falling back to the default value.

    Empty translations count as missing. A default of None (an NLS entry with
    fewer messages than keys) is passed through as None.

    Args:
        localization: Loaded localization, or None when no language is active
        key: Full translation key
        default_value: Original string used when no translation exists

    Returns:
        The translated or default string
    """
    if localization is not None:
        translation = localization.translations.get(key)
        if translation:
            return translation
    return default_value
