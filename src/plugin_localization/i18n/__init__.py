"""Localization objects, key helpers and the in-process provider."""

from .localization import (
    Localization,
    build_translation_key,
    check_language_id,
    localize,
    transform_key,
)
from .provider import LocalizationProvider

__all__ = [
    "Localization",
    "LocalizationProvider",
    "build_translation_key",
    "check_language_id",
    "localize",
    "transform_key",
]
