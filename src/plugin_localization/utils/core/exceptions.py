"""
Basic exception classes for plugin localization.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

import json
from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    FILESYSTEM = "filesystem"
    MANIFEST = "manifest"
    LANGUAGE_PACK = "language_pack"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class PluginLocalizationError(Exception):
    """Base exception class for plugin localization specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.context: object | None = context


class ManifestError(PluginLocalizationError):
    """A plugin's package.json or one of its translation files is unusable."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(message, category=ErrorCategory.MANIFEST, context=context)


class LanguagePackError(PluginLocalizationError):
    """A stand-alone language pack file could not be loaded."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(message, category=ErrorCategory.LANGUAGE_PACK, context=context)


class ConfigurationError(PluginLocalizationError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(message, category=ErrorCategory.CONFIGURATION, context=context)


def classify_error(error: BaseException) -> ErrorCategory:
    """
    Map an exception raised during deployment to an error category.

    Args:
        error: The exception to classify

    Returns:
        The matching ErrorCategory, UNKNOWN when nothing fits
    """
    match error:
        case PluginLocalizationError():
            return error.category
        case OSError() | json.JSONDecodeError():
            return ErrorCategory.FILESYSTEM
        case _:
            return ErrorCategory.UNKNOWN
