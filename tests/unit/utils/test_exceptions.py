"""Tests for the exception hierarchy and error classification."""

import json

import pytest

from src.plugin_localization.utils.core.exceptions import (
    ConfigurationError,
    ErrorCategory,
    LanguagePackError,
    ManifestError,
    PluginLocalizationError,
    classify_error,
)


class TestExceptionHierarchy:
    """Test exception attributes."""

    def test_base_defaults(self) -> None:
        error = PluginLocalizationError("boom")

        assert str(error) == "boom"
        assert error.category == ErrorCategory.UNKNOWN
        assert error.context is None

    @pytest.mark.parametrize(
        ("error_class", "category"),
        [
            (ManifestError, ErrorCategory.MANIFEST),
            (LanguagePackError, ErrorCategory.LANGUAGE_PACK),
            (ConfigurationError, ErrorCategory.CONFIGURATION),
        ],
    )
    def test_subclass_categories(
        self,
        error_class: type[PluginLocalizationError],
        category: ErrorCategory,
    ) -> None:
        error = error_class("failed", context="somewhere")  # pyright: ignore[reportCallIssue]

        assert isinstance(error, PluginLocalizationError)
        assert error.category == category
        assert error.context == "somewhere"


class TestClassifyError:
    """Test mapping of exceptions to categories."""

    def test_own_errors_keep_category(self) -> None:
        assert classify_error(ManifestError("x")) == ErrorCategory.MANIFEST

    def test_filesystem_errors(self) -> None:
        assert classify_error(FileNotFoundError("x")) == ErrorCategory.FILESYSTEM
        assert classify_error(PermissionError("x")) == ErrorCategory.FILESYSTEM
        assert classify_error(json.JSONDecodeError("bad", "{", 0)) == ErrorCategory.FILESYSTEM

    def test_other_errors(self) -> None:
        assert classify_error(RuntimeError("x")) == ErrorCategory.UNKNOWN
        assert classify_error(KeyError("x")) == ErrorCategory.UNKNOWN
