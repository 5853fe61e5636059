"""Tests for the configuration schema."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.plugin_localization.config.schema import (
    LocalizationConfig,
    LoggingConfig,
    PathsConfig,
    PluginLocalizationConfig,
)
from src.plugin_localization.plugins.localization_service import BundleScanPolicy


class TestDefaults:
    """Test default values of every section."""

    def test_default_config(self) -> None:
        config = PluginLocalizationConfig()

        assert config.paths.plugins_folder == Path("plugins")
        assert config.paths.language_packs_folder == Path("language-packs")
        assert config.paths.log_folder == Path("logs")
        assert config.localization.scan_policy is BundleScanPolicy.BUNDLE_ONLY
        assert config.logging.level == "INFO"
        assert config.logging.max_file_size_mb == 5
        assert config.logging.backup_count == 5
        assert config.logging.keep_session_logs == 10


class TestPathsConfig:
    """Test path handling."""

    def test_expands_user(self) -> None:
        """Test that a leading ~ is expanded."""
        config = PathsConfig.model_validate({"plugins_folder": "~/plugins"})

        assert config.plugins_folder == Path("~/plugins").expanduser()
        assert "~" not in str(config.plugins_folder)

    def test_language_packs_can_be_disabled(self) -> None:
        config = PathsConfig.model_validate({"language_packs_folder": None})

        assert config.language_packs_folder is None


class TestLocalizationConfig:
    """Test localization settings."""

    @pytest.mark.parametrize("policy", ["first_bundle", "bundle_only", "all"])
    def test_valid_policies(self, policy: str) -> None:
        assert LocalizationConfig.model_validate({"scan_policy": policy}).scan_policy.value == policy

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValidationError):
            _ = LocalizationConfig.model_validate({"scan_policy": "bundles"})


class TestLoggingConfig:
    """Test logging settings."""

    def test_level_is_upper_cased(self) -> None:
        assert LoggingConfig.model_validate({"level": "warning"}).level == "WARNING"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            _ = LoggingConfig.model_validate({"level": "VERBOSE"})

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("max_file_size_mb", 0),
            ("max_file_size_mb", 101),
            ("backup_count", -1),
            ("backup_count", 51),
            ("keep_session_logs", 101),
        ],
    )
    def test_out_of_range(self, field: str, value: int) -> None:
        with pytest.raises(ValidationError):
            _ = LoggingConfig.model_validate({field: value})


class TestPluginLocalizationConfig:
    """Test the root model."""

    def test_extra_keys_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            _ = PluginLocalizationConfig.model_validate({"services": {}})

    def test_validate_assignment(self, base_config: PluginLocalizationConfig) -> None:
        """Test that section assignments are validated."""
        with pytest.raises(ValidationError):
            base_config.logging = "loud"  # pyright: ignore[reportAttributeAccessIssue]
