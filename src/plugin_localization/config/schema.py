"""Configuration schema for plugin localization using nested Pydantic models."""

from pathlib import Path
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..plugins.localization_service import BundleScanPolicy


class PathsConfig(BaseModel):
    """Filesystem locations used by the deployment run."""

    plugins_folder: Path = Field(
        default=Path("plugins"),
        description="Folder whose subdirectories are deployed plugins",
    )
    language_packs_folder: Path | None = Field(
        default=Path("language-packs"),
        description="Folder with stand-alone language pack JSON files, or null to disable",
    )
    log_folder: Path = Field(
        default=Path("logs"),
        description="Folder for log files",
    )

    @field_validator("plugins_folder", "language_packs_folder", "log_folder")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand a leading ~ in configured paths."""
        return v.expanduser() if v is not None else None


class LocalizationConfig(BaseModel):
    """Localization generation settings."""

    scan_policy: BundleScanPolicy = Field(
        default=BundleScanPolicy.BUNDLE_ONLY,
        description=(
            "Which nls.metadata.json / *.nls.metadata.json files are localized: "
            "first_bundle (entries until the first bundle), bundle_only "
            "(a single bundle if present, otherwise all entries) or all"
        ),
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Console log level",
    )
    max_file_size_mb: Annotated[int, Field(ge=1, le=100)] = Field(
        default=5,
        description="Size in MB at which log files are rotated",
    )
    backup_count: Annotated[int, Field(ge=0, le=50)] = Field(
        default=5,
        description="Number of size-rotated log files to keep",
    )
    keep_session_logs: Annotated[int, Field(ge=0, le=100)] = Field(
        default=10,
        description="Number of logs from previous runs to keep",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class PluginLocalizationConfig(BaseModel):
    """
    Configuration model for plugin localization with nested structure.

    Every section has defaults, so an empty configuration file is valid.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    localization: LocalizationConfig = Field(default_factory=LocalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
