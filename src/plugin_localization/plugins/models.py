"""
Plugin metadata and NLS file shapes.

The pydantic models describe what the deployment pipeline knows about a
plugin. The TypedDicts describe the JSON catalogs found inside a plugin's
directory tree.
"""

from typing import ClassVar, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..i18n.localization import check_language_id


class _CamelModel(BaseModel):
    """Base model reading and writing camelCase JSON keys."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Translation(_CamelModel):
    """Translated strings for one plugin, grouped by scope."""

    id: str = Field(..., min_length=1, description="Id of the plugin the strings belong to")
    path: str | None = Field(
        default=None,
        description="Translation file the contents were read from, relative to the plugin root",
    )
    contents: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Scope -> key -> translated string",
    )


class PluginLocalization(_CamelModel):
    """A language pack contributed by a plugin."""

    language_id: str = Field(..., min_length=1)
    language_name: str | None = None
    localized_language_name: str | None = None
    translations: list[Translation] = Field(default_factory=list)

    @field_validator("language_id")
    @classmethod
    def validate_language_id(cls, value: str) -> str:
        return check_language_id(value)


class PluginContributions(_CamelModel):
    """Contribution points relevant to localization."""

    localizations: list[PluginLocalization] | None = None


class PluginModel(_CamelModel):
    """Identity and location of a deployed plugin."""

    id: str = Field(..., min_length=1, description="Plugin id, usually publisher.name")
    name: str = Field(..., min_length=1)
    publisher: str = Field(default="undefined_publisher")
    version: str = Field(default="0.0.0")
    package_uri: str = Field(..., min_length=1, description="URI of the plugin root directory")


class DeployedPlugin(_CamelModel):
    """A plugin handed to the localization service by the deployment pipeline."""

    model: PluginModel
    contributes: PluginContributions | None = None

    @property
    def id(self) -> str:
        """Shortcut for model.id."""
        return self.model.id

    @property
    def localizations(self) -> list[PluginLocalization]:
        """Contributed language packs, empty when the plugin declares none."""
        if self.contributes is None or not self.contributes.localizations:
            return []
        return self.contributes.localizations


class LocalizationBundleEntry(TypedDict):
    """One source file's strings inside nls.metadata.json."""

    keys: list[str]
    messages: list[str]


class LocalizationEntry(LocalizationBundleEntry):
    """Content of a per-file ``*.nls.metadata.json``."""

    filePath: str


LocalizationBundle = dict[str, LocalizationBundleEntry]
"""Content of nls.metadata.json: file key -> entry."""
