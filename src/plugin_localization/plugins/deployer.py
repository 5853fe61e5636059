"""
Localization deployment for a folder of plugins.

This module discovers plugin directories, registers the language packs they
contribute and then localizes each plugin, reporting a status per plugin so
that one broken plugin never blocks the others.
"""

import logging
from pathlib import Path
from typing import NamedTuple, override

from ..utils.core.exceptions import ErrorCategory, classify_error
from .localization_service import PluginLocalizationService
from .manifest import MANIFEST_FILE, read_plugin_manifest
from .models import DeployedPlugin

logger = logging.getLogger(__name__)


class DeploymentStatus(NamedTuple):
    """Status information for a plugin."""

    name: str
    deployed: bool
    error: str | None = None
    category: ErrorCategory | None = None


class DeploymentResult:
    """Result of deploying localizations for a set of plugins."""

    def __init__(self) -> None:
        self.statuses: list[DeploymentStatus] = []

    @property
    def deployed_count(self) -> int:
        """Number of successfully localized plugins."""
        return sum(1 for status in self.statuses if status.deployed)

    @property
    def failure_count(self) -> int:
        """Number of plugins that failed at any stage."""
        return len(self.statuses) - self.deployed_count

    @property
    def failed(self) -> list[DeploymentStatus]:
        """Statuses of failed plugins."""
        return [status for status in self.statuses if not status.deployed]

    @override
    def __str__(self) -> str:
        return (
            f"Localization deployment: "
            f"{self.deployed_count} deployed, "
            f"{self.failure_count} failed"
        )


class PluginDeployer:
    """
    Drives the localization service over every plugin in a folder.

    Language packs of all plugins are registered before any plugin is
    localized, so a language pack plugin also serves the plugins deployed
    alongside it.
    """

    def __init__(self, localization_service: PluginLocalizationService) -> None:
        """
        Initialize the deployer.

        Args:
            localization_service: Service that registers packs and writes NLS files
        """
        self.localization_service: PluginLocalizationService = localization_service

    def discover_plugins(self, plugins_dir: Path) -> list[Path]:
        """
        Find plugin directories.

        Args:
            plugins_dir: Folder whose direct subdirectories are plugins

        Returns:
            Sorted plugin directories that contain a package.json
        """
        if not plugins_dir.is_dir():
            logger.warning(f"Plugins directory not found: {plugins_dir}")
            return []

        plugin_dirs = sorted(
            child
            for child in plugins_dir.iterdir()
            if child.is_dir() and (child / MANIFEST_FILE).is_file()
        )
        logger.debug(f"Discovered {len(plugin_dirs)} plugins in {plugins_dir}")
        return plugin_dirs

    async def read_plugin_safe(
        self, plugin_dir: Path
    ) -> DeployedPlugin | DeploymentStatus:
        """Read a manifest, turning failures into a failed DeploymentStatus."""
        try:
            return await read_plugin_manifest(plugin_dir)
        except Exception as e:
            error_msg = f"Failed to read plugin manifest: {e}"
            logger.error(error_msg)
            return DeploymentStatus(plugin_dir.name, False, error_msg, classify_error(e))

    def register_plugin_safe(self, plugin: DeployedPlugin) -> DeploymentStatus | None:
        """
        Register a plugin's language packs.

        Returns:
            A failed DeploymentStatus, or None when registration succeeded
        """
        try:
            self.localization_service.deploy_localizations(plugin)
            return None
        except Exception as e:
            error_msg = f"Failed to register language packs: {e}"
            logger.exception(f"{error_msg} (plugin '{plugin.id}')")
            return DeploymentStatus(plugin.id, False, error_msg, classify_error(e))

    async def deploy_plugins(self, plugins: list[DeployedPlugin]) -> DeploymentResult:
        """
        Register and localize already loaded plugins.

        Args:
            plugins: Plugins handed over by the deployment pipeline

        Returns:
            DeploymentResult with one status per plugin
        """
        result = DeploymentResult()

        registered: list[DeployedPlugin] = []
        for plugin in plugins:
            failure = self.register_plugin_safe(plugin)
            if failure is None:
                registered.append(plugin)
            else:
                result.statuses.append(failure)

        for plugin in registered:
            if await self.localization_service.localize_plugin(plugin):
                result.statuses.append(DeploymentStatus(plugin.id, True))
            else:
                result.statuses.append(
                    DeploymentStatus(plugin.id, False, "Localization failed, see log")
                )

        return result

    async def deploy_all(self, plugins_dir: Path) -> DeploymentResult:
        """
        Deploy localizations for every plugin in a folder.

        Args:
            plugins_dir: Folder holding one subdirectory per plugin

        Returns:
            DeploymentResult including manifest read failures
        """
        plugin_dirs = self.discover_plugins(plugins_dir)
        logger.info(f"Deploying localizations for {len(plugin_dirs)} plugins...")

        plugins: list[DeployedPlugin] = []
        read_failures: list[DeploymentStatus] = []
        for plugin_dir in plugin_dirs:
            outcome = await self.read_plugin_safe(plugin_dir)
            if isinstance(outcome, DeploymentStatus):
                read_failures.append(outcome)
            else:
                plugins.append(outcome)

        result = await self.deploy_plugins(plugins)
        result.statuses[:0] = read_failures

        logger.info(str(result))
        if result.failure_count > 0:
            failed_names = [status.name for status in result.failed]
            logger.warning(f"Failed plugins: {failed_names}")

        return result
