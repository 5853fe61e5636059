"""Plugin metadata, manifest reading and localization deployment."""

from .deployer import DeploymentResult, DeploymentStatus, PluginDeployer
from .localization_service import BundleScanPolicy, PluginLocalizationService
from .manifest import read_plugin_manifest
from .models import DeployedPlugin, PluginLocalization, PluginModel, Translation

__all__ = [
    "BundleScanPolicy",
    "DeployedPlugin",
    "DeploymentResult",
    "DeploymentStatus",
    "PluginDeployer",
    "PluginLocalization",
    "PluginLocalizationService",
    "PluginModel",
    "Translation",
    "read_plugin_manifest",
]
