"""
Main entry point for plugin localization.

This module loads configuration, sets up logging, loads stand-alone language
packs into the localization provider and deploys localizations for every
plugin in the plugins folder.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config.manager import ConfigManager
from .config.schema import LoggingConfig, PluginLocalizationConfig
from .i18n.language_packs import register_language_packs
from .i18n.provider import LocalizationProvider
from .plugins.deployer import DeploymentResult, PluginDeployer
from .plugins.localization_service import BundleScanPolicy, PluginLocalizationService
from .utils.cli.args import ParsedArgs, PathValidationError, parse_arguments
from .utils.core.exceptions import ConfigurationError

LOG_FILES = ["plugin-localization.log", "plugin-localization-errors.log"]

EXIT_OK = 0
EXIT_DEPLOYMENT_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def rotate_logs_on_startup(logs_dir: Path) -> None:
    """
    Rotate existing log files on startup with timestamp-based naming.

    Args:
        logs_dir: Directory containing log files
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    for log_file in LOG_FILES:
        log_path = logs_dir / log_file
        if log_path.exists():
            backup_path = logs_dir / f"{log_file}.{timestamp}"
            try:
                _ = log_path.rename(backup_path)
            except OSError as e:
                print(f"Warning: Failed to rotate {log_file}: {e}", file=sys.stderr)


def cleanup_old_logs(logs_dir: Path, max_files: int = 10) -> None:
    """
    Clean up old timestamped log files, keeping only the most recent ones.

    Args:
        logs_dir: Directory containing log files
        max_files: Maximum number of timestamped log files to keep per type
    """
    for log_type in LOG_FILES:
        timestamped_files = [
            file_path
            for file_path in logs_dir.glob(f"{log_type}.*")
            if file_path.name != log_type
        ]

        # Newest first
        timestamped_files.sort(key=lambda x: x.stat().st_mtime, reverse=True)

        for file_path in timestamped_files[max_files:]:
            try:
                file_path.unlink()
            except OSError as e:
                print(f"Warning: Failed to remove {file_path.name}: {e}", file=sys.stderr)


def setup_logging(logs_dir: Path, logging_config: LoggingConfig) -> None:
    """
    Configure logging with rotation and multiple handlers.

    Sets up a detailed rotating log file, an error-only rotating log file
    and console output at the configured level.

    Args:
        logs_dir: Directory for log files
        logging_config: Logging section of the configuration
    """
    _ = logs_dir.mkdir(exist_ok=True, parents=True)

    rotate_logs_on_startup(logs_dir)
    cleanup_old_logs(logs_dir, max_files=logging_config.keep_session_logs)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    max_bytes = logging_config.max_file_size_mb * 1024 * 1024

    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / LOG_FILES[0],
        maxBytes=max_bytes,
        backupCount=logging_config.backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging_config.level)
    console_handler.setFormatter(simple_formatter)

    error_handler = logging.handlers.RotatingFileHandler(
        logs_dir / LOG_FILES[1],
        maxBytes=max_bytes,
        backupCount=logging_config.backup_count,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(error_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def apply_overrides(
    config: PluginLocalizationConfig, parsed_args: ParsedArgs
) -> PluginLocalizationConfig:
    """
    Apply command line overrides to a loaded configuration.

    Args:
        config: Configuration loaded from file or defaults
        parsed_args: Parsed command-line arguments

    Returns:
        A new configuration with overrides applied
    """
    updated = config.model_copy(deep=True)
    if parsed_args.plugins_folder is not None:
        updated.paths.plugins_folder = parsed_args.plugins_folder
    if parsed_args.language_packs_folder is not None:
        updated.paths.language_packs_folder = parsed_args.language_packs_folder
    if parsed_args.log_folder is not None:
        updated.paths.log_folder = parsed_args.log_folder
    if parsed_args.scan_policy is not None:
        updated.localization.scan_policy = BundleScanPolicy(parsed_args.scan_policy)
    return updated


def load_configuration(parsed_args: ParsedArgs) -> PluginLocalizationConfig:
    """
    Load the configuration file named on the command line and apply overrides.

    Raises:
        ConfigurationError: If the YAML file or its values are invalid
    """
    try:
        return apply_overrides(
            ConfigManager.load_config_or_default(parsed_args.config_file),
            parsed_args,
        )
    except (ValidationError, yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


def write_sample_config(sample_path: Path) -> int:
    """
    Write the documented sample configuration.

    Returns:
        Process exit code
    """
    try:
        ConfigManager.create_sample_config(sample_path)
    except OSError as e:
        print(f"Error: Failed to write sample configuration: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    print(f"Sample configuration written to {sample_path}")
    return EXIT_OK


async def deploy(
    config: PluginLocalizationConfig,
    provider: LocalizationProvider | None = None,
) -> DeploymentResult:
    """
    Run one localization deployment.

    Args:
        config: Validated configuration
        provider: Provider to use, a fresh one when omitted

    Returns:
        DeploymentResult with one status per discovered plugin
    """
    if provider is None:
        provider = LocalizationProvider()

    packs_folder = config.paths.language_packs_folder
    if packs_folder is not None:
        _ = await register_language_packs(provider, packs_folder)

    service = PluginLocalizationService(provider, config.localization.scan_policy)
    deployer = PluginDeployer(service)
    return await deployer.deploy_all(config.paths.plugins_folder)


async def main(args: list[str] | None = None) -> int:
    """
    Parse arguments, configure logging and deploy localizations.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        parsed_args = parse_arguments(args)
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    if parsed_args.create_sample_config is not None:
        return write_sample_config(parsed_args.create_sample_config)

    try:
        config = load_configuration(parsed_args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    setup_logging(config.paths.log_folder, config.logging)
    logger.info(f"Using configuration file: {parsed_args.config_file}")
    logger.info(f"Plugins folder: {config.paths.plugins_folder}")

    result = await deploy(config)
    if result.failure_count > 0:
        return EXIT_DEPLOYMENT_FAILED
    return EXIT_OK
