"""
Command-line argument parsing for plugin localization.

This module provides functionality for parsing command-line arguments
that select the configuration file and override configured folders.
"""

import argparse
from pathlib import Path
from typing import NamedTuple

from ...plugins.localization_service import BundleScanPolicy
from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    config_file: Path
    plugins_folder: Path | None
    language_packs_folder: Path | None
    log_folder: Path | None
    scan_policy: str | None
    create_sample_config: Path | None = None


class DefaultPaths:
    """Default paths for plugin localization."""

    CONFIG_FILE: Path = Path("config.yml")


SCAN_POLICIES = tuple(policy.value for policy in BundleScanPolicy)


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    The file itself may be missing, in which case defaults are used.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for plugin localization.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="plugin-localization",
        description="Generate translated NLS files for deployed plugins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  plugin-localization
    Use config.yml from the current directory (or defaults)

  plugin-localization --plugins-folder ~/.ide/plugins --language-packs-folder ./packs
    Localize the plugins in a custom folder

  plugin-localization --config-file /etc/ide/localization.yml --scan-policy all
    Localize every bundle and entry catalog

  plugin-localization --create-sample-config config.yml
    Write a documented sample configuration and exit
""",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=str(DefaultPaths.CONFIG_FILE),
        help="Path to the YAML configuration file (default: %(default)s). Defaults are used if it does not exist.",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--plugins-folder",
        type=str,
        default=None,
        help="Folder containing one subdirectory per plugin (overrides the configuration).",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--language-packs-folder",
        type=str,
        default=None,
        help="Folder with language pack JSON files (overrides the configuration).",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=None,
        help="Folder for log files (overrides the configuration).",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--scan-policy",
        choices=SCAN_POLICIES,
        default=None,
        help="Which NLS catalog files are localized (overrides the configuration).",
    )

    _ = parser.add_argument(
        "--create-sample-config",
        type=str,
        default=None,
        help="Write a documented sample configuration to PATH and exit.",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing fails or --help is requested
        PathValidationError: If path validation fails
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    config_file_str: str = getattr(parsed, "config_file", "")
    plugins_folder_str: str | None = getattr(parsed, "plugins_folder", None)
    packs_folder_str: str | None = getattr(parsed, "language_packs_folder", None)
    log_folder_str: str | None = getattr(parsed, "log_folder", None)
    scan_policy: str | None = getattr(parsed, "scan_policy", None)
    sample_config_str: str | None = getattr(parsed, "create_sample_config", None)

    return ParsedArgs(
        config_file=validate_config_file_path(config_file_str),
        plugins_folder=(
            validate_folder_path(plugins_folder_str, "plugins folder")
            if plugins_folder_str
            else None
        ),
        language_packs_folder=(
            validate_folder_path(packs_folder_str, "language packs folder")
            if packs_folder_str
            else None
        ),
        log_folder=(
            validate_folder_path(log_folder_str, "log folder")
            if log_folder_str
            else None
        ),
        scan_policy=scan_policy,
        create_sample_config=(
            validate_config_file_path(sample_config_str)
            if sample_config_str
            else None
        ),
    )
