"""
Plugin localization - generates translated NLS files for deployed IDE plugins.
"""

import asyncio
import logging
import sys

from .main import main as async_main


def main() -> None:
    """Synchronous entry point that runs the async main function."""
    try:
        exit_code = asyncio.run(async_main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Localization deployment interrupted by user")
        exit_code = 130
    sys.exit(exit_code)


__all__ = ["main"]
