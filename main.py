"""
Nexus Cache - category TTL cache service with TOML configuration.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from cachelib.logging_utils import initLogging
from cachelib.utils import jsonDumps
from nexus.config.manager import ConfigManager
from nexus.services.cache import CacheService

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)


class NexusCacheApp:
    """Wires configuration, logging and cache service together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize application with all components."""
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        self.cacheService = CacheService.fromConfigManager(self.configManager)

    async def _run(self) -> None:
        await self.cacheService.startSweeper()
        try:
            # Cache lives until the process is stopped
            await asyncio.Event().wait()
        finally:
            await self.cacheService.stopSweeper()
            for line in self.cacheService.formatStats():
                logger.info(line)

    def run(self) -> None:
        """Run sweeper until interrupted."""
        asyncio.run(self._run())


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Nexus Cache - category TTL cache service, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit, dood!",
    )
    args = parser.parse_args()
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration, dood!"""
    print("=== Nexus Cache Configuration ===")
    print()
    print(jsonDumps(configManager.config, indent=2))
    print()
    print("=== Configuration loaded successfully, dood! ===")


def main():
    """Main entry point."""
    args = parse_arguments()

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            sys.exit(0)

        app = NexusCacheApp(configPath=args.config, configDirs=args.config_dir)
        app.run()
    except KeyboardInterrupt:
        logger.info("Cache service stopped by user")
    except Exception as e:
        logger.error(f"Cache service crashed: {e}")
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
