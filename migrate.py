#!/usr/bin/env python3
"""
Database schema management script.
Creates, drops, resets, and checks the LightBnB tables on the configured database.
"""

import asyncio
import sys
import argparse
import logging
from typing import Optional

from lightbnb.config import Settings, get_settings
from lightbnb.database import StoreHandle

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class MigrationManager:
    """Manages the LightBnB schema on the configured database."""

    def __init__(self, settings: Optional[Settings] = None, store: Optional[StoreHandle] = None):
        self.settings = settings or get_settings()
        self.store = store or StoreHandle.from_settings(self.settings)

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        logger.info("Creating LightBnB tables")
        await self.store.create_schema()

    async def drop_schema(self) -> None:
        """Drop all tables."""
        logger.warning("Dropping LightBnB tables - all data will be lost!")
        await self.store.drop_schema()

    async def reset_schema(self) -> None:
        """Reset the database by dropping and recreating all tables."""
        if not self.settings.is_development and not self.settings.is_testing:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await self.drop_schema()
        await self.create_schema()
        logger.info("Database reset completed")

    async def check_connection(self) -> dict:
        """Open the store and report the server version and pool status."""
        await self.store.open()
        info = await self.store.get_database_info()
        logger.info(f"Database version: {info['database_version']}")
        logger.info(f"Pool status: {info['pool_status']}")
        return info

    async def run(self, command: str) -> None:
        try:
            if command == "create":
                await self.create_schema()
            elif command == "drop":
                await self.drop_schema()
            elif command == "reset":
                await self.reset_schema()
            elif command == "check":
                await self.check_connection()
            else:
                raise ValueError(f"Unknown command: {command}")
        finally:
            await self.store.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LightBnB schema management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    drop_parser = subparsers.add_parser("drop", help="Drop all tables")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("check", help="Check database connectivity")
    return parser


def main(argv=None) -> int:
    """Main CLI interface for schema management."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command in ("drop", "reset") and not args.confirm:
        print(f"Database {args.command} requires --confirm flag")
        return 1

    manager = MigrationManager()

    try:
        asyncio.run(manager.run(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
