"""
Create the `words` table on the configured database.

Usage:
    python -m app.init_db

Reads the same environment as the web process (ENVIRONMENT, DATABASE_URL or
DB_*), so running it on the hosting platform targets the hosted database.
Safe to re-run: the table is only created if missing.
"""

import asyncio
import logging

from app.database import connection_config, create_schema, dispose_engine

logger = logging.getLogger(__name__)


async def main() -> None:
    logger.info("Creating schema (environment=%s)", connection_config.environment)
    try:
        await create_schema()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(main())
