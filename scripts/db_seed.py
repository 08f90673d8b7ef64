"""Seed the database with the sample ProductTrend and VisitorLog rows.

Creates the `product_trends` and `visitor_logs` tables if they do not exist,
then bulk-inserts the fixed sample rows from `trend_dashboard.seed`.
Running it twice inserts the rows twice.

Usage:
    python scripts/db_seed.py [--database-url URL]

Reads DATABASE_URL from the environment (or .env) when no URL is given.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on sys.path so the package imports without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trend_dashboard.config import get_settings
from trend_dashboard.database import create_engine
from trend_dashboard.exceptions import StoreUnavailable
from trend_dashboard.logging_config import setup_logging
from trend_dashboard.seed import seed_store
from trend_dashboard.store import SqlDashboardStore

logger = logging.getLogger("db_seed")


async def seed(database_url: Optional[str]) -> dict:
    settings = get_settings()
    store = SqlDashboardStore(create_engine(settings, url=database_url), auto_create=True)
    try:
        await store.open()
        return await seed_store(store)
    finally:
        await store.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--database-url", default=None, help="override DATABASE_URL")
    args = parser.parse_args(argv)

    setup_logging(get_settings())
    try:
        counts = asyncio.run(seed(args.database_url))
    except StoreUnavailable as e:
        logger.error("DB seed failed: %s", e.detail)
        return 1
    logger.info("DB seed complete: %s", counts)
    return 0


if __name__ == "__main__":
    sys.exit(main())
