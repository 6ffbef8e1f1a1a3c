"""
Create the query and report tables.

Run with --reset to drop existing tables first (development only).
"""

import argparse
import asyncio

from backend.app.core.config import settings
from backend.app.db.base import engine, Base
# Import all models to register them
from backend.app.models.query import Query
from backend.app.models.report import Report


async def init_db(reset: bool = False) -> None:
    """Create all tables, optionally dropping them first."""
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

    action = "Recreated" if reset else "Created"
    print(f"{action} tables {', '.join(sorted(Base.metadata.tables))} in {settings.database_url}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="Drop existing tables before creating them")
    args = parser.parse_args()

    asyncio.run(init_db(reset=args.reset))
