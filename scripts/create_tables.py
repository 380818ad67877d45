"""Create all Cascade tables from the ORM metadata.

Usage:
    python -m scripts.create_tables
Reads DATABASE_URL from the environment / .env. Existing tables are left as-is.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.shared.telemetry.logging import setup_logging
from app.infrastructure.persistence import database
from app.infrastructure.persistence import models  # noqa: F401  (registers tables)


async def main() -> None:
    get_settings()
    setup_logging()
    database._ensure_engine()
    if database.engine is None:
        print("Database engine not configured", file=sys.stderr)
        sys.exit(1)
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    print(f"Created {len(database.Base.metadata.tables)} tables")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
