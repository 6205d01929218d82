"""Create Filmorate tables and seed MPA/genre reference rows.

Usage: DATABASE_DSN=postgresql+psycopg://... python -m scripts.create_schema
"""

import asyncio

from filmorate_api.core.config import settings
from filmorate_api.db.postgres import close_engine, init_schema


async def main() -> None:
    print("Using DSN:", settings.database_dsn)
    try:
        await init_schema()
    finally:
        await close_engine()
    print("Schema ensured.")


if __name__ == "__main__":
    asyncio.run(main())
