from __future__ import annotations

import asyncio
from pathlib import Path
import asyncpg

from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.migrations")

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"


async def apply_migrations(dsn: str, migrations_dir: Path = MIGRATIONS_DIR) -> int:
    """Apply .sql migration files (ordered by filename) to the given Postgres DSN.

    Every file uses ``CREATE ... IF NOT EXISTS`` so re-running is harmless.
    Returns the number of files applied.
    """
    mig_path = Path(migrations_dir)
    if not mig_path.exists():
        logger.info("No migrations directory found, skipping migrations.")
        return 0

    files = sorted(p for p in mig_path.iterdir() if p.suffix == ".sql")
    if not files:
        logger.info("No SQL migration files found, skipping.")
        return 0

    conn = await asyncpg.connect(dsn)
    try:
        for f in files:
            logger.info("Applying migration: %s", f.name)
            await conn.execute(f.read_text(encoding="utf-8"))
    finally:
        await conn.close()
    return len(files)


if __name__ == "__main__":
    import os
    dsn = os.getenv("DATABASE_URL")
    if not dsn:
        logger.error("DATABASE_URL not set; cannot run migrations.")
    else:
        asyncio.run(apply_migrations(dsn))
