"""Main entry point for the Phoenix bot.

Applies SQL migrations when a database is configured, then starts the bot.
"""
import asyncio
from pathlib import Path

from phoenix_bot.config import Settings
from phoenix_bot.bot import create_bot
from phoenix_bot.utils.logger import setup_logging


def main() -> None:
    settings = Settings()
    logger = setup_logging(settings.LOG_LEVEL, Path("logs") / "phoenix.log" if settings.DEV_MODE else None)

    missing = settings.validate()
    if missing:
        logger.error("Missing %s in environment or .env. See .env.example", ", ".join(missing))
        return

    if settings.DATABASE_URL:
        from scripts.run_migrations import apply_migrations

        applied = asyncio.run(apply_migrations(settings.DATABASE_URL))
        logger.info("Applied %d migration file(s)", applied)
    else:
        logger.info("DATABASE_URL not set: characters are stored as JSON files")

    bot = create_bot(settings)
    bot.run(settings.TOKEN, log_handler=None)


if __name__ == "__main__":
    main()
