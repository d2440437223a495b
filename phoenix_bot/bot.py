"""Bot factory for Phoenix.

Creates the commands.Bot instance, loads every cog module found under
`phoenix_bot.cogs` and starts the health server.
"""
from typing import List, Optional
import asyncio
import pkgutil

import discord
from discord import Object
from discord.ext import commands

from .config import Settings
import phoenix_bot.cogs as cogs_pkg
from phoenix_bot.utils import db as db_utils
from phoenix_bot.utils.health import start_health_server
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.bot")


def discover_extensions() -> List[str]:
    """Dotted names of cog modules (modules exposing `setup`) under phoenix_bot.cogs."""
    names: List[str] = []
    for _, name, ispkg in pkgutil.walk_packages(cogs_pkg.__path__, prefix=f"{cogs_pkg.__name__}."):
        if not ispkg:
            names.append(name)
    return sorted(names)


class PhoenixBot(commands.Bot):
    def __init__(self, settings: Settings, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.settings = settings
        self._health_task: Optional[asyncio.Task] = None

    async def close(self) -> None:
        try:
            await super().close()
        finally:
            if self._health_task is not None:
                self._health_task.cancel()
            await db_utils.close_pool()

    async def setup_hook(self) -> None:
        if self.settings.DATABASE_URL:
            await db_utils.init_pool(self.settings.DATABASE_URL, min_size=self.settings.DB_POOL_MIN,
                                     max_size=self.settings.DB_POOL_MAX)
        else:
            logger.info("DATABASE_URL not set, using file-backed storage")

        for full in discover_extensions():
            try:
                await self.load_extension(full)
                logger.info("Loaded extension: %s", full)
            except commands.NoEntryPointError:
                logger.debug("Skipping %s: no setup()", full)
            except commands.ExtensionFailed:
                logger.exception("Failed to load extension %s", full)

        # Sync to dev guild for faster iteration when configured
        dev_guild = self.settings.DEV_GUILD_ID
        try:
            if dev_guild:
                guild_obj = Object(id=int(dev_guild))
                self.tree.copy_global_to(guild=guild_obj)
                await self.tree.sync(guild=guild_obj)
                logger.info("Synced app commands to dev guild %s", dev_guild)
            else:
                await self.tree.sync()
        except discord.HTTPException:
            logger.exception("Failed to sync app commands")

        self._health_task = asyncio.create_task(
            start_health_server(host=self.settings.HEALTH_HOST, port=self.settings.HEALTH_PORT,
                                ready_probe=self.is_ready)
        )


def create_bot(settings: Optional[Settings] = None) -> PhoenixBot:
    """Create and return a configured PhoenixBot instance."""
    if settings is None:
        settings = Settings()

    intents = discord.Intents.default()
    return PhoenixBot(settings, command_prefix=commands.when_mentioned, intents=intents,
                      owner_id=settings.OWNER_ID)
