"""Core cog: ping and the application command error handler."""
import time

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import helpers
from phoenix_bot.utils.errors import CharacterNotFound, PhoenixError
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.core")


def describe_error(error: Exception) -> str:
    """User-facing text for an application command error."""
    if isinstance(error, app_commands.CommandInvokeError):
        error = error.original
    if isinstance(error, CharacterNotFound):
        return "You haven't started your journey yet. Use `/start` first."
    if isinstance(error, PhoenixError):
        return str(error)
    if isinstance(error, app_commands.CommandOnCooldown):
        return f"Slow down! Try again in {error.retry_after:.0f}s."
    if isinstance(error, app_commands.CheckFailure):
        return "You are not allowed to use this command."
    return "An error occurred while processing your command."


class Core(commands.Cog):
    """Core commands: ping and uptime."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.start_time = time.time()
        self._previous_on_error = None

    async def cog_load(self) -> None:
        self._previous_on_error = self.bot.tree.on_error
        self.bot.tree.on_error = self.on_app_command_error

    async def cog_unload(self) -> None:
        if self._previous_on_error is not None:
            self.bot.tree.on_error = self._previous_on_error

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global app command error handler for user-friendly messages and logging."""
        original = error.original if isinstance(error, app_commands.CommandInvokeError) else error
        command = interaction.command.qualified_name if interaction.command else None
        if isinstance(original, (PhoenixError, app_commands.CheckFailure)):
            logger.info("/%s by %s: %s", command, interaction.user.id, original)
        else:
            logger.error("Unhandled error in /%s", command, exc_info=original)

        embed = helpers.error_embed(describe_error(error))
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException:
            logger.warning("Could not deliver error message for /%s", command)

    @commands.Cog.listener()
    async def on_ready(self):
        logger.info("Bot ready as %s (id: %s)", self.bot.user, self.bot.user.id)

    @app_commands.command(name="ping", description="Check bot latency")
    async def ping(self, interaction: discord.Interaction):
        latency = round(self.bot.latency * 1000)
        await interaction.response.send_message(embed=helpers.latency_embed(latency))

    @app_commands.command(name="uptime", description="How long the bot has been running")
    async def uptime(self, interaction: discord.Interaction):
        uptime = int(time.time() - self.start_time)
        await interaction.response.send_message(f"Uptime: {uptime}s")


async def setup(bot: commands.Bot):
    await bot.add_cog(Core(bot))
