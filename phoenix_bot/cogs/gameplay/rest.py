"""/rest: restore health and mana, once per cooldown."""
from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import helpers, persistence
from phoenix_bot.utils.persistence import CooldownType


class Rest(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="rest", description="Recover your health and mana")
    async def rest(self, interaction: discord.Interaction):
        user_id = interaction.user.id
        record = await persistence.require_character(user_id)

        if not record.can_rest():
            await interaction.response.send_message(embed=helpers.error_embed(
                f"You are not tired enough to rest ({record.health})."), ephemeral=True)
            return

        remaining = await persistence.cooldown_remaining(user_id, CooldownType.REST)
        if remaining > 0:
            await interaction.response.send_message(embed=helpers.error_embed(
                f"You rested recently. Try again in {helpers.format_remaining(remaining)}."), ephemeral=True)
            return

        record.rest()
        await persistence.save_character(record)
        await persistence.set_cooldown(user_id, CooldownType.REST, self.bot.settings.REST_COOLDOWN_MINUTES * 60)
        await interaction.response.send_message(embed=helpers.make_embed(
            f"{helpers.EMOJI['rest']} Rested",
            f"{helpers.EMOJI['health']} {record.health}\n{helpers.EMOJI['mana']} {record.mana}",
            helpers.COLOUR_SUCCESS))


async def setup(bot: commands.Bot):
    await bot.add_cog(Rest(bot))
