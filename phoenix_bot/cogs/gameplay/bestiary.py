"""/bestiary: anomalies met so far with win/loss counters."""
from __future__ import annotations

from typing import List

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import helpers, persistence
from phoenix_bot.utils.anomalies import get_anomaly_from_type
from phoenix_bot.utils.characters import BestiaryEntry
from phoenix_bot.utils.views import PaginationView


def bestiary_page(entry: BestiaryEntry) -> discord.Embed:
    anomaly = get_anomaly_from_type(entry.anomaly)
    regions = ", ".join(sorted(f"{r.emoji} {r.label}" for r in anomaly.definition.valid_regions))
    e = helpers.make_embed(anomaly.name, f"Found in: {regions}", helpers.COLOUR_INFO)
    e.add_field(name="Record", value=f"{helpers.EMOJI['victory']} {entry.wins} wins\n"
                                      f"{helpers.EMOJI['defeat']} {entry.losses} losses", inline=True)
    e.add_field(name="Base stats", value=(
        f"{helpers.EMOJI['health']} {anomaly.health}\n"
        f"{helpers.EMOJI['mana']} {anomaly.mana}\n"
        f"{helpers.EMOJI['strength']} {anomaly.strength}\n"
        f"{helpers.EMOJI['agility']} {anomaly.agility}\n"
        f"{helpers.EMOJI['intelligence']} {anomaly.intelligence}"
    ), inline=True)
    e.set_thumbnail(url=anomaly.image)
    return e


def bestiary_pages(entries: List[BestiaryEntry]) -> List[discord.Embed]:
    return [bestiary_page(entry) for entry in entries]


class Bestiary(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="bestiary", description="Browse the anomalies you have faced")
    async def bestiary(self, interaction: discord.Interaction):
        record = await persistence.require_character(interaction.user.id)
        if not record.bestiary:
            await interaction.response.send_message(embed=helpers.make_embed(
                "Bestiary", "You haven't met any anomaly yet. Try `/adventure`."), ephemeral=True)
            return
        view = PaginationView(interaction.user.id, bestiary_pages(record.bestiary))
        await interaction.response.send_message(embed=view.current, view=view)


async def setup(bot: commands.Bot):
    await bot.add_cog(Bestiary(bot))
