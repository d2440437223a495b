"""/profile: show a character sheet."""
from __future__ import annotations

from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import helpers
from phoenix_bot.utils import persistence
from phoenix_bot.utils.characters import CharacterRecord
from phoenix_bot.utils.classes import get_class_by_type


def profile_embed(record: CharacterRecord, name: str, avatar_url: Optional[str] = None) -> discord.Embed:
    cls = get_class_by_type(record.class_type)
    journey = record.journey
    region = journey.current_region
    e = helpers.make_embed(f"{cls.emoji} {name}", f"{cls.name}, level {record.level}", helpers.COLOUR_INFO)
    e.add_field(name="Journey", value=(
        f"{region.emoji} {region.name}\n"
        f"{helpers.EMOJI['travel']} {helpers.format_distance(journey.total_traveled)} traveled, "
        f"{len(journey.region_history)} regions left behind"
    ), inline=False)
    e.add_field(name="Progress", value=(
        f"{helpers.EMOJI['level']} Level {record.level}\n"
        f"{helpers.EMOJI['xp']} XP {record.xp}/{record.xp_to_next_level}\n"
        f"{helpers.format_gold(record.gold)}"
    ), inline=True)
    e.add_field(name="Stats", value=(
        f"{helpers.EMOJI['health']} {record.health}\n"
        f"{helpers.EMOJI['mana']} {record.mana}\n"
        f"{helpers.EMOJI['strength']} {record.strength}\n"
        f"{helpers.EMOJI['agility']} {record.agility}\n"
        f"{helpers.EMOJI['intelligence']} {record.intelligence}"
    ), inline=True)
    if avatar_url:
        e.set_thumbnail(url=avatar_url)
    return e


class Profile(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="profile", description="Show your character")
    async def profile(self, interaction: discord.Interaction):
        record = await persistence.require_character(interaction.user.id)
        await interaction.response.send_message(
            embed=profile_embed(record, interaction.user.display_name, interaction.user.display_avatar.url))


async def setup(bot: commands.Bot):
    await bot.add_cog(Profile(bot))
