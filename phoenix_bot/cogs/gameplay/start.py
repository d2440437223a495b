"""/start: pick a class and create a character."""
from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import helpers
from phoenix_bot.utils import persistence
from phoenix_bot.utils.characters import CharacterRecord
from phoenix_bot.utils.classes import ALL_CLASSES, CharacterClass
from phoenix_bot.utils.views import ClassSelectView


def class_field(cls: CharacterClass) -> str:
    return (
        f"{cls.description}\n"
        f"{helpers.EMOJI['health']} {cls.health} {helpers.EMOJI['mana']} {cls.mana} "
        f"{helpers.EMOJI['strength']} {cls.strength} {helpers.EMOJI['agility']} {cls.agility} "
        f"{helpers.EMOJI['intelligence']} {cls.intelligence}"
    )


class Start(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="start", description="Start your journey by choosing a class")
    async def start(self, interaction: discord.Interaction):
        user = interaction.user
        if await persistence.is_registered(user.id):
            await interaction.response.send_message(
                embed=helpers.error_embed("You already have a character. Check it with `/profile`."), ephemeral=True)
            return

        embed = helpers.make_embed("Choose your class", "The flame of Phoenix needs a new bearer.",
                                   helpers.COLOUR_INFO)
        for cls in ALL_CLASSES:
            embed.add_field(name=f"{cls.emoji} {cls.name}", value=class_field(cls), inline=False)
        view = ClassSelectView(user.id, timeout=self.bot.settings.CLASS_SELECT_TIMEOUT)
        await interaction.response.send_message(embed=embed, view=view)
        await view.wait()

        if view.selected is None:
            await interaction.edit_original_response(
                embed=helpers.make_embed("Too slow", "No class chosen. Run `/start` again."), view=None)
            return

        record = CharacterRecord.from_class(str(user.id), view.selected)
        if not await persistence.register_character(record):
            await interaction.edit_original_response(
                embed=helpers.error_embed("You already have a character."), view=None)
            return
        region = record.journey.current_region
        await interaction.edit_original_response(
            embed=helpers.make_embed(
                f"{view.selected.emoji} Welcome, {view.selected.name}!",
                f"Your journey begins in {region.emoji} **{region.name}**. Use `/adventure` to set out.",
                helpers.COLOUR_SUCCESS,
            ),
            view=None,
        )


async def setup(bot: commands.Bot):
    await bot.add_cog(Start(bot))
