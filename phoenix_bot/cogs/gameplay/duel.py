"""/duel: friendly PvP between two registered players. Nothing is saved."""
from __future__ import annotations

import asyncio

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import battle_logs, battle_renderer, helpers, persistence
from phoenix_bot.utils.battle_engine import Battle
from phoenix_bot.utils.battle_session import play_battle, send_history
from phoenix_bot.utils.errors import ActionTimeout
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.views import ConfirmView


class Duel(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="duel", description="Challenge another player to a friendly duel")
    @app_commands.describe(opponent="Who you want to fight")
    async def duel(self, interaction: discord.Interaction, opponent: discord.Member):
        settings = self.bot.settings
        challenger = interaction.user
        if opponent.id == challenger.id or opponent.bot:
            await interaction.response.send_message(embed=helpers.error_embed("Pick another player to duel."),
                                                    ephemeral=True)
            return

        own_record = await persistence.require_character(challenger.id)
        their_record = await persistence.get_character(opponent.id)
        if their_record is None:
            await interaction.response.send_message(
                embed=helpers.error_embed(f"{opponent.display_name} hasn't started their journey yet."),
                ephemeral=True)
            return

        view = ConfirmView(opponent.id, timeout=settings.CONFIRMATION_TIMEOUT)
        await interaction.response.send_message(
            content=opponent.mention,
            embed=helpers.make_embed("⚔️ Duel challenge",
                                     f"**{challenger.display_name}** challenges **{opponent.display_name}**. Accept?",
                                     helpers.COLOUR_WARNING),
            view=view,
        )
        await view.wait()
        if not view.result:
            if view.result is None:
                await interaction.edit_original_response(
                    embed=helpers.make_embed("Duel expired", "The challenge was not answered."), view=None)
            return
        await interaction.edit_original_response(view=None)

        battle = Battle([
            Fighter.from_character(own_record, challenger.id, challenger.display_name,
                                   challenger.display_avatar.url),
            Fighter.from_character(their_record, opponent.id, opponent.display_name, opponent.display_avatar.url),
        ])
        channel = interaction.channel
        try:
            result = await play_battle(channel, battle, action_timeout=settings.BATTLE_ACTION_TIMEOUT,
                                       round_ttl=settings.ROUND_MESSAGE_TTL)
        except ActionTimeout as exc:
            await channel.send(embed=helpers.make_embed(
                "Duel abandoned", f"**{exc.fighter_name}** did not act in time.", helpers.COLOUR_WARNING))
            return

        await asyncio.to_thread(battle_logs.archive_result, result, "duel")
        await channel.send(embed=battle_renderer.result_embed(result))
        await send_history(channel, battle, challenger.id)


async def setup(bot: commands.Bot):
    await bot.add_cog(Duel(bot))
