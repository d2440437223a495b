"""/adventure: travel, meet anomalies and fight them.

The character is loaded once, mutated by `utils.adventure` after the battle
and saved once. An aborted battle (no action in time) changes nothing.
"""
from __future__ import annotations

import asyncio

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import adventure as adventure_rules
from phoenix_bot.utils import battle_logs, battle_renderer, helpers, persistence
from phoenix_bot.utils.anomalies import generate_anomaly
from phoenix_bot.utils.battle_engine import Battle
from phoenix_bot.utils.battle_session import play_battle, send_history
from phoenix_bot.utils.errors import ActionTimeout
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.logger import get_logger
from phoenix_bot.utils.views import ConfirmView

logger = get_logger("phoenix.adventure")


def outcome_embed(outcome: adventure_rules.AdventureOutcome, anomaly_name: str) -> discord.Embed:
    if not outcome.won:
        return helpers.make_embed(f"{helpers.EMOJI['defeat']} Defeated",
                                  f"**{anomaly_name}** was too strong. Use `/rest` to recover.",
                                  helpers.COLOUR_DANGER)
    lines = [f"You defeated **{anomaly_name}**!", str(outcome.rewards)]
    if outcome.new_level is not None:
        lines.append(f"{helpers.EMOJI['level']} You reached level **{outcome.new_level}**!")
    if outcome.new_region is not None:
        lines.append(f"{helpers.EMOJI['travel']} You arrived at {outcome.new_region.emoji} **{outcome.new_region.name}**.")
    return helpers.make_embed(f"{helpers.EMOJI['victory']} Victory", "\n".join(lines), helpers.COLOUR_SUCCESS)


class Adventure(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def _confirm(self, interaction: discord.Interaction, embed: discord.Embed) -> bool:
        view = ConfirmView(interaction.user.id, timeout=self.bot.settings.CONFIRMATION_TIMEOUT)
        await interaction.response.send_message(embed=embed, view=view)
        await view.wait()
        if view.result is None:
            await interaction.edit_original_response(
                embed=helpers.make_embed("Too slow", "Nothing happened."), view=None)
        return bool(view.result)

    @app_commands.command(name="adventure", description="Venture forth and face the anomalies")
    async def adventure(self, interaction: discord.Interaction):
        settings = self.bot.settings
        user = interaction.user
        record = await persistence.require_character(user.id)

        if not adventure_rules.can_adventure(record, settings.MIN_ADVENTURE_HEALTH):
            await interaction.response.send_message(embed=helpers.error_embed(
                f"You are too weak to adventure ({record.health}). Use `/rest` first."), ephemeral=True)
            return

        region = record.journey.current_region
        if adventure_rules.is_in_city(record):
            leave = await self._confirm(interaction, helpers.make_embed(
                f"{region.emoji} {region.name}", "You are safe inside the city walls. Leave the city?",
                helpers.COLOUR_INFO))
            if not leave:
                return
            new_region = adventure_rules.leave_city(record)
            await persistence.save_character(record)
            await interaction.edit_original_response(embed=helpers.make_embed(
                f"{helpers.EMOJI['travel']} On the road",
                f"You left **{region.name}** and reached {new_region.emoji} **{new_region.name}**.",
                helpers.COLOUR_SUCCESS), view=None)
            return

        player = Fighter.from_character(record, user.id, user.display_name, user.display_avatar.url)
        anomaly = generate_anomaly(record.level, region.region_type)
        if not await self._confirm(interaction, battle_renderer.anomaly_preview_embed(anomaly, player)):
            return
        await interaction.edit_original_response(view=None)

        battle = Battle([player, Fighter.from_anomaly(anomaly)])
        channel = interaction.channel
        try:
            result = await play_battle(channel, battle, action_timeout=settings.BATTLE_ACTION_TIMEOUT,
                                       round_ttl=settings.ROUND_MESSAGE_TTL)
        except ActionTimeout:
            await channel.send(embed=helpers.make_embed(
                "Battle abandoned", f"You hesitated and **{anomaly.name}** wandered off.", helpers.COLOUR_WARNING))
            return

        won = result.winner is player
        outcome = adventure_rules.settle_encounter(record, player, anomaly, won)
        await persistence.save_character(record)
        await asyncio.to_thread(battle_logs.archive_result, result, "adventure")
        logger.info("Adventure %s vs %s (lv %s): %s", user.id, anomaly.name, anomaly.level, "won" if won else "lost")
        await channel.send(content=user.mention, embed=outcome_embed(outcome, anomaly.name))
        await send_history(channel, battle, user.id)


async def setup(bot: commands.Bot):
    await bot.add_cog(Adventure(bot))
