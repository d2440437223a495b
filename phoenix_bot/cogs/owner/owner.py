"""Owner-only slash commands: cooldown reset and battle log lookup."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import discord
from discord import app_commands
from discord.ext import commands

from phoenix_bot.utils import battle_logs, helpers, persistence
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.owner")

RECENT_LOGS = 10


async def is_bot_owner(interaction: discord.Interaction) -> bool:
    return await interaction.client.is_owner(interaction.user)


def battle_log_embed(entry: Dict[str, Any]) -> discord.Embed:
    lines = []
    for r in entry.get("rounds", []):
        if r.get("dodged"):
            outcome = "dodged"
        else:
            outcome = f"{r.get('damage', 0)} dmg" + (" (crit)" if r.get("critical") else "")
        lines.append(f"`{r.get('number')}` {r.get('fighter')} → {r.get('target')}: {outcome}")
    e = helpers.make_embed(f"Battle {entry.get('battle_id')}",
                           "\n".join(lines) or "No combat occurred.", helpers.COLOUR_INFO)
    e.add_field(name="Kind", value=str(entry.get("kind")), inline=True)
    e.add_field(name="Winner", value=str(entry.get("winner")), inline=True)
    e.add_field(name="Fighters", value=", ".join(entry.get("fighters", [])) or "-", inline=False)
    if entry.get("timestamp"):
        e.add_field(name="When", value=f"<t:{int(entry['timestamp'])}:R>", inline=False)
    return e


def recent_logs_text(entries: List[Dict[str, Any]]) -> str:
    if not entries:
        return "No battles recorded yet."
    return "\n".join(
        f"`{e.get('battle_id')}` {e.get('kind')}: {' vs '.join(e.get('fighters', []))}, {e.get('winner')} won"
        for e in reversed(entries)
    )


class Owner(commands.Cog):
    owner_group = app_commands.Group(name="owner", description="Owner commands")

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @owner_group.command(name="resetcooldowns", description="Reset every cooldown of every player")
    @app_commands.check(is_bot_owner)
    async def reset_cooldowns(self, interaction: discord.Interaction):
        removed = await persistence.delete_all_cooldowns()
        logger.info("Owner %s reset all cooldowns", interaction.user.id)
        await interaction.response.send_message(
            embed=helpers.make_embed("Cooldowns reset", f"Removed {removed} cooldown(s).", helpers.COLOUR_SUCCESS),
            ephemeral=True)

    @owner_group.command(name="battlelogs", description="List the most recent battles")
    @app_commands.check(is_bot_owner)
    async def battle_logs_list(self, interaction: discord.Interaction):
        entries = await asyncio.to_thread(battle_logs.read_all_logs, RECENT_LOGS)
        await interaction.response.send_message(
            embed=helpers.make_embed("Recent battles", recent_logs_text(entries), helpers.COLOUR_INFO),
            ephemeral=True)

    @owner_group.command(name="battlelog", description="Show one archived battle")
    @app_commands.describe(battle_id="Id from /owner battlelogs")
    @app_commands.check(is_bot_owner)
    async def battle_log(self, interaction: discord.Interaction, battle_id: str):
        entry = await asyncio.to_thread(battle_logs.get_log_by_id, battle_id.strip())
        if entry is None:
            await interaction.response.send_message(
                embed=helpers.error_embed(f"No battle with id `{battle_id}`."), ephemeral=True)
            return
        await interaction.response.send_message(embed=battle_log_embed(entry), ephemeral=True)


async def setup(bot: commands.Bot):
    await bot.add_cog(Owner(bot))
