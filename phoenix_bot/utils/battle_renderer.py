"""Render battle state and rounds for Discord.

The text helpers (`render_round_frames`, `history_pages`) are independent of
Discord; the embed builders wrap them with `helpers.make_embed`.
"""
from __future__ import annotations

from typing import List, Sequence

import discord

from phoenix_bot.utils import helpers
from phoenix_bot.utils.anomalies import Anomaly
from phoenix_bot.utils.battle_controller import BattleResult
from phoenix_bot.utils.battle_engine import Battle, Round
from phoenix_bot.utils.fighter import Fighter


def render_round_frames(rounds: Sequence[Round]) -> List[str]:
    frames: List[str] = []
    for rnd in rounds:
        frames.append(f"Round {rnd.number}: " + "\n".join(rnd.messages))
    if not frames:
        frames.append("No combat occurred.")
    return frames


def history_pages(battle: Battle, per_page: int = 3) -> List[str]:
    """Split the round log of ``battle`` into pages of ``per_page`` rounds."""
    frames = render_round_frames(battle.rounds)
    per_page = max(1, per_page)
    return ["\n\n".join(frames[i:i + per_page]) for i in range(0, len(frames), per_page)]


def history_embeds(battle: Battle, per_page: int = 3) -> List[discord.Embed]:
    """One "Battle history" embed per page of `history_pages`."""
    return [helpers.make_embed("📜 Battle history", page, helpers.COLOUR_INFO)
            for page in history_pages(battle, per_page)]


def battle_state_embed(battle: Battle) -> discord.Embed:
    """Embed shown while waiting for the current fighter's action."""
    fighter = battle.current_fighter
    target = battle.target_fighter
    e = helpers.make_embed(f"⚔️ {fighter.name}'s turn", f"Choose an action against **{target.name}**.",
                           helpers.COLOUR_INFO)
    e.add_field(name=fighter.name, value=fighter.stats_summary(target), inline=True)
    e.add_field(name=target.name, value=target.stats_summary(fighter), inline=True)
    e.set_thumbnail(url=fighter.image)
    e.set_footer(text=f"Round {len(battle.rounds) + 1}")
    return e


def round_embed(rnd: Round, battle: Battle) -> discord.Embed:
    target = battle.fighters[rnd.target_index]
    colour = helpers.COLOUR_WARNING if rnd.critical else helpers.COLOUR_INFO
    e = helpers.make_embed(f"Round {rnd.number}", "\n".join(rnd.messages), colour)
    e.add_field(name=target.name, value=f"{helpers.EMOJI['health']} {target.health}", inline=False)
    return e


def anomaly_preview_embed(anomaly: Anomaly, player: Fighter) -> discord.Embed:
    """Encounter embed: anomaly stats against the player and its rewards."""
    opponent = Fighter.from_anomaly(anomaly)
    e = helpers.make_embed(f"A wild {anomaly.name} appears! (Lv. {anomaly.level})",
                           "Do you want to fight it?", helpers.COLOUR_WARNING)
    e.add_field(name="Stats", value=opponent.stats_summary(player), inline=True)
    e.add_field(name="Rewards", value=str(anomaly.rewards), inline=True)
    e.set_thumbnail(url=anomaly.image)
    return e


def result_embed(result: BattleResult) -> discord.Embed:
    winner = result.winner
    losers = ", ".join(f.name for f in result.defeated_fighters) or "nobody"
    e = helpers.make_embed(f"{helpers.EMOJI['victory']} {winner.name} won!",
                           f"Defeated: {losers}\nRounds: {len(result.battle.rounds)}",
                           helpers.COLOUR_SUCCESS)
    e.set_thumbnail(url=winner.image)
    return e
