"""Play a `Battle` in a Discord channel.

Each human turn posts the battle state with a `BattleActionView` bound to the
fighter's user; anomaly turns are decided by the fighter itself. Round results
are posted as short-lived messages. Everything goes through the channel rather
than the interaction webhook, whose token expires after 15 minutes.
"""
from __future__ import annotations

from typing import Optional

import discord

from phoenix_bot.utils import battle_renderer
from phoenix_bot.utils.battle_controller import BattleResult, run_battle, with_anomaly_ai
from phoenix_bot.utils.battle_engine import ActionType, Battle, Round
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.views import BattleActionView, PaginationView

HISTORY_ROUNDS_PER_PAGE = 3


async def play_battle(channel: discord.abc.Messageable, battle: Battle, *, action_timeout: float,
                      round_ttl: Optional[float] = 5.0) -> BattleResult:
    """Drive ``battle`` through messages posted in ``channel``.

    Raises:
        ActionTimeout: a player did not press a button within ``action_timeout``.
    """

    async def ask_player(fighter: Fighter, current: Battle) -> Optional[ActionType]:
        view = BattleActionView(fighter.user.user_id, timeout=action_timeout)
        message = await channel.send(
            content=f"<@{fighter.user.user_id}>",
            embed=battle_renderer.battle_state_embed(current),
            view=view,
        )
        try:
            await view.wait()
        finally:
            view.disable_all()
            await message.edit(view=view)
        return view.action

    async def post_round(rnd: Round, current: Battle) -> None:
        message = await channel.send(embed=battle_renderer.round_embed(rnd, current))
        if round_ttl is not None:
            await message.delete(delay=round_ttl)

    # the view timeout fires first; the controller's limit is a backstop
    return await run_battle(battle, with_anomaly_ai(ask_player), post_round, timeout=action_timeout + 5)


async def send_history(channel: discord.abc.Messageable, battle: Battle, user_id: int, *,
                       per_page: int = HISTORY_ROUNDS_PER_PAGE) -> PaginationView:
    """Post the round log of a finished battle as a pager owned by ``user_id``."""
    view = PaginationView(user_id, battle_renderer.history_embeds(battle, per_page))
    await channel.send(embed=view.current, view=view)
    return view
