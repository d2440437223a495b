"""Drives a `Battle` to completion against an external action provider.

The provider is usually a Discord view waiting for a button press; it is
awaited under a timeout here, outside the state machine. A timeout or a
missing action aborts the battle with `ActionTimeout` instead of picking an
action for the player.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Union

from phoenix_bot.utils.battle_engine import ActionType, Battle, Round
from phoenix_bot.utils.errors import ActionTimeout
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.battle")

ActionProvider = Callable[[Fighter, Battle], Awaitable[Optional[Union[ActionType, str]]]]
RoundCallback = Callable[[Round, Battle], Any]

DEFAULT_ACTION_TIMEOUT = 500.0


@dataclass
class BattleResult:
    winner: Fighter
    all_fighters: List[Fighter]
    defeated_fighters: List[Fighter]
    battle: Battle

    def fighter_for_user(self, user_id: int) -> Optional[Fighter]:
        return next((f for f in self.all_fighters if f.user is not None and f.user.user_id == int(user_id)), None)


def with_anomaly_ai(get_action: ActionProvider) -> ActionProvider:
    """Wrap a human action provider so anomaly fighters pick their own action."""

    async def _provider(fighter: Fighter, battle: Battle) -> Optional[Union[ActionType, str]]:
        if fighter.is_anomaly:
            return fighter.choose_action_type(battle)
        return await get_action(fighter, battle)

    return _provider


async def run_battle(
    battle: Battle,
    get_action: ActionProvider,
    on_round: Optional[RoundCallback] = None,
    *,
    timeout: Optional[float] = DEFAULT_ACTION_TIMEOUT,
) -> BattleResult:
    """Run turns until the battle has a winner.

    Args:
        battle: an unresolved battle.
        get_action: coroutine returning the action of the current fighter, or
            None when the player gave up.
        on_round: called with each resolved round; may return an awaitable.
        timeout: seconds to wait for each action (None waits forever).

    Raises:
        ActionTimeout: no action arrived in time. The battle is left as is.
        InvalidAction: the provider returned an unknown action.
    """
    while battle.winner is None:
        fighter = battle.current_fighter
        try:
            action = await asyncio.wait_for(get_action(fighter, battle), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info("Battle aborted: %s timed out after %ss", fighter.name, timeout)
            raise ActionTimeout(fighter.name, timeout) from None
        if action is None:
            logger.info("Battle aborted: %s gave no action", fighter.name)
            raise ActionTimeout(fighter.name, timeout)

        rnd = battle.run_action(action)
        logger.debug("Round %s: %s -> %s dmg=%s dodged=%s crit=%s", rnd.number, rnd.fighter_name,
                     rnd.target_name, rnd.damage, rnd.dodged, rnd.critical)
        if on_round is not None:
            res = on_round(rnd, battle)
            if hasattr(res, "__await__"):
                await res

    winner = battle.winner
    logger.info("Battle finished after %d rounds, winner: %s", len(battle.rounds), winner.name)
    return BattleResult(
        winner=winner,
        all_fighters=list(battle.fighters),
        defeated_fighters=battle.defeated_fighters(),
        battle=battle,
    )
