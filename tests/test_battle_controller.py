import asyncio

import pytest

from phoenix_bot.utils.anomalies import get_anomaly_from_type, AnomalyType
from phoenix_bot.utils.battle_controller import run_battle, with_anomaly_ai
from phoenix_bot.utils.battle_engine import ActionType, Battle
from phoenix_bot.utils.errors import ActionTimeout, InvalidAction
from phoenix_bot.utils.fighter import Fighter


async def always_attack(fighter, battle):
    return ActionType.ATTACK


@pytest.mark.asyncio
async def test_run_battle_to_completion(fighter_factory, no_luck_rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    seen = []

    result = await run_battle(Battle([a, b], rng=no_luck_rng), always_attack,
                              lambda rnd, battle: seen.append(rnd.number))

    assert result.winner is a
    assert result.defeated_fighters == [b]
    assert result.all_fighters == [a, b]
    assert seen == list(range(1, 10))
    assert result.fighter_for_user(2) is b
    assert result.fighter_for_user(99) is None


@pytest.mark.asyncio
async def test_async_round_callback_is_awaited(fighter_factory, no_luck_rng):
    calls = []

    async def on_round(rnd, battle):
        await asyncio.sleep(0)
        calls.append(rnd.fighter_name)

    battle = Battle([fighter_factory("A", 1, strength=200), fighter_factory("B", 2)], rng=no_luck_rng)
    await run_battle(battle, always_attack, on_round)
    assert calls == ["A"]


@pytest.mark.asyncio
async def test_timeout_aborts_without_acting(fighter_factory, no_luck_rng):
    async def never(fighter, battle):
        await asyncio.sleep(10)

    battle = Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=no_luck_rng)
    with pytest.raises(ActionTimeout) as excinfo:
        await run_battle(battle, never, timeout=0.01)
    assert excinfo.value.fighter_name == "A"
    assert battle.rounds == ()
    assert battle.winner is None


@pytest.mark.asyncio
async def test_missing_action_aborts(fighter_factory, no_luck_rng):
    async def give_up(fighter, battle):
        return None

    battle = Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=no_luck_rng)
    with pytest.raises(ActionTimeout):
        await run_battle(battle, give_up)
    assert battle.rounds == ()


@pytest.mark.asyncio
async def test_unknown_action_propagates(fighter_factory, no_luck_rng):
    async def bad(fighter, battle):
        return "dance"

    battle = Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=no_luck_rng)
    with pytest.raises(InvalidAction):
        await run_battle(battle, bad)


@pytest.mark.asyncio
async def test_anomaly_ai_never_asks_the_provider(fighter_factory, no_luck_rng):
    player = fighter_factory("Hero", 1, strength=30)
    monster = Fighter.from_anomaly(get_anomaly_from_type(AnomalyType.ORC))
    asked = []

    async def ask(fighter, battle):
        asked.append(fighter.name)
        return ActionType.ATTACK

    result = await run_battle(Battle([player, monster], rng=no_luck_rng), with_anomaly_ai(ask))
    assert set(asked) == {"Hero"}
    assert result.winner is player
