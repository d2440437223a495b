import math
import random

import pytest

from phoenix_bot.utils.battle_engine import ActionType, Battle
from phoenix_bot.utils.errors import BattleAlreadyResolved, InsufficientFighters, InvalidAction


def test_needs_two_fighters(fighter_factory):
    with pytest.raises(InsufficientFighters):
        Battle([fighter_factory()])
    with pytest.raises(InsufficientFighters):
        Battle([])


def test_same_fighter_twice_rejected(fighter_factory):
    a = fighter_factory()
    with pytest.raises(ValueError):
        Battle([a, a])


def test_two_fighter_ring_targets(fighter_factory, no_luck_rng):
    a, b = fighter_factory("A", 1), fighter_factory("B", 2)
    battle = Battle([a, b], rng=no_luck_rng)
    assert (a.target_index, b.target_index) == (1, 0)
    battle.run_action(ActionType.ATTACK)
    battle.run_action(ActionType.ATTACK)
    assert (a.target_index, b.target_index) == (1, 0)


def test_end_to_end_fixed_rolls(fighter_factory, no_luck_rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    battle = Battle([a, b], rng=no_luck_rng)

    order = []
    while battle.winner is None:
        rnd = battle.run_action(ActionType.ATTACK)
        order.append(rnd.fighter_name)
        expected = 20 if rnd.fighter_name == "A" else 15
        assert rnd.damage == expected
        assert not rnd.dodged and not rnd.critical

    assert order == ["A", "B"] * 4 + ["A"]
    assert battle.winner is a
    assert b.health.value == 0
    assert a.health.value == 100 - 4 * 15
    assert battle.defeated_fighters() == [b]
    assert [r.number for r in battle.rounds] == list(range(1, 10))


def test_round_messages(fighter_factory, no_luck_rng):
    battle = Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=no_luck_rng)
    rnd = battle.run_action("attack")
    assert rnd.messages == ("**A** attacked **B** with a simple blow, dealing **20** damage.",)
    assert rnd.action is ActionType.ATTACK


def test_dodge_negates_damage(fighter_factory, always_rng):
    a, b = fighter_factory("A", 1), fighter_factory("B", 2)
    battle = Battle([a, b], rng=always_rng)
    rnd = battle.run_action(ActionType.ATTACK)
    assert rnd.dodged
    assert rnd.damage == 0
    assert b.health.value == 100
    assert any("dodged" in m for m in rnd.messages)
    # the turn still passes to the other fighter
    assert battle.current_fighter is b


def test_critical_hit_doubles_fixed_damage(fighter_factory, fixed_rng_factory):
    a = fighter_factory("A", 1, strength=20, intelligence=50)
    b = fighter_factory("B", 2, agility=50)
    # dodge chance of B is 63%, critical chance of A is 65%: a roll of 0.635 crits without a dodge
    battle = Battle([a, b], rng=fixed_rng_factory(roll=0.635, multiplier=1.0))
    rnd = battle.run_action(ActionType.ATTACK)
    assert rnd.critical and not rnd.dodged
    assert rnd.damage == 40
    assert "CRITICAL" in rnd.messages[0]


def test_invalid_action_leaves_state_untouched(fighter_factory, no_luck_rng):
    a, b = fighter_factory("A", 1), fighter_factory("B", 2)
    battle = Battle([a, b], rng=no_luck_rng)
    with pytest.raises(InvalidAction):
        battle.run_action("fireball")
    assert battle.rounds == ()
    assert battle.current_fighter is a
    assert b.health.value == 100


def test_action_after_resolution_rejected(fighter_factory, no_luck_rng):
    battle = Battle([fighter_factory("A", 1, strength=500), fighter_factory("B", 2)], rng=no_luck_rng)
    battle.run_action(ActionType.ATTACK)
    assert battle.is_resolved
    with pytest.raises(BattleAlreadyResolved):
        battle.run_action(ActionType.ATTACK)
    assert len(battle.rounds) == 1


def test_terminates_within_health_over_min_damage(fighter_factory, fixed_rng_factory):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    # no dodges; multipliers come from the seeded generator
    battle = Battle([a, b], rng=fixed_rng_factory(roll=0.99, multiplier=None, seed=5))
    min_damage = int(15 * 0.8)
    bound = math.ceil((a.health.value + b.health.value) / min_damage)
    for _ in range(bound):
        if battle.winner is not None:
            break
        battle.run_action(ActionType.ATTACK)
    assert battle.winner is not None


@pytest.mark.parametrize("seed", range(20))
def test_seeded_battles_always_finish(fighter_factory, seed):
    battle = Battle([fighter_factory("A", 1, strength=12), fighter_factory("B", 2, strength=9)],
                    rng=random.Random(seed))
    for _ in range(1000):
        if battle.winner is not None:
            break
        battle.run_action(ActionType.ATTACK)
    assert battle.winner is not None
    assert len(battle.alive_fighters()) == 1


def test_seeded_battles_are_repeatable(fighter_factory):
    def play(seed):
        battle = Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=random.Random(seed))
        while battle.winner is None:
            battle.run_action(ActionType.ATTACK)
        return [(r.damage, r.dodged, r.critical) for r in battle.rounds]

    assert play(11) == play(11)


def test_three_fighters_skip_the_dead(fighter_factory, no_luck_rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, health=10)
    c = fighter_factory("C", 3, strength=5)
    battle = Battle([a, b, c], rng=no_luck_rng)

    first = battle.run_action(ActionType.ATTACK)
    assert first.target_name == "B"
    assert not b.is_alive
    assert battle.winner is None
    # B is dead, so C plays next and hits its ring target A
    assert battle.current_fighter is c
    second = battle.run_action(ActionType.ATTACK)
    assert second.target_name == "A"
    # A's ring target is dead, so it hits the next alive fighter clockwise
    assert battle.target_fighter is c
    third = battle.run_action(ActionType.ATTACK)
    assert third.target_name == "C"
