import random

from phoenix_bot.utils import formulas


def test_dodge_and_critical_chances():
    assert formulas.dodge_chance(5, 5) == 7
    assert formulas.critical_chance(5, 5) == 7
    # (11 + 1) / (5 + 1) * 7.5 = 15
    assert formulas.dodge_chance(11, 5) == 15
    assert formulas.dodge_chance(1000, 0) == 100


def test_chance_with_non_positive_denominator_is_zero():
    assert formulas.dodge_chance(10, -1) == 0
    assert formulas.critical_chance(10, -5) == 0


def test_damage_with_fixed_multiplier(fixed_rng_factory):
    rng = fixed_rng_factory(multiplier=1.0)
    assert formulas.damage(20, False, rng) == 20
    # critical adds the bonus draw on top of the base multiplier
    assert formulas.damage(20, True, rng) == 40


def test_damage_range():
    rng = random.Random(7)
    for _ in range(500):
        dmg = formulas.damage(20, False, rng)
        assert 16 <= dmg <= 24


def test_critical_never_below_normal_for_same_seed():
    for seed in range(200):
        normal = formulas.damage(17, False, random.Random(seed))
        crit = formulas.damage(17, True, random.Random(seed))
        assert crit >= normal


def test_xp_required_for_level_up():
    assert formulas.xp_required_for_level_up(1) == 150
    assert formulas.xp_required_for_level_up(2) == 300
    assert formulas.xp_required_for_level_up(10) == 1500


def test_scale_stat_is_linear_and_floored():
    assert formulas.scale_stat(80, 1, 5.0) == 80
    assert formulas.scale_stat(80, 3, 5.0) == 88
    assert formulas.scale_stat(0, 10, 5.0) == 1


def test_jitter_level_floor(fixed_rng_factory):
    assert formulas.jitter_level(10, fixed_rng_factory(multiplier=0.8)) == 8
    assert formulas.jitter_level(1, fixed_rng_factory(multiplier=0.8)) == 1
    assert formulas.jitter_level(0, random.Random(3)) >= 1


def test_rewards_are_at_least_one():
    rng = random.Random(99)
    assert formulas.xp_reward(0.0, 1, rng) == 1
    assert formulas.gold_reward(0.0, 1, rng) == 1
    value = formulas.potency(100, 20, 20, 5, 5, rng)
    assert formulas.xp_reward(value, 5, rng) > 1
    assert formulas.gold_reward(value, 5, rng) > 1


def test_potency_bounds():
    for seed in range(50):
        value = formulas.potency(80, 40, 12, 5, 10, random.Random(seed))
        base = 80 * 1.1 + 40 * 1.1 + 12 * 1.667
        assert base + 15 / 2.5 <= value <= base + 20 / 1.5
