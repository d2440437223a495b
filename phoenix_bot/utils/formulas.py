"""Numeric game formulas: dodge, critical, damage, levels, scaling and rewards.

Every function that draws randomness takes an optional ``rng`` so tests can
pass a seeded ``random.Random``. All tunable constants live in `Tuning`.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional

from phoenix_bot.utils.stats import Probability


@dataclass(frozen=True)
class Tuning:
    # dodge/critical ratio scaling
    dodge_scale: float = 1.5 * 5.0
    critical_scale: float = 1.4 * 5.5

    # damage multipliers, uniform ranges
    damage_multiplier: tuple[float, float] = (0.8, 1.2)
    critical_bonus: tuple[float, float] = (0.75, 1.2)

    # xp needed to leave a level = base * level * factor
    level_up_base: int = 100
    level_up_factor: float = 1.5

    # anomaly scaling, percent of the base stat gained per level above 1
    health_per_level: float = 5.0
    mana_per_level: float = 2.5
    strength_per_level: float = 2.5
    agility_per_level: float = 4.0
    intelligence_per_level: float = 4.0
    level_jitter: tuple[float, float] = (0.8, 1.3)

    # potency weights and jitter
    potency_health: float = 1.1
    potency_mana: float = 1.1
    potency_strength: float = 1.667
    potency_jitter: tuple[int, int] = (0, 5)
    potency_divisor: tuple[float, float] = (1.5, 2.5)

    # rewards
    xp_per_potency: float = 0.5
    xp_jitter: tuple[float, float] = (0.9, 1.1)
    gold_per_potency: float = 0.08
    gold_level_bonus: float = 0.1
    gold_jitter: tuple[float, float] = (0.8, 1.3)


TUNING = Tuning()


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def _ratio_chance(numerator_stat: int, denominator_stat: int, scale: float) -> Probability:
    denominator = denominator_stat + 1
    if denominator <= 0:
        return Probability(0)
    ratio = (numerator_stat + 1) / denominator
    return Probability(int(ratio * scale))


def dodge_chance(defender_agility: int, attacker_agility: int, tuning: Tuning = TUNING) -> Probability:
    """Chance that the defender dodges, growing with its relative agility."""
    return _ratio_chance(defender_agility, attacker_agility, tuning.dodge_scale)


def critical_chance(attacker_intelligence: int, defender_intelligence: int, tuning: Tuning = TUNING) -> Probability:
    """Chance that the attacker lands a critical hit."""
    return _ratio_chance(attacker_intelligence, defender_intelligence, tuning.critical_scale)


def damage(strength: int, critical: bool, rng: Optional[random.Random] = None, tuning: Tuning = TUNING) -> int:
    """Damage dealt by one hit, truncated toward zero and never negative.

    The critical bonus is drawn only when the hit is critical, so the same seed
    gives the same base multiplier either way.
    """
    rng = _rng(rng)
    multiplier = rng.uniform(*tuning.damage_multiplier)
    if critical:
        multiplier += rng.uniform(*tuning.critical_bonus)
    return max(0, int(strength * multiplier))


def xp_required_for_level_up(level: int, tuning: Tuning = TUNING) -> int:
    return int(tuning.level_up_base * (level * tuning.level_up_factor))


def level_factor(level: int, percent_per_level: float) -> float:
    """Multiplier applied to a base stat at ``level``; level 1 is the base."""
    return 1.0 + (max(level, 1) - 1) * percent_per_level / 100.0


def scale_stat(base: int, level: int, percent_per_level: float) -> int:
    """Deterministic linear scaling of a base stat, floored at 1."""
    return max(1, math.floor(base * level_factor(level, percent_per_level)))


def jitter_level(player_level: int, rng: Optional[random.Random] = None, tuning: Tuning = TUNING) -> int:
    rng = _rng(rng)
    return max(1, math.floor(max(player_level, 1) * rng.uniform(*tuning.level_jitter)))


def potency(health: int, mana: int, strength: int, agility: int, intelligence: int,
            rng: Optional[random.Random] = None, tuning: Tuning = TUNING) -> float:
    """Reward-sizing heuristic computed from an anomaly's scaled stats."""
    rng = _rng(rng)
    jitter = rng.randint(*tuning.potency_jitter)
    divisor = rng.uniform(*tuning.potency_divisor)
    return (
        health * tuning.potency_health
        + mana * tuning.potency_mana
        + strength * tuning.potency_strength
        + (agility + intelligence + jitter) / divisor
    )


def xp_reward(potency_value: float, level: int, rng: Optional[random.Random] = None, tuning: Tuning = TUNING) -> int:
    rng = _rng(rng)
    amount = potency_value * tuning.xp_per_potency * max(level, 1) * rng.uniform(*tuning.xp_jitter)
    return max(1, int(amount))


def gold_reward(potency_value: float, level: int, rng: Optional[random.Random] = None, tuning: Tuning = TUNING) -> int:
    rng = _rng(rng)
    amount = (
        potency_value
        * tuning.gold_per_potency
        * (1 + max(level, 1) * tuning.gold_level_bonus)
        * rng.uniform(*tuning.gold_jitter)
    )
    return max(1, int(amount))
