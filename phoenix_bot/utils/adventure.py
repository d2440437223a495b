"""Journey rules applied around an anomaly encounter.

These functions only mutate the `CharacterRecord` handed to them; the caller
saves it once afterwards.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from phoenix_bot.utils.anomalies import Anomaly, AnomalyRewards
from phoenix_bot.utils.characters import CharacterRecord
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.regions import Region, RegionType, generate_region

LEAVE_CITY_DISTANCE = (0.65, 0.7)
VICTORY_DISTANCE = (0.2, 0.4)
REGION_CHANGE_MARGIN = (0.8, 1.2)
MIN_ADVENTURE_HEALTH = 15


@dataclass
class AdventureOutcome:
    won: bool
    rewards: Optional[AnomalyRewards] = None
    new_level: Optional[int] = None
    new_region: Optional[Region] = None


def is_in_city(record: CharacterRecord) -> bool:
    return record.journey.current_region.region_type is RegionType.CITY


def can_adventure(record: CharacterRecord, min_health: int = MIN_ADVENTURE_HEALTH) -> bool:
    return record.health.value >= min_health


def leave_city(record: CharacterRecord, rng: Optional[random.Random] = None) -> Region:
    """Walk out of the current city into a freshly generated region."""
    rng = rng if rng is not None else random.Random()
    record.travel_distance(rng.uniform(*LEAVE_CITY_DISTANCE))
    region = generate_region(record.journey.total_traveled, rng=rng)
    record.travel_to_region(region)
    return region


def should_change_region(record: CharacterRecord, rng: Optional[random.Random] = None) -> bool:
    rng = rng if rng is not None else random.Random()
    journey = record.journey
    if not journey.region_history:
        return True
    return journey.total_traveled > journey.current_region.distance + rng.uniform(*REGION_CHANGE_MARGIN)


def settle_encounter(record: CharacterRecord, player: Fighter, anomaly: Anomaly, won: bool,
                     rng: Optional[random.Random] = None) -> AdventureOutcome:
    """Apply the result of an anomaly battle to ``record``.

    On a win the player travels a little, collects gold and XP, may level up
    and may reach a new region. Win or lose, the fighter's final health and
    mana are written back and the bestiary counter for the anomaly grows.
    """
    rng = rng if rng is not None else random.Random()
    outcome = AdventureOutcome(won=won)

    if won:
        record.travel_distance(rng.uniform(*VICTORY_DISTANCE))
        record.add_gold(anomaly.rewards.gold)
        record.add_xp(anomaly.rewards.xp)
        outcome.rewards = anomaly.rewards
        outcome.new_level = record.level_up(rng)

        if should_change_region(record, rng):
            region = generate_region(record.journey.total_traveled, rng=rng)
            record.travel_to_region(region)
            outcome.new_region = region

    record.set_health(player.health.value)
    record.set_mana(player.mana.value)
    record.try_add_to_bestiary(anomaly.anomaly_type, won)
    return outcome
