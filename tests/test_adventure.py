import random

import pytest

from phoenix_bot.utils import adventure
from phoenix_bot.utils.anomalies import AnomalyType, build_anomaly, get_catalog
from phoenix_bot.utils.characters import CharacterRecord
from phoenix_bot.utils.fighter import Fighter
from phoenix_bot.utils.regions import RegionType


@pytest.fixture
def traveller():
    record = CharacterRecord(user_id="1")
    adventure.leave_city(record, random.Random(1))
    return record


@pytest.fixture
def orc():
    return build_anomaly(get_catalog()[AnomalyType.ORC], 1, random.Random(0))


def test_leave_city():
    record = CharacterRecord(user_id="1")
    assert adventure.is_in_city(record)
    city = record.journey.current_region
    region = adventure.leave_city(record, random.Random(1))
    assert not adventure.is_in_city(record)
    assert 0.65 <= record.journey.total_traveled <= 0.7
    assert region.distance == record.journey.total_traveled
    assert record.journey.region_history == [city]


def test_can_adventure_threshold():
    record = CharacterRecord(user_id="1")
    record.set_health(15)
    assert adventure.can_adventure(record)
    record.set_health(14)
    assert not adventure.can_adventure(record)


def test_region_change_always_when_history_empty():
    record = CharacterRecord(user_id="1")
    assert adventure.should_change_region(record, random.Random(0))


def test_victory_rewards_and_writes_back(traveller, orc, fixed_rng_factory):
    player = Fighter.from_character(traveller, 1, "Hero")
    player.health.set_value(40)
    player.mana.set_value(3)
    traveled = traveller.journey.total_traveled
    region = traveller.journey.current_region

    outcome = adventure.settle_encounter(traveller, player, orc, True, fixed_rng_factory(multiplier=0.3))

    assert outcome.won
    assert outcome.rewards == orc.rewards
    assert traveller.gold == 10 + orc.rewards.gold
    assert traveller.journey.total_traveled == pytest.approx(traveled + 0.3)
    # not far enough past the region's start to reach a new one
    assert outcome.new_region is None
    assert traveller.journey.current_region == region
    assert (traveller.health.value, traveller.mana.value) == (40, 3)
    entry = traveller.bestiary_entry(AnomalyType.ORC)
    assert (entry.wins, entry.losses) == (1, 0)


def test_victory_far_from_region_start_moves_on(traveller, orc, fixed_rng_factory):
    traveller.journey.total_traveled = 10.0
    player = Fighter.from_character(traveller, 1, "Hero")

    outcome = adventure.settle_encounter(traveller, player, orc, True, fixed_rng_factory(multiplier=0.3))

    assert outcome.new_region is not None
    assert traveller.journey.current_region == outcome.new_region
    assert outcome.new_region.region_type is not RegionType.CITY
    assert len(traveller.journey.region_history) == 2


def test_victory_can_level_up(traveller, orc, fixed_rng_factory):
    traveller.add_xp(149 - orc.rewards.xp + 1)
    player = Fighter.from_character(traveller, 1, "Hero")
    outcome = adventure.settle_encounter(traveller, player, orc, True, fixed_rng_factory(multiplier=0.3))
    assert outcome.new_level == 2
    assert traveller.level == 2


def test_defeat_only_records_loss(traveller, orc):
    player = Fighter.from_character(traveller, 1, "Hero")
    player.health.set_value(0)
    traveled = traveller.journey.total_traveled

    outcome = adventure.settle_encounter(traveller, player, orc, False, random.Random(0))

    assert not outcome.won
    assert outcome.rewards is None and outcome.new_level is None
    assert traveller.gold == 10
    assert traveller.xp == 0
    assert traveller.journey.total_traveled == traveled
    assert traveller.health.value == 0
    entry = traveller.bestiary_entry(AnomalyType.ORC)
    assert (entry.wins, entry.losses) == (0, 1)


def test_fighter_is_a_snapshot(traveller):
    player = Fighter.from_character(traveller, 1, "Hero")
    player.take_damage(30)
    assert traveller.health.value == 100
