import random

import pytest

from phoenix_bot.utils.fighter import Fighter, UserOwner
from phoenix_bot.utils.stats import Stat


class FixedRandom(random.Random):
    """Random whose rolls and/or uniform draws are pinned.

    ``roll`` is returned by ``random()`` (so a high value means no dodge and
    no critical hit); ``multiplier`` is returned by ``uniform()``. Either can
    be None to fall back to the seeded generator.
    """

    def __init__(self, roll=0.99, multiplier=1.0, seed=0):
        self.roll = roll
        self.multiplier = multiplier
        super().__init__(seed)

    def random(self):
        if self.roll is not None:
            return self.roll
        return super().random()

    def uniform(self, a, b):
        if self.multiplier is not None:
            return self.multiplier
        return super().uniform(a, b)


def make_fighter(name="A", user_id=1, health=100, mana=10, strength=20, agility=5, intelligence=5):
    return Fighter(
        name=name,
        health=Stat.new(health),
        mana=Stat.new(mana),
        strength=strength,
        agility=agility,
        intelligence=intelligence,
        user=UserOwner(user_id=user_id),
    )


@pytest.fixture
def no_luck_rng():
    """No dodge, no critical and every multiplier exactly 1.0."""
    return FixedRandom(roll=0.99, multiplier=1.0)


@pytest.fixture
def always_rng():
    """Every dodge and critical roll succeeds."""
    return FixedRandom(roll=0.0, multiplier=1.0)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    from phoenix_bot.utils import battle_logs, persistence

    monkeypatch.setattr(persistence, "DATA_DIR", tmp_path)
    monkeypatch.setattr(battle_logs, "DATA_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def fighter_factory():
    return make_fighter


@pytest.fixture
def fixed_rng_factory():
    return FixedRandom
