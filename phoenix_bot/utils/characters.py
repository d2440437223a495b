"""Persisted character documents.

A `CharacterRecord` is stored as one JSON document per user (JSONB column or
file-backed JSON, see `persistence`). Missing fields fall back to the defaults
below so older documents keep loading.
"""
from __future__ import annotations

import enum
import random
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from phoenix_bot.utils import formulas
from phoenix_bot.utils.anomalies import AnomalyType
from phoenix_bot.utils.classes import CharacterClass, ClassType
from phoenix_bot.utils.regions import Region, starting_city
from phoenix_bot.utils.stats import Stat

REST_HEALTH_RATIO = 0.8


class UpgradeKind(str, enum.Enum):
    HEALTH = "health"
    MANA = "mana"
    STRENGTH = "strength"
    AGILITY = "agility"
    INTELLIGENCE = "intelligence"


ALL_UPGRADES: tuple[UpgradeKind, ...] = tuple(UpgradeKind)


class Journey(BaseModel):
    current_region: Region = Field(default_factory=starting_city)
    region_history: List[Region] = Field(default_factory=list)
    total_traveled: float = 0.0


class BestiaryEntry(BaseModel):
    anomaly: AnomalyType
    wins: int = 0
    losses: int = 0


class CharacterRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    class_type: ClassType = Field(ClassType.KNIGHT, alias="class")
    gold: int = 10
    health: Stat = Field(default_factory=lambda: Stat.new(100))
    mana: Stat = Field(default_factory=lambda: Stat.new(20))
    strength: int = 20
    agility: int = 5
    intelligence: int = 5
    xp: int = 0
    level: int = 1
    journey: Journey = Field(default_factory=Journey)
    bestiary: List[BestiaryEntry] = Field(default_factory=list)

    @classmethod
    def from_class(cls, user_id: str, character_class: CharacterClass,
                   rng: Optional[random.Random] = None) -> "CharacterRecord":
        return cls(
            user_id=str(user_id),
            class_type=character_class.class_type,
            health=Stat.new(character_class.health),
            mana=Stat.new(character_class.mana),
            strength=character_class.strength,
            agility=character_class.agility,
            intelligence=character_class.intelligence,
            journey=Journey(current_region=starting_city(rng)),
        )

    # ----- xp / levels
    @property
    def xp_to_next_level(self) -> int:
        return formulas.xp_required_for_level_up(self.level)

    def add_xp(self, amount: int) -> None:
        self.xp += int(amount)

    def level_up(self, rng: Optional[random.Random] = None) -> Optional[int]:
        """Spend accumulated XP on levels; returns the new level or None.

        Each level gained grants random attribute points, spent one at a time
        on a random `UpgradeKind`.
        """
        if self.xp < formulas.xp_required_for_level_up(self.level):
            return None
        rng = rng if rng is not None else random.Random()

        points = 2
        lower, upper = max(self.level // 3, 1), max(self.level // 2, 2)
        while self.xp >= formulas.xp_required_for_level_up(self.level):
            self.xp -= formulas.xp_required_for_level_up(self.level)
            self.level += 1
            points += rng.randint(lower, upper)

        for _ in range(points):
            apply_upgrade(self, rng.choice(ALL_UPGRADES), 1)
        return self.level

    # ----- gold
    def add_gold(self, amount: int) -> None:
        self.gold += int(amount)

    def remove_gold(self, amount: int) -> None:
        self.gold = max(self.gold - int(amount), 0)

    # ----- resources
    def restore_health(self) -> None:
        self.health.restore()

    def restore_mana(self) -> None:
        self.mana.restore()

    def set_health(self, amount: int) -> None:
        self.health.set_value(amount)

    def set_mana(self, amount: int) -> None:
        self.mana.set_value(amount)

    def can_rest(self) -> bool:
        """Resting is only allowed once health dropped to 80% of its max or below."""
        return self.health.value <= self.health.max * REST_HEALTH_RATIO

    def rest(self) -> None:
        self.restore_health()
        self.restore_mana()

    # ----- journey
    def travel_distance(self, distance: float) -> None:
        self.journey.total_traveled += float(distance)

    def travel_to_region(self, region: Region) -> None:
        self.journey.region_history.append(self.journey.current_region)
        self.journey.current_region = region

    # ----- bestiary
    def bestiary_entry(self, anomaly_type: AnomalyType) -> Optional[BestiaryEntry]:
        return next((e for e in self.bestiary if e.anomaly == anomaly_type), None)

    def try_add_to_bestiary(self, anomaly_type: AnomalyType, won: bool) -> BestiaryEntry:
        entry = self.bestiary_entry(anomaly_type)
        if entry is None:
            entry = BestiaryEntry(anomaly=anomaly_type)
            self.bestiary.append(entry)
        if won:
            entry.wins += 1
        else:
            entry.losses += 1
        return entry

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, data: dict) -> "CharacterRecord":
        return cls.model_validate(data)


def apply_upgrade(record: CharacterRecord, kind: UpgradeKind, amount: int) -> None:
    """Raise one attribute of ``record`` by ``amount``."""
    if kind is UpgradeKind.HEALTH:
        record.health.add_max_value(amount)
    elif kind is UpgradeKind.MANA:
        record.mana.add_max_value(amount)
    elif kind is UpgradeKind.STRENGTH:
        record.strength += amount
    elif kind is UpgradeKind.AGILITY:
        record.agility += amount
    elif kind is UpgradeKind.INTELLIGENCE:
        record.intelligence += amount
    else:
        raise ValueError(f"Unknown upgrade: {kind!r}")
