"""Anomaly archetypes and the random encounter generator.

The archetype catalog is read from ``phoenix_bot/data/anomalies.yaml`` the
first time it is needed and cached for the life of the process. Generation is
deterministic when given a seeded ``random.Random``.
"""
from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import yaml

from phoenix_bot.utils import formulas
from phoenix_bot.utils.errors import NoValidArchetype
from phoenix_bot.utils.regions import ALL_REGION_TYPES, RegionType
from phoenix_bot.utils.stats import Stat
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.anomalies")

CATALOG_FILE = Path(__file__).resolve().parents[1] / "data" / "anomalies.yaml"

_CATALOG: Optional[Mapping["AnomalyType", "AnomalyDefinition"]] = None


class AnomalyType(str, enum.Enum):
    GUARDIAN = "guardian"
    ORC = "orc"
    FERAK = "ferak"
    OOZELING = "oozeling"
    NIGHTFALL = "nightfall"


class AnomalyVariant(str, enum.Enum):
    GHOST = "ghost"
    GIANT = "giant"


@dataclass(frozen=True)
class AnomalyDefinition:
    anomaly_type: AnomalyType
    name: str
    image: str
    health: int
    mana: int
    strength: int
    agility: int
    intelligence: int
    valid_regions: frozenset = field(default_factory=frozenset)

    @property
    def base_health(self) -> Stat:
        return Stat.new(self.health)

    @property
    def base_mana(self) -> Stat:
        return Stat.new(self.mana)


@dataclass(frozen=True)
class AnomalyRewards:
    xp: int
    gold: int

    def __str__(self) -> str:
        return f"🪙 **Gold**: {self.gold}\n🔹 **XP**: {self.xp}"


@dataclass
class Anomaly:
    definition: AnomalyDefinition
    anomaly_type: AnomalyType
    health: Stat
    mana: Stat
    strength: int
    agility: int
    intelligence: int
    level: int
    rewards: AnomalyRewards
    variant: Optional[AnomalyVariant] = None

    @property
    def name(self) -> str:
        if self.variant is None:
            return self.definition.name
        return f"{self.variant.value.title()} {self.definition.name}"

    @property
    def image(self) -> str:
        return self.definition.image


def _parse_definition(key: str, raw: Dict[str, Any]) -> AnomalyDefinition:
    regions = frozenset(RegionType(r) for r in raw.get("regions", []))
    return AnomalyDefinition(
        anomaly_type=AnomalyType(key),
        name=str(raw.get("name", key.title())),
        image=str(raw.get("image", "")),
        health=int(raw["health"]),
        mana=int(raw["mana"]),
        strength=int(raw["strength"]),
        agility=int(raw["agility"]),
        intelligence=int(raw["intelligence"]),
        valid_regions=regions,
    )


def load_catalog(path: Optional[Path] = None) -> Mapping[AnomalyType, AnomalyDefinition]:
    """Parse an archetype catalog file into a read-only mapping."""
    path = path or CATALOG_FILE
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Anomaly catalog {path} must be a mapping")
    catalog = {AnomalyType(k): _parse_definition(k, v) for k, v in raw.items()}
    logger.info("Loaded %d anomaly archetypes from %s", len(catalog), path)
    return MappingProxyType(catalog)


def get_catalog() -> Mapping[AnomalyType, AnomalyDefinition]:
    global _CATALOG
    if _CATALOG is None:
        _CATALOG = load_catalog()
    return _CATALOG


def archetypes_for_region(region: RegionType,
                          catalog: Optional[Mapping[AnomalyType, AnomalyDefinition]] = None) -> list[AnomalyDefinition]:
    catalog = catalog if catalog is not None else get_catalog()
    return [d for d in catalog.values() if region in d.valid_regions]


def uncovered_regions(catalog: Optional[Mapping[AnomalyType, AnomalyDefinition]] = None,
                      regions: Sequence[RegionType] = ALL_REGION_TYPES) -> list[RegionType]:
    """Regions in which no archetype can spawn (a content bug)."""
    return [r for r in regions if not archetypes_for_region(r, catalog)]


def build_anomaly(definition: AnomalyDefinition, level: int, rng: Optional[random.Random] = None,
                  tuning: formulas.Tuning = formulas.TUNING) -> Anomaly:
    """Scale ``definition`` to ``level`` and size its rewards."""
    rng = rng if rng is not None else random.Random()
    level = max(1, int(level))

    health = formulas.scale_stat(definition.health, level, tuning.health_per_level)
    mana = formulas.scale_stat(definition.mana, level, tuning.mana_per_level)
    strength = formulas.scale_stat(definition.strength, level, tuning.strength_per_level)
    agility = formulas.scale_stat(definition.agility, level, tuning.agility_per_level)
    intelligence = formulas.scale_stat(definition.intelligence, level, tuning.intelligence_per_level)

    value = formulas.potency(health, mana, strength, agility, intelligence, rng, tuning)
    rewards = AnomalyRewards(
        xp=formulas.xp_reward(value, level, rng, tuning),
        gold=formulas.gold_reward(value, level, rng, tuning),
    )
    return Anomaly(
        definition=definition,
        anomaly_type=definition.anomaly_type,
        health=Stat.new(health),
        mana=Stat.new(mana),
        strength=strength,
        agility=agility,
        intelligence=intelligence,
        level=level,
        rewards=rewards,
    )


def generate_anomaly(player_level: int, region: RegionType, rng: Optional[random.Random] = None,
                     catalog: Optional[Mapping[AnomalyType, AnomalyDefinition]] = None) -> Anomaly:
    """Generate a random anomaly for a player of ``player_level`` in ``region``.

    Raises:
        NoValidArchetype: no archetype lists ``region`` in its valid regions.
    """
    rng = rng if rng is not None else random.Random()
    candidates = archetypes_for_region(region, catalog)
    if not candidates:
        raise NoValidArchetype(region)

    definition = rng.choice(candidates)
    level = formulas.jitter_level(player_level, rng)
    anomaly = build_anomaly(definition, level, rng)
    logger.debug("Generated %s level %s for player level %s in %s", anomaly.name, level, player_level, region.value)
    return anomaly


def get_anomaly_from_type(anomaly_type: AnomalyType) -> Anomaly:
    """Unscaled level-1 anomaly used for bestiary pages."""
    definition = get_catalog()[AnomalyType(anomaly_type)]
    return Anomaly(
        definition=definition,
        anomaly_type=definition.anomaly_type,
        health=definition.base_health,
        mana=definition.base_mana,
        strength=definition.strength,
        agility=definition.agility,
        intelligence=definition.intelligence,
        level=1,
        rewards=AnomalyRewards(xp=1, gold=1),
    )
