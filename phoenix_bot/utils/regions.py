"""Region types and procedural region names for the overworld journey."""
from __future__ import annotations

import enum
import random
from typing import List, Optional, Sequence

from pydantic import BaseModel


class RegionType(str, enum.Enum):
    FOREST = "forest"
    CITY = "city"
    SWAMP = "swamp"
    GRASSLAND = "grassland"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def emoji(self) -> str:
        return _EMOJIS[self]

    @property
    def rarity(self) -> int:
        """Relative weight used when picking the next region (0 never picked)."""
        return _RARITY[self]

    def __str__(self) -> str:
        return self.label


_LABELS = {
    RegionType.FOREST: "Forest",
    RegionType.CITY: "City",
    RegionType.SWAMP: "Swamp",
    RegionType.GRASSLAND: "Grassland",
}

_EMOJIS = {
    RegionType.FOREST: "🌲",
    RegionType.CITY: "🏙️",
    RegionType.SWAMP: "🍀",
    RegionType.GRASSLAND: "🏞️",
}

_RARITY = {
    RegionType.CITY: 0,
    RegionType.SWAMP: 30,
    RegionType.FOREST: 50,
    RegionType.GRASSLAND: 50,
}

ALL_REGION_TYPES: tuple[RegionType, ...] = tuple(RegionType)

VOWELS = ("a", "e", "i", "o", "u")
CONSONANTS = (
    "b", "c", "d", "f", "g", "h", "j", "k", "l", "l", "m", "n",
    "p", "q", "r", "s", "t", "v", "w", "x", "y", "z", "lh", "ch",
)
TRAILING = ("r", "s", "l", "m", "n")

COMMON_NAMES = (
    "Black", "Green", "Fair", "Enchanted", "Gloomy", "Magic", "Serene", "Sacred",
    "Ancient", "Superior", "Legendary", "Funereal", "Spectacular", "Fabulous", "Crystalline",
)
EPITHETS = ("of Wonders", "of Lost Dreams", "of the Unexpected", "of Specters", "of Charms", "of Mysteries")
LOCATIONS = ("North", "South", "East", "West", "Northwest", "Northeast", "Southeast", "Southwest", "Central")


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def invent_word(syllables: int, rng: Optional[random.Random] = None) -> str:
    """Invent a pronounceable title-cased word of ``syllables + 1`` syllables."""
    rng = _rng(rng)
    parts: List[str] = []
    for _ in range(syllables + 1):
        parts.append(rng.choice(CONSONANTS) + rng.choice(VOWELS))
    if rng.random() < 0.3:
        parts.append(rng.choice(TRAILING))
    return "".join(parts).title()


def generate_name(base: str, adjectives: Sequence[str], epithets: Optional[Sequence[str]] = None,
                  locations: Optional[Sequence[str]] = None, rng: Optional[random.Random] = None) -> str:
    rng = _rng(rng)
    name = f"{rng.choice(adjectives)} {base}"
    if epithets and rng.random() < 0.7:
        name = f"{name} {rng.choice(epithets)}"
    if locations and rng.random() < 0.3:
        name = f"{rng.choice(locations)} {name}"
    return name


def generate_region_name(region_type: RegionType, rng: Optional[random.Random] = None) -> str:
    """Generate a display name such as ``"Gloomy Swamp of Lost Dreams"``.

    Cities always get an invented proper name; other regions get one 30% of
    the time, and an invented name is usually the whole title.
    """
    rng = _rng(rng)
    base = region_type.label
    if region_type is RegionType.CITY or rng.random() < 0.3:
        base = f"{base} {invent_word(rng.randint(1, 4), rng)}"
        if rng.random() < 0.95:
            return base

    epithets = EPITHETS if rng.random() < 0.5 else None
    locations = LOCATIONS if rng.random() < 0.3 else None
    return generate_name(base, COMMON_NAMES, epithets, locations, rng)


class Region(BaseModel):
    name: str
    region_type: RegionType = RegionType.FOREST
    # total distance traveled when the region was reached
    distance: float = 0.0

    @property
    def emoji(self) -> str:
        return self.region_type.emoji


def pick_region_type(rng: Optional[random.Random] = None) -> RegionType:
    rng = _rng(rng)
    candidates = [r for r in ALL_REGION_TYPES if r.rarity > 0]
    return rng.choices(candidates, weights=[r.rarity for r in candidates], k=1)[0]


def generate_region(distance: float, region_type: Optional[RegionType] = None,
                    rng: Optional[random.Random] = None) -> Region:
    rng = _rng(rng)
    if region_type is None:
        region_type = pick_region_type(rng)
    return Region(name=generate_region_name(region_type, rng), region_type=region_type, distance=distance)


def starting_city(rng: Optional[random.Random] = None) -> Region:
    return generate_region(0.0, RegionType.CITY, rng)
