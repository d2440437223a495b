"""Playable character classes and their starting attributes."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class ClassType(str, enum.Enum):
    KNIGHT = "knight"
    MAGE = "mage"
    ASSASSIN = "assassin"


@dataclass(frozen=True)
class CharacterClass:
    name: str
    emoji: str
    description: str
    class_type: ClassType
    health: int
    strength: int
    mana: int
    agility: int
    intelligence: int


KNIGHT = CharacterClass(
    name="Knight",
    emoji="⚔️",
    description=(
        "Loyal warriors who always stood on the front line to protect their people, no matter "
        "the odds. What mattered was the flame of their goddess Phoenix, which gave them hope to "
        "keep fighting. Pick the knight to honour her sacrifice and rekindle your strength."
    ),
    class_type=ClassType.KNIGHT,
    health=100,
    strength=20,
    mana=10,
    agility=5,
    intelligence=5,
)

MAGE = CharacterClass(
    name="Mage",
    emoji="🪄",
    description=(
        "Scholars who sought the safest and wisest way to act. They studied the anomalies of the "
        "Sun and helped Phoenix keep the people safe. Pick the mage to study this new world with "
        "your mystic knowledge."
    ),
    class_type=ClassType.MAGE,
    health=80,
    strength=5,
    mana=50,
    agility=8,
    intelligence=15,
)

ASSASSIN = CharacterClass(
    name="Assassin",
    emoji="🗡️",
    description=(
        "Independent and quick, they find their own swift and lethal solutions. They may not look "
        "loyal to Phoenix, but a hidden flame still burns in them. Pick the assassin to wipe out "
        "the anomalies as fast as possible."
    ),
    class_type=ClassType.ASSASSIN,
    health=60,
    strength=15,
    mana=15,
    agility=15,
    intelligence=10,
)

ALL_CLASSES: tuple[CharacterClass, ...] = (KNIGHT, MAGE, ASSASSIN)


def get_class_by_name(name: str) -> Optional[CharacterClass]:
    lowered = name.strip().lower()
    return next((c for c in ALL_CLASSES if c.name.lower() == lowered), None)


def get_class_by_type(class_type: ClassType) -> CharacterClass:
    for c in ALL_CLASSES:
        if c.class_type == class_type:
            return c
    raise KeyError(class_type)
