"""Battle participants.

A `Fighter` is a snapshot of a character or an anomaly taken when a battle
starts; mutating it never touches the source record.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from phoenix_bot.utils import formulas
from phoenix_bot.utils.anomalies import Anomaly
from phoenix_bot.utils.stats import Probability, Stat

if TYPE_CHECKING:
    from phoenix_bot.utils.battle_engine import ActionType, Battle
    from phoenix_bot.utils.characters import CharacterRecord

DEFAULT_AVATAR = "https://cdn.discordapp.com/embed/avatars/0.png"


@dataclass(frozen=True)
class UserOwner:
    user_id: int
    avatar_url: Optional[str] = None


@dataclass
class Fighter:
    name: str
    health: Stat
    mana: Stat
    strength: int
    agility: int
    intelligence: int
    user: Optional[UserOwner] = None
    anomaly: Optional[Anomaly] = None
    target_index: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if (self.user is None) == (self.anomaly is None):
            raise ValueError("A fighter is owned by exactly one of a user or an anomaly")

    @classmethod
    def from_character(cls, record: "CharacterRecord", user_id: int, name: str,
                       avatar_url: Optional[str] = None) -> "Fighter":
        return cls(
            name=name,
            user=UserOwner(user_id=int(user_id), avatar_url=avatar_url),
            health=record.health.model_copy(),
            mana=record.mana.model_copy(),
            strength=record.strength,
            agility=record.agility,
            intelligence=record.intelligence,
        )

    @classmethod
    def from_anomaly(cls, anomaly: Anomaly) -> "Fighter":
        return cls(
            name=anomaly.name,
            anomaly=anomaly,
            health=anomaly.health.model_copy(),
            mana=anomaly.mana.model_copy(),
            strength=anomaly.strength,
            agility=anomaly.agility,
            intelligence=anomaly.intelligence,
        )

    @property
    def is_anomaly(self) -> bool:
        return self.anomaly is not None

    @property
    def is_alive(self) -> bool:
        return self.health.value > 0

    @property
    def image(self) -> str:
        if self.anomaly is not None:
            return self.anomaly.image
        return (self.user.avatar_url if self.user else None) or DEFAULT_AVATAR

    def calculate_damage(self, critical: bool, rng: Optional[random.Random] = None) -> int:
        return formulas.damage(self.strength, critical, rng)

    def calculate_dodge_chance(self, other: "Fighter") -> Probability:
        """Chance that this fighter dodges an attack from ``other``."""
        return formulas.dodge_chance(self.agility, other.agility)

    def calculate_critical_chance(self, other: "Fighter") -> Probability:
        """Chance that this fighter lands a critical hit on ``other``."""
        return formulas.critical_chance(self.intelligence, other.intelligence)

    def take_damage(self, amount: int) -> None:
        self.health.subtract_value(max(0, int(amount)))

    def choose_action_type(self, battle: "Battle") -> "ActionType":
        """Action picked by an anomaly-controlled fighter."""
        from phoenix_bot.utils.battle_engine import ActionType

        return ActionType.ATTACK

    def stats_summary(self, target: Optional["Fighter"] = None) -> str:
        lines = [
            f"❤️ Health: {self.health} (`{self.health.percentage()}%`)",
            f"🌀 Mana: {self.mana} (`{self.mana.percentage()}%`)",
            f"💪 Strength: {self.strength}",
            f"⚡ Agility: {self.agility}",
            f"🧠 Intelligence: {self.intelligence}",
        ]
        if target is not None:
            lines.append(f"🪶 Dodge: {self.calculate_dodge_chance(target)}")
            lines.append(f"💥 Critical: {self.calculate_critical_chance(target)}")
        return "\n".join(lines)
