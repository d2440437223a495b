"""Turn-based battle state machine.

`Battle.run_action` resolves exactly one action for the current fighter and
returns the resulting `Round`. It does no I/O and no waiting; the caller (see
`battle_controller`) drives the loop. Randomness comes from the ``rng`` given
to the battle or to the call, so seeded battles are repeatable in tests.
"""
from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from phoenix_bot.utils.errors import BattleAlreadyResolved, InsufficientFighters, InvalidAction
from phoenix_bot.utils.fighter import Fighter


class ActionType(str, enum.Enum):
    ATTACK = "attack"

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self]

    @property
    def emoji(self) -> str:
        return _ACTION_EMOJIS[self]

    @classmethod
    def from_name(cls, name: str) -> "ActionType":
        """Look up an action by value or label, raising `InvalidAction`."""
        lowered = str(name).strip().lower()
        for action in cls:
            if lowered in (action.value, action.label.lower()):
                return action
        raise InvalidAction(f"Unknown action: {name!r}")


_ACTION_LABELS = {ActionType.ATTACK: "Attack"}
_ACTION_EMOJIS = {ActionType.ATTACK: "👊"}

ALL_ACTION_TYPES: Tuple[ActionType, ...] = tuple(ActionType)


class EffectKind(str, enum.Enum):
    DAMAGE = "damage"
    REMOVE_MANA = "remove_mana"


@dataclass(frozen=True)
class BattleEffect:
    kind: EffectKind
    amount: int


@dataclass(frozen=True)
class Round:
    """Immutable record of one resolved action."""

    number: int
    fighter_index: int
    target_index: int
    fighter_name: str
    target_name: str
    action: ActionType
    effects: Tuple[BattleEffect, ...]
    messages: Tuple[str, ...]
    damage: int = 0
    dodged: bool = False
    critical: bool = False


class Battle:
    """Owns its fighters; `run_action` is the only way to mutate them."""

    def __init__(self, fighters: Sequence[Fighter], rng: Optional[random.Random] = None) -> None:
        fighters = list(fighters)
        if len(fighters) < 2:
            raise InsufficientFighters(f"A battle needs at least 2 fighters, got {len(fighters)}")
        if len({id(f) for f in fighters}) != len(fighters):
            raise ValueError("The same Fighter instance cannot fight on two sides")

        n = len(fighters)
        for i, fighter in enumerate(fighters):
            fighter.target_index = (i + 1) % n

        self._fighters: List[Fighter] = fighters
        self._current = 0
        self._winner: Optional[Fighter] = None
        self._rounds: List[Round] = []
        self._rng = rng if rng is not None else random.Random()

    # ----- read-only views
    @property
    def fighters(self) -> Tuple[Fighter, ...]:
        return tuple(self._fighters)

    @property
    def rounds(self) -> Tuple[Round, ...]:
        return tuple(self._rounds)

    @property
    def winner(self) -> Optional[Fighter]:
        return self._winner

    @property
    def is_resolved(self) -> bool:
        return self._winner is not None

    @property
    def current_fighter_index(self) -> int:
        return self._current

    @property
    def current_fighter(self) -> Fighter:
        return self._fighters[self._current]

    @property
    def target_fighter(self) -> Fighter:
        return self._fighters[self._resolve_target(self._current)]

    def alive_fighters(self) -> List[Fighter]:
        return [f for f in self._fighters if f.is_alive]

    def defeated_fighters(self) -> List[Fighter]:
        return [f for f in self._fighters if not f.is_alive]

    def next_fighter_index(self) -> int:
        n = len(self._fighters)
        nxt = (self._current + 1) % n
        if self._winner is not None:
            return nxt
        # with more than two fighters, dead ones lose their turn
        for _ in range(n):
            if self._fighters[nxt].is_alive:
                return nxt
            nxt = (nxt + 1) % n
        return nxt

    def _resolve_target(self, index: int) -> int:
        """Ring target of fighter ``index``, skipping dead fighters clockwise.

        With two fighters this is always the fixed ring target.
        """
        fighter = self._fighters[index]
        n = len(self._fighters)
        target = fighter.target_index if fighter.target_index is not None else (index + 1) % n
        for _ in range(n - 1):
            if target != index and self._fighters[target].is_alive:
                break
            target = (target + 1) % n
        if target == index:
            target = fighter.target_index if fighter.target_index is not None else (index + 1) % n
        return target

    # ----- transition
    def run_action(self, action_type: ActionType | str, rng: Optional[random.Random] = None) -> Round:
        """Resolve one action for the current fighter.

        Raises:
            InvalidAction: ``action_type`` is not a known action.
            BattleAlreadyResolved: the battle already has a winner.
        """
        if not isinstance(action_type, ActionType):
            action_type = ActionType.from_name(action_type)
        if self._winner is not None:
            raise BattleAlreadyResolved(f"{self._winner.name} already won this battle")
        rng = rng if rng is not None else self._rng

        attacker_index = self._current
        target_index = self._resolve_target(attacker_index)
        attacker = self._fighters[attacker_index]
        target = self._fighters[target_index]

        dodged = target.calculate_dodge_chance(attacker).roll(rng)
        critical = attacker.calculate_critical_chance(target).roll(rng)

        if action_type is ActionType.ATTACK:
            dmg = 0 if dodged else attacker.calculate_damage(critical, rng)
            messages = [f"**{attacker.name}** attacked **{target.name}** with a simple blow, dealing **{dmg}** damage."]
            if critical and not dodged:
                messages[0] += "\n(**CRITICAL HIT!** 💥)"
            if dodged:
                messages.append(f"🪶 **{target.name}** dodged!")
            else:
                target.take_damage(dmg)
            effects: Tuple[BattleEffect, ...] = (BattleEffect(EffectKind.DAMAGE, dmg),)
        else:  # pragma: no cover - every ActionType is handled above
            raise InvalidAction(f"Unhandled action: {action_type!r}")

        rnd = Round(
            number=len(self._rounds) + 1,
            fighter_index=attacker_index,
            target_index=target_index,
            fighter_name=attacker.name,
            target_name=target.name,
            action=action_type,
            effects=effects,
            messages=tuple(messages),
            damage=dmg,
            dodged=dodged,
            critical=critical,
        )
        self._rounds.append(rnd)

        alive = self.alive_fighters()
        if len(alive) == 1:
            self._winner = alive[0]

        self._current = self.next_fighter_index()
        return rnd
