"""Bounded resources (health, mana) and percentage probabilities.

`Stat` is a pydantic model so it can live inside the persisted character
document as ``{"value": v, "max": m}``.
"""
from __future__ import annotations

import random
from typing import Optional

from pydantic import BaseModel, model_validator


class Stat(BaseModel):
    """A current/max pair. ``0 <= value <= max`` always holds."""

    value: int = 100
    max: int = 100

    @model_validator(mode="after")
    def _clamp(self) -> "Stat":
        if self.max < 0:
            self.max = 0
        self.value = min(max(self.value, 0), self.max)
        return self

    @classmethod
    def new(cls, value: int) -> "Stat":
        return cls(value=value, max=value)

    def percentage(self) -> int:
        """Current value as a truncated percentage of max (0 when max is 0)."""
        if self.max <= 0:
            return 0
        return int(self.value / self.max * 100)

    def restore(self) -> None:
        self.value = self.max

    def set_value(self, amount: int) -> None:
        self.value = min(max(int(amount), 0), self.max)

    def add_value(self, amount: int) -> None:
        self.set_value(self.value + int(amount))

    def subtract_value(self, amount: int) -> None:
        self.set_value(self.value - int(amount))

    def add_max_value(self, amount: int) -> None:
        # growing the pool grows the current value with it
        self.max += int(amount)
        if self.max < 0:
            self.max = 0
        self.add_value(amount)

    def subtract_max_value(self, amount: int) -> None:
        self.max = max(self.max - int(amount), 0)
        self.value = min(self.value, self.max)

    def __str__(self) -> str:
        return f"**{self.value}**/{self.max}"


class Probability:
    """Integer percentage in [0, 100] that can be rolled as a weighted coin."""

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = min(max(int(value), 0), 100)

    def roll(self, rng: Optional[random.Random] = None) -> bool:
        if rng is None:
            rng = random.Random()
        if self.value <= 0:
            return False
        if self.value >= 100:
            return True
        return rng.random() < self.value / 100

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Probability):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Probability({self.value})"

    def __str__(self) -> str:
        return f"{self.value}%"
