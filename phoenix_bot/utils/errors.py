"""Exceptions raised by the Phoenix game core.

Cogs catch `PhoenixError` and turn it into an error embed; anything else is
treated as a bug and reaches the global command error handler.
"""
from __future__ import annotations


class PhoenixError(Exception):
    """Base class for game errors that can be shown to a player."""


class InsufficientFighters(PhoenixError):
    """A battle needs at least two participants."""


class NoValidArchetype(PhoenixError):
    """No anomaly archetype is allowed in the requested region."""

    def __init__(self, region: object) -> None:
        super().__init__(f"No anomaly archetype can appear in region {region!s}")
        self.region = region


class InvalidAction(PhoenixError):
    """The action is unknown to the battle engine."""


class ActionTimeout(PhoenixError):
    """The player did not choose an action in time."""

    def __init__(self, fighter_name: str, timeout: float | None = None) -> None:
        msg = f"{fighter_name} did not choose an action"
        if timeout is not None:
            msg += f" within {timeout:g}s"
        super().__init__(msg)
        self.fighter_name = fighter_name
        self.timeout = timeout


class BattleAlreadyResolved(PhoenixError):
    """An action was submitted after the battle already had a winner."""


class CharacterNotFound(PhoenixError):
    """The user has not started their journey yet."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No character registered for user {user_id}")
        self.user_id = user_id
