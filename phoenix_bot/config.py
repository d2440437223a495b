"""Configuration loader for Phoenix.

This module provides a small, dependency-light Settings class that reads
environment variables (and a .env file via python-dotenv). It also exposes a
small `validate()` helper to perform automated `.env` checks at startup.
"""
from typing import Optional, List
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw else None


class Settings:
    """Settings read once from the environment at import time."""

    TOKEN: Optional[str] = os.getenv("TOKEN")
    DEV_GUILD_ID: Optional[int] = _optional_int("DEV_GUILD_ID")
    OWNER_ID: Optional[int] = _optional_int("OWNER_ID")
    DEV_MODE: bool = _flag("DEV_MODE", "true")

    # Database; file-backed JSON under PHOENIX_DATA_DIR when DATABASE_URL is unset
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
    DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
    PHOENIX_DATA_DIR: Optional[str] = os.getenv("PHOENIX_DATA_DIR")

    # Gameplay timings (seconds unless noted)
    BATTLE_ACTION_TIMEOUT: float = float(os.getenv("BATTLE_ACTION_TIMEOUT", "500"))
    CONFIRMATION_TIMEOUT: float = float(os.getenv("CONFIRMATION_TIMEOUT", "60"))
    CLASS_SELECT_TIMEOUT: float = float(os.getenv("CLASS_SELECT_TIMEOUT", "120"))
    REST_COOLDOWN_MINUTES: int = int(os.getenv("REST_COOLDOWN_MINUTES", "20"))
    MIN_ADVENTURE_HEALTH: int = int(os.getenv("MIN_ADVENTURE_HEALTH", "15"))
    ROUND_MESSAGE_TTL: float = float(os.getenv("ROUND_MESSAGE_TTL", "5"))

    # Health endpoint
    HEALTH_HOST: str = os.getenv("HEALTH_HOST", "0.0.0.0")
    HEALTH_PORT: int = int(os.getenv("HEALTH_PORT", "8080"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def validate(self, required: Optional[List[str]] = None) -> List[str]:
        """Validate required environment variables.

        Args:
            required: list of attribute names to check (e.g. ["TOKEN"]). If
                omitted, defaults to checking at least `TOKEN`.

        Returns:
            A list of missing attribute names (empty if all present).
        """
        if required is None:
            required = ["TOKEN"]

        missing: List[str] = []
        for name in required:
            val = getattr(self, name, None)
            if val is None or (isinstance(val, str) and not val.strip()):
                missing.append(name)

        return missing
