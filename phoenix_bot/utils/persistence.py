"""Character and cooldown storage.

Uses the asyncpg pool from `phoenix_bot.utils.db` when one is initialised and
otherwise stores documents in `data/characters.json` and `data/cooldowns.json`.
File I/O runs through asyncio.to_thread and writes are serialised per file.
"""
from __future__ import annotations

import asyncio
import enum
import json
import os
import time
from pathlib import Path
from typing import Dict, Optional

from phoenix_bot.utils import db
from phoenix_bot.utils.characters import CharacterRecord
from phoenix_bot.utils.errors import CharacterNotFound
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.persistence")

DATA_DIR = Path(os.getenv("PHOENIX_DATA_DIR") or Path(__file__).resolve().parents[1] / "data")
CHARACTERS_FILE = "characters.json"
COOLDOWNS_FILE = "cooldowns.json"

_locks: Dict[str, asyncio.Lock] = {}


class CooldownType(str, enum.Enum):
    REST = "rest"


def _get_lock(name: str) -> asyncio.Lock:
    if name not in _locks:
        _locks[name] = asyncio.Lock()
    return _locks[name]


def _path(name: str) -> Path:
    # resolved on each call so tests can monkeypatch DATA_DIR
    return DATA_DIR / name


async def _read_json(name: str) -> dict:
    path = _path(name)
    if not path.exists():
        return {}
    content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    try:
        return json.loads(content or "{}")
    except json.JSONDecodeError:
        logger.warning("Corrupt store %s, starting empty", path)
        return {}


async def _write_json(name: str, data: dict) -> None:
    path = _path(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(data, indent=2, ensure_ascii=False)
    await asyncio.to_thread(path.write_text, text, encoding="utf-8")


def now_ms() -> int:
    return int(time.time() * 1000)


# ----- characters
async def get_character(user_id) -> Optional[CharacterRecord]:
    """Return the stored character of ``user_id`` or None."""
    key = str(user_id)
    pool = db.get_pool()
    if pool is not None:
        row = await pool.fetchrow("SELECT data FROM characters WHERE user_id = $1", key)
        if row is None:
            return None
        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        return CharacterRecord.from_document(data)

    store = await _read_json(CHARACTERS_FILE)
    doc = store.get(key)
    return CharacterRecord.from_document(doc) if doc is not None else None


async def require_character(user_id) -> CharacterRecord:
    record = await get_character(user_id)
    if record is None:
        raise CharacterNotFound(user_id)
    return record


async def is_registered(user_id) -> bool:
    key = str(user_id)
    pool = db.get_pool()
    if pool is not None:
        return bool(await pool.fetchval("SELECT 1 FROM characters WHERE user_id = $1", key))
    store = await _read_json(CHARACTERS_FILE)
    return key in store


async def save_character(record: CharacterRecord) -> None:
    """Insert or replace the document of ``record.user_id``."""
    doc = record.to_document()
    pool = db.get_pool()
    if pool is not None:
        async with db.transaction() as conn:
            await conn.execute(
                "INSERT INTO characters (user_id, data) VALUES ($1, $2) "
                "ON CONFLICT (user_id) DO UPDATE SET data = EXCLUDED.data, updated_at = now()",
                record.user_id, doc,
            )
        return

    async with _get_lock(CHARACTERS_FILE):
        store = await _read_json(CHARACTERS_FILE)
        store[record.user_id] = doc
        await _write_json(CHARACTERS_FILE, store)


async def register_character(record: CharacterRecord) -> bool:
    """Store ``record`` unless the user already has a character.

    Returns True when the character was created.
    """
    doc = record.to_document()
    pool = db.get_pool()
    if pool is not None:
        async with db.transaction() as conn:
            status = await conn.execute(
                "INSERT INTO characters (user_id, data) VALUES ($1, $2) ON CONFLICT (user_id) DO NOTHING",
                record.user_id, doc,
            )
        created = status.endswith(" 1")
    else:
        async with _get_lock(CHARACTERS_FILE):
            store = await _read_json(CHARACTERS_FILE)
            created = record.user_id not in store
            if created:
                store[record.user_id] = doc
                await _write_json(CHARACTERS_FILE, store)
    if created:
        logger.info("Registered character %s (%s)", record.user_id, record.class_type.value)
    return created


# ----- cooldowns
async def get_cooldown(user_id, cooldown_type: CooldownType) -> Optional[int]:
    """Return the expiry (epoch ms) of a cooldown, or None if never set."""
    key = str(user_id)
    pool = db.get_pool()
    if pool is not None:
        return await pool.fetchval(
            "SELECT expires_at FROM cooldowns WHERE user_id = $1 AND cooldown_type = $2",
            key, cooldown_type.value,
        )
    store = await _read_json(COOLDOWNS_FILE)
    return store.get(key, {}).get(cooldown_type.value)


async def set_cooldown(user_id, cooldown_type: CooldownType, duration_seconds: float,
                       now: Optional[int] = None) -> int:
    """Start a cooldown lasting ``duration_seconds``; returns its expiry in ms."""
    key = str(user_id)
    now = now if now is not None else now_ms()
    expires_at = now + int(duration_seconds * 1000)
    pool = db.get_pool()
    if pool is not None:
        async with db.transaction() as conn:
            await conn.execute(
                "INSERT INTO cooldowns (user_id, cooldown_type, expires_at) VALUES ($1, $2, $3) "
                "ON CONFLICT (user_id, cooldown_type) DO UPDATE SET expires_at = EXCLUDED.expires_at",
                key, cooldown_type.value, expires_at,
            )
        return expires_at

    async with _get_lock(COOLDOWNS_FILE):
        store = await _read_json(COOLDOWNS_FILE)
        store.setdefault(key, {})[cooldown_type.value] = expires_at
        await _write_json(COOLDOWNS_FILE, store)
    return expires_at


async def cooldown_remaining(user_id, cooldown_type: CooldownType, now: Optional[int] = None) -> int:
    """Milliseconds left on a cooldown, 0 when it is not active."""
    expires_at = await get_cooldown(user_id, cooldown_type)
    if expires_at is None:
        return 0
    now = now if now is not None else now_ms()
    return max(int(expires_at) - now, 0)


async def delete_all_cooldowns() -> int:
    """Clear every cooldown of every user; returns how many were removed."""
    pool = db.get_pool()
    if pool is not None:
        async with db.transaction() as conn:
            status = await conn.execute("DELETE FROM cooldowns")
        removed = int(status.split()[-1])
    else:
        async with _get_lock(COOLDOWNS_FILE):
            store = await _read_json(COOLDOWNS_FILE)
            removed = sum(len(entries) for entries in store.values())
            await _write_json(COOLDOWNS_FILE, {})
    logger.info("Reset %s cooldowns", removed)
    return removed
