"""Battle log archive.

Appends a summary of each finished battle to data/battle_logs.jsonl and can
load entries back for inspection.
"""
from __future__ import annotations

from pathlib import Path
import json
import os
import time
import uuid
from typing import Dict, Any, List, Optional

from phoenix_bot.utils.battle_controller import BattleResult
from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.battle_logs")

DATA_DIR = Path(os.getenv("PHOENIX_DATA_DIR") or Path(__file__).resolve().parents[1] / "data")
LOG_FILE_NAME = "battle_logs.jsonl"


def _log_file() -> Path:
    return DATA_DIR / LOG_FILE_NAME


def result_to_entry(result: BattleResult, kind: str) -> Dict[str, Any]:
    """Summarise a finished battle as a JSON-serialisable dict."""
    return {
        "battle_id": uuid.uuid4().hex,
        "kind": kind,
        "timestamp": int(time.time()),
        "winner": result.winner.name,
        "fighters": [f.name for f in result.all_fighters],
        "defeated": [f.name for f in result.defeated_fighters],
        "rounds": [
            {
                "number": r.number,
                "fighter": r.fighter_name,
                "target": r.target_name,
                "action": r.action.value,
                "damage": r.damage,
                "dodged": r.dodged,
                "critical": r.critical,
            }
            for r in result.battle.rounds
        ],
    }


def append_battle_log(entry: Dict[str, Any]) -> None:
    path = _log_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry) + "\n")


def archive_result(result: BattleResult, kind: str) -> Dict[str, Any]:
    entry = result_to_entry(result, kind)
    append_battle_log(entry)
    logger.debug("Archived battle %s (%s)", entry["battle_id"], kind)
    return entry


def read_all_logs(limit: Optional[int] = 100) -> List[Dict[str, Any]]:
    path = _log_file()
    if not path.exists():
        return []
    out: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            if not line.strip():
                continue
            try:
                out.append(json.loads(line))
            except json.JSONDecodeError:
                logger.warning("Skipping malformed battle log line")
    if limit is not None:
        return out[-limit:]
    return out


def get_log_by_id(battle_id: str) -> Optional[Dict[str, Any]]:
    for entry in read_all_logs(limit=None):
        if str(entry.get("battle_id")) == str(battle_id):
            return entry
    return None
