from types import SimpleNamespace

import pytest
from discord import app_commands

from phoenix_bot.cogs.core.core import describe_error
from phoenix_bot.cogs.owner.owner import battle_log_embed, is_bot_owner, recent_logs_text
from phoenix_bot.utils import battle_logs
from phoenix_bot.utils.battle_controller import run_battle
from phoenix_bot.utils.battle_engine import ActionType, Battle


class FakeClient:
    def __init__(self, owner_id):
        self.owner_id = owner_id

    async def is_owner(self, user):
        return user.id == self.owner_id


@pytest.mark.asyncio
async def test_owner_check():
    client = FakeClient(owner_id=42)
    assert await is_bot_owner(SimpleNamespace(client=client, user=SimpleNamespace(id=42)))
    assert not await is_bot_owner(SimpleNamespace(client=client, user=SimpleNamespace(id=7)))


def test_check_failure_message():
    assert describe_error(app_commands.CheckFailure()) == "You are not allowed to use this command."


@pytest.mark.asyncio
async def test_archived_battle_can_be_looked_up(data_dir, fighter_factory, no_luck_rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)

    async def attack(fighter, battle):
        return ActionType.ATTACK

    result = await run_battle(Battle([a, b], rng=no_luck_rng), attack)
    entry = battle_logs.archive_result(result, "duel")

    found = battle_logs.get_log_by_id(entry["battle_id"])
    embed = battle_log_embed(found)
    assert embed.title == f"Battle {entry['battle_id']}"
    assert "`1` A → B: 20 dmg" in embed.description
    assert {f.name: f.value for f in embed.fields}["Winner"] == "A"

    listing = recent_logs_text(battle_logs.read_all_logs(10))
    assert entry["battle_id"] in listing
    assert "A vs B, A won" in listing


def test_recent_logs_empty():
    assert recent_logs_text([]) == "No battles recorded yet."
