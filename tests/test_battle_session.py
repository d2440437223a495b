import inspect

import discord
import pytest

from phoenix_bot.utils.battle_engine import ActionType, Battle
from phoenix_bot.utils.battle_session import play_battle, send_history
from phoenix_bot.utils.views import BattleActionView, PaginationView


class FakeMessage:
    """Message stand-in that only accepts the arguments discord.Message does."""

    def __init__(self, kwargs):
        self.kwargs = kwargs
        self.edits = []
        self.delete_delays = []

    async def edit(self, **kwargs):
        inspect.signature(discord.Message.edit).bind(self, **kwargs)
        self.edits.append(kwargs)

    async def delete(self, **kwargs):
        inspect.signature(discord.Message.delete).bind(self, **kwargs)
        self.delete_delays.append(kwargs.get("delay"))


class FakeChannel:
    """Channel stand-in with the real `Messageable.send` signature.

    Battle action views are answered with ``press`` as soon as they are sent.
    """

    def __init__(self, press=ActionType.ATTACK):
        self.press = press
        self.sent = []

    async def send(self, *args, **kwargs):
        inspect.signature(discord.abc.Messageable.send).bind(self, *args, **kwargs)
        message = FakeMessage(kwargs)
        self.sent.append(message)
        view = kwargs.get("view")
        if isinstance(view, BattleActionView):
            view.choose(self.press)
        return message


@pytest.mark.asyncio
async def test_battle_posts_turns_and_short_lived_rounds(fighter_factory, no_luck_rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    channel = FakeChannel()

    result = await play_battle(channel, Battle([a, b], rng=no_luck_rng), action_timeout=5, round_ttl=3.0)

    assert result.winner is a
    turns = [m for m in channel.sent if isinstance(m.kwargs.get("view"), BattleActionView)]
    rounds = [m for m in channel.sent if "view" not in m.kwargs]
    assert len(turns) == len(rounds) == 9
    assert turns[0].kwargs["content"] == "<@1>"
    assert turns[1].kwargs["content"] == "<@2>"
    # buttons are disabled once the turn is over
    for message in turns:
        view = message.edits[-1]["view"]
        assert all(item.disabled for item in view.children)
    assert all(m.delete_delays == [3.0] for m in rounds)


@pytest.mark.asyncio
async def test_round_messages_kept_without_ttl(fighter_factory, no_luck_rng):
    channel = FakeChannel()
    await play_battle(channel, Battle([fighter_factory("A", 1), fighter_factory("B", 2)], rng=no_luck_rng),
                      action_timeout=5, round_ttl=None)
    assert all(m.delete_delays == [] for m in channel.sent)


@pytest.mark.asyncio
async def test_history_is_paged_three_rounds_at_a_time(fighter_factory, no_luck_rng):
    channel = FakeChannel()
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    result = await play_battle(channel, Battle([a, b], rng=no_luck_rng), action_timeout=5, round_ttl=None)

    view = await send_history(channel, result.battle, 1)

    assert isinstance(view, PaginationView)
    assert len(view.pages) == 3
    assert view.user_id == 1
    posted = channel.sent[-1].kwargs
    assert posted["view"] is view
    assert posted["embed"].footer.text == "Page 1/3"
    assert "Round 1:" in posted["embed"].description
    assert "Round 4:" not in posted["embed"].description
