from phoenix_bot.utils import battle_logs, battle_renderer
from phoenix_bot.utils.anomalies import AnomalyType, get_anomaly_from_type
from phoenix_bot.utils.battle_controller import BattleResult
from phoenix_bot.utils.battle_engine import ActionType, Battle


def finished_battle(fighter_factory, rng):
    a = fighter_factory("A", 1, strength=20)
    b = fighter_factory("B", 2, strength=15)
    battle = Battle([a, b], rng=rng)
    while battle.winner is None:
        battle.run_action(ActionType.ATTACK)
    return BattleResult(winner=battle.winner, all_fighters=list(battle.fighters),
                        defeated_fighters=battle.defeated_fighters(), battle=battle)


def test_archive_and_read_back(data_dir, fighter_factory, no_luck_rng):
    result = finished_battle(fighter_factory, no_luck_rng)
    entry = battle_logs.archive_result(result, "duel")

    assert (data_dir / battle_logs.LOG_FILE_NAME).exists()
    assert entry["winner"] == "A"
    assert entry["defeated"] == ["B"]
    assert len(entry["rounds"]) == 9
    assert entry["rounds"][0] == {"number": 1, "fighter": "A", "target": "B", "action": "attack",
                                  "damage": 20, "dodged": False, "critical": False}
    assert battle_logs.read_all_logs() == [entry]
    assert battle_logs.get_log_by_id(entry["battle_id"]) == entry
    assert battle_logs.get_log_by_id("missing") is None


def test_read_logs_skips_bad_lines(data_dir):
    (data_dir / battle_logs.LOG_FILE_NAME).write_text('{"battle_id": "x"}\nnot json\n\n', encoding="utf-8")
    assert battle_logs.read_all_logs() == [{"battle_id": "x"}]


def test_round_frames_and_history_pages(fighter_factory, no_luck_rng):
    result = finished_battle(fighter_factory, no_luck_rng)
    frames = battle_renderer.render_round_frames(result.battle.rounds)
    assert len(frames) == 9
    assert frames[0].startswith("Round 1: **A** attacked **B**")
    pages = battle_renderer.history_pages(result.battle, per_page=4)
    assert len(pages) == 3
    assert battle_renderer.render_round_frames([]) == ["No combat occurred."]


def test_embeds(fighter_factory, no_luck_rng):
    a, b = fighter_factory("A", 1), fighter_factory("B", 2)
    battle = Battle([a, b], rng=no_luck_rng)
    state = battle_renderer.battle_state_embed(battle)
    assert state.title == "⚔️ A's turn"
    assert [f.name for f in state.fields] == ["A", "B"]

    rnd = battle.run_action(ActionType.ATTACK)
    embed = battle_renderer.round_embed(rnd, battle)
    assert embed.title == "Round 1"
    assert "**80**/100" in embed.fields[0].value

    anomaly = get_anomaly_from_type(AnomalyType.ORC)
    preview = battle_renderer.anomaly_preview_embed(anomaly, a)
    assert "Orc" in preview.title
    assert "Gold" in preview.fields[1].value

    result = finished_battle(fighter_factory, no_luck_rng)
    assert "A won" in battle_renderer.result_embed(result).title
