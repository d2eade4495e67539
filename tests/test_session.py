import json
import threading

from rivals.agents import RandomPlayer, ScriptedPlayer
from rivals.config import GameConfig
from rivals.engine.engine import TurnEngine
from rivals.engine.session import GameSession


def _random_engine(seed=21):
    engine = TurnEngine(GameConfig(seed=seed, max_actions_per_turn=10))
    engine.add_player(RandomPlayer("Ada", seed=seed))
    engine.add_player(RandomPlayer("Bo", seed=seed + 1))
    return engine


def test_snapshot_is_json_safe():
    engine = TurnEngine(GameConfig(seed=4))
    engine.add_player(ScriptedPlayer("Ada"))
    engine.add_player(ScriptedPlayer("Bo"))
    session = GameSession(engine)

    state = session.play_turn()

    encoded = json.loads(json.dumps(state))
    assert encoded["turn"] == 1
    assert encoded["active_player"] == "Bo"
    assert encoded["winner"] is None
    assert set(encoded["last_roll"]) == {"production", "event", "event_name"}
    ada = encoded["players"][0]
    assert ada["points"]["victory"] == 2
    assert ada["board"][2][1]["name"] == "Settlement"
    assert ada["board"][0][0] is None
    assert len(ada["hand"]) == 3


def test_snapshot_before_start():
    engine = TurnEngine()
    state = GameSession(engine).snapshot()
    assert state["phase"] == "setup"
    assert state["players"] == []
    assert state["last_roll"] is None


def test_random_game_keeps_region_invariants():
    engine = _random_engine()

    GameSession(engine).run(max_turns=60)

    for player in engine.players:
        for pos in player.board.regions():
            assert 0 <= pos.card.stored_resources <= 3
        assert player.victory_points >= 2
        for row in (0, player.board.row_count - 1):
            assert all(card is None for card in player.board.cells()[row])


def test_concurrent_turns_are_serialized():
    session = GameSession(_random_engine(seed=8))
    turns = []

    def worker():
        for _ in range(5):
            turns.append(session.play_turn()["turn"])

    threads = [threading.Thread(target=worker) for _ in range(3)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if session.snapshot()["winner"] is None:
        assert sorted(turns) == list(range(1, 16))
