import pytest

from rivals.config import GameConfig
from rivals.engine.engine import TurnEngine
from rivals.engine.observers import DICE_ROLLED, GAME_INITIALIZED, GAME_WON, PHASE_CHANGED, TURN_STARTED
from rivals.engine.types import GamePhase


def _engine(player_factory, dice, **config):
    engine = TurnEngine(GameConfig(seed=3, **config), dice=dice)
    engine.add_player(player_factory("Ada"))
    engine.add_player(player_factory("Bo"))
    return engine


def _phases_of_first_turn(events):
    start = next(i for i, event in enumerate(events) if event.type == TURN_STARTED)
    return [event.payload["new_phase"] for event in events[start:] if event.type == PHASE_CHANGED]


def test_brigand_runs_event_before_production(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(3, 1)]))
    events = []
    engine.add_listener(events.append)

    engine.play_turn()

    assert _phases_of_first_turn(events)[:3] == ["event", "production", "action"]


def test_other_events_run_after_production(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(3, 2)]))
    events = []
    engine.add_listener(events.append)

    engine.play_turn()

    assert _phases_of_first_turn(events) == [
        "production",
        "event",
        "action",
        "replenish",
        "exchange",
        "victory_check",
        "roll_dice",
    ]


def test_turns_alternate_and_roll_is_published(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(2, 3), (5, 4)]))
    events = []
    engine.add_listener(events.append)

    engine.play_turn()
    assert engine.active_player.name == "Bo"
    engine.play_turn()
    assert engine.active_player.name == "Ada"

    types = [event.type for event in events]
    assert types[0] == GAME_INITIALIZED
    rolls = [event.payload for event in events if event.type == DICE_ROLLED]
    assert [(r["production"], r["event"], r["player"]) for r in rolls] == [(2, 3, "Ada"), (5, 4, "Bo")]


def test_production_reaches_both_players(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(2, 2)]))
    engine.play_turn()
    ada, bo = engine.players
    # face 2 is Ada's Forest and Bo's Hill
    assert ada.board.card_at(1, 0).stored_resources == 2
    assert bo.board.card_at(3, 0).stored_resources == 2


def test_engine_requires_two_players(player_factory):
    engine = TurnEngine()
    engine.add_player(player_factory("Ada"))
    with pytest.raises(ValueError):
        engine.initialize()
    engine.add_player(player_factory("Bo"))
    with pytest.raises(ValueError):
        engine.add_player(player_factory("Cy"))


def test_run_stops_at_turn_limit(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(1, 2)] * 3))
    assert engine.run(max_turns=3) is None
    assert engine.turn == 3
    assert engine.phase == GamePhase.ROLL_DICE


def test_game_ends_when_threshold_reached(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(1, 2)]), victory_points=2)
    events = []
    engine.add_listener(events.append)

    winner = engine.run()

    assert winner is engine.players[0]
    assert engine.is_over
    assert engine.play_turn() is winner
    won = [event for event in events if event.type == GAME_WON]
    assert won[0].payload == {"winner": "Ada", "points": 2}


def test_failing_listener_does_not_stop_the_game(player_factory, fixed_dice):
    engine = _engine(player_factory, fixed_dice([(1, 2)]))
    seen = []

    def broken(event):
        raise RuntimeError("listener bug")

    engine.add_listener(broken)
    engine.add_listener(seen.append)

    engine.play_turn()

    assert engine.turn == 1
    assert any(event.type == TURN_STARTED for event in seen)


def test_players_use_configured_prompt_attempts(player_factory):
    engine = TurnEngine(GameConfig(seed=3, max_prompt_attempts=5))
    engine.add_player(player_factory("Ada"))
    engine.add_player(player_factory("Bo", ["x"] * 5 + ["0"]))
    engine.initialize()

    assert [player.max_prompt_attempts for player in engine.players] == [5, 5]
    bo = engine.players[1]
    assert bo.choose_card_from_hand("Pick") is None
    assert bo.messages.count("Invalid input!") == 5
