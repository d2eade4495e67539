"""
Engine notifications for UIs, loggers and tests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from rivals.utils.logging import get_logger

logger = get_logger(__name__)

GAME_INITIALIZED = "game_initialized"
TURN_STARTED = "turn_started"
PHASE_CHANGED = "phase_changed"
DICE_ROLLED = "dice_rolled"
GAME_WON = "game_won"


@dataclass
class GameEvent:
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


Listener = Callable[[GameEvent], None]


def game_initialized(players: List[str]) -> GameEvent:
    return GameEvent(GAME_INITIALIZED, {"players": players})


def turn_started(turn: int, player: str) -> GameEvent:
    return GameEvent(TURN_STARTED, {"turn": turn, "player": player})


def phase_changed(old_phase: str, new_phase: str, player: str) -> GameEvent:
    return GameEvent(PHASE_CHANGED, {"old_phase": old_phase, "new_phase": new_phase, "player": player})


def dice_rolled(production: int, event: int, player: str) -> GameEvent:
    return GameEvent(DICE_ROLLED, {"production": production, "event": event, "player": player})


def game_won(winner: str, points: int) -> GameEvent:
    return GameEvent(GAME_WON, {"winner": winner, "points": points})


class EventBus:
    """Synchronous fan-out in registration order. A failing listener is logged and skipped."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def publish(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("listener_failed", event_type=event.type, listener=repr(listener))
