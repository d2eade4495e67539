from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from .engine import TurnEngine
from .player import Player


def _serialize_player(player: Player) -> Dict[str, Any]:
    return {
        "name": player.name,
        "points": player.points(),
        "resources": {rtype.value: amount for rtype, amount in player.bank.summary().items()},
        "hand": [card.name for card in player.hand],
        "capabilities": sorted(cap.value for cap in player.flags),
        "board": [[_serialize_cell(card) for card in row] for row in player.board.cells()],
    }


def _serialize_cell(card) -> Optional[Dict[str, Any]]:
    if card is None:
        return None
    cell: Dict[str, Any] = {"name": card.name, "type": card.card_type.value}
    if card.is_region:
        cell["dice_roll"] = card.dice_roll
        cell["stored"] = card.stored_resources
    return cell


def serialize_engine(engine: TurnEngine) -> Dict[str, Any]:
    players: List[Dict[str, Any]] = [_serialize_player(player) for player in engine.players]
    return {
        "turn": engine.turn,
        "phase": engine.phase.value,
        "active_player": engine.active_player.name if engine.active_player else None,
        "winner": engine.winner.name if engine.winner else None,
        "last_roll": engine.last_roll.to_dict() if engine.last_roll else None,
        "players": players,
        "supply": engine.supply.summary() if engine.supply else None,
    }


class GameSession:
    """One game behind a lock, for callers that reach it from several threads."""

    def __init__(self, engine: TurnEngine):
        self.engine = engine
        self._lock = threading.Lock()

    def play_turn(self) -> Dict[str, Any]:
        with self._lock:
            self.engine.play_turn()
            return serialize_engine(self.engine)

    def run(self, max_turns: Optional[int] = None) -> Dict[str, Any]:
        with self._lock:
            self.engine.run(max_turns=max_turns)
            return serialize_engine(self.engine)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return serialize_engine(self.engine)
