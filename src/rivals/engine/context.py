from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from rivals.config import GameConfig, INTRODUCTORY_GAME

from .victory import VictoryCondition

if TYPE_CHECKING:
    from .dice import DiceRoll
    from .player import Player
    from .supply import Supply


@dataclass
class TurnContext:
    """Everything a phase or event handler may touch during one turn."""

    active: "Player"
    opponent: "Player"
    supply: "Supply"
    config: GameConfig = INTRODUCTORY_GAME
    victory: VictoryCondition = VictoryCondition()
    roll: Optional["DiceRoll"] = None
    turn: int = 0
    winner: Optional["Player"] = None

    @property
    def players(self) -> List["Player"]:
        return [self.active, self.opponent]

    def other(self, player: "Player") -> "Player":
        return self.opponent if player is self.active else self.active

    def broadcast(self, text: str) -> None:
        for player in self.players:
            player.send_message(text)
