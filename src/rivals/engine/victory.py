from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .player import Player

INTRODUCTORY_POINTS = 7
THEME_GAME_POINTS = 12


@dataclass(frozen=True)
class VictoryCondition:
    required_points: int = INTRODUCTORY_POINTS
    advantage_lead: int = 3

    @classmethod
    def introductory(cls) -> "VictoryCondition":
        return cls(INTRODUCTORY_POINTS)

    @classmethod
    def theme_game(cls) -> "VictoryCondition":
        return cls(THEME_GAME_POINTS)

    def has_trade_advantage(self, player: "Player", opponent: "Player") -> bool:
        return player.commerce_points - opponent.commerce_points >= self.advantage_lead

    def has_strength_advantage(self, player: "Player", opponent: "Player") -> bool:
        return player.strength_points - opponent.strength_points >= self.advantage_lead

    def total_victory_points(self, player: "Player", opponent: "Player") -> int:
        total = player.victory_points
        if self.has_trade_advantage(player, opponent):
            total += 1
        if self.has_strength_advantage(player, opponent):
            total += 1
        return total

    def has_won(self, player: "Player", opponent: "Player") -> bool:
        return self.total_victory_points(player, opponent) >= self.required_points

    def summary(self, player: "Player", opponent: "Player") -> str:
        lines: List[str] = [
            f"Victory Points: {self.total_victory_points(player, opponent)}/{self.required_points}",
            f"  Base VP: {player.victory_points}",
        ]
        if self.has_trade_advantage(player, opponent):
            lines.append("  Trade Advantage: +1")
        if self.has_strength_advantage(player, opponent):
            lines.append("  Strength Advantage: +1")
        return "\n".join(lines)
