"""Turn engine for the two-player introductory game."""

from .bank import ResourceBank, ResourceInvariantError
from .board import Principality
from .cards import Card, make_city, make_region, make_road, make_settlement
from .dice import Dice, DiceRoll
from .engine import TurnEngine
from .game_state import setup_game
from .player import Player
from .rules import RuleViolation
from .session import GameSession
from .supply import Supply, standard_supply
from .types import CardType, EventFace, GamePhase, ResourceType
from .victory import VictoryCondition

__all__ = [
    "Card",
    "CardType",
    "Dice",
    "DiceRoll",
    "EventFace",
    "GamePhase",
    "GameSession",
    "Player",
    "Principality",
    "ResourceBank",
    "ResourceInvariantError",
    "ResourceType",
    "RuleViolation",
    "Supply",
    "TurnEngine",
    "VictoryCondition",
    "make_city",
    "make_region",
    "make_road",
    "make_settlement",
    "setup_game",
    "standard_supply",
]
