from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class ResourceType(str, Enum):
    BRICK = "brick"
    GRAIN = "grain"
    LUMBER = "lumber"
    WOOL = "wool"
    ORE = "ore"
    GOLD = "gold"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def code(self) -> str:
        return RESOURCE_CODES[self]

    @classmethod
    def parse(cls, text: str | None) -> Optional["ResourceType"]:
        """Accepts the enum name, display name or one-letter code, case-insensitively."""
        if text is None:
            return None
        normalized = text.strip().lower()
        if not normalized:
            return None
        for rtype in cls:
            if normalized in (rtype.value, rtype.code.lower()):
                return rtype
        return None


RESOURCE_CODES: Dict[ResourceType, str] = {
    ResourceType.BRICK: "B",
    ResourceType.GRAIN: "G",
    ResourceType.LUMBER: "L",
    ResourceType.WOOL: "W",
    ResourceType.ORE: "O",
    ResourceType.GOLD: "A",
}


class CardType(str, Enum):
    REGION = "region"
    CENTER_CARD = "center_card"
    BUILDING = "building"
    UNIT = "unit"
    HERO = "hero"
    SHIP = "ship"
    ACTION = "action"
    ACTION_ATTACK = "action_attack"
    ACTION_NEUTRAL = "action_neutral"
    EVENT = "event"
    UNKNOWN = "unknown"

    @property
    def requires_placement(self) -> bool:
        return self in (
            CardType.REGION,
            CardType.CENTER_CARD,
            CardType.BUILDING,
            CardType.UNIT,
            CardType.HERO,
            CardType.SHIP,
        )


class GamePhase(str, Enum):
    SETUP = "setup"
    ROLL_DICE = "roll_dice"
    PRODUCTION = "production"
    EVENT = "event"
    ACTION = "action"
    REPLENISH = "replenish"
    EXCHANGE = "exchange"
    VICTORY_CHECK = "victory_check"
    GAME_OVER = "game_over"


class EventFace(int, Enum):
    BRIGAND = 1
    TRADE = 2
    CELEBRATION = 3
    PLENTIFUL_HARVEST = 4
    EVENT_CARD_A = 5
    EVENT_CARD_B = 6

    @property
    def description(self) -> str:
        return EVENT_DESCRIPTIONS[self]

    @property
    def draws_event_card(self) -> bool:
        return self in (EventFace.EVENT_CARD_A, EventFace.EVENT_CARD_B)


EVENT_DESCRIPTIONS: Dict[EventFace, str] = {
    EventFace.BRIGAND: "Brigand Attack",
    EventFace.TRADE: "Trade",
    EventFace.CELEBRATION: "Celebration",
    EventFace.PLENTIFUL_HARVEST: "Plentiful Harvest",
    EventFace.EVENT_CARD_A: "Event Card",
    EventFace.EVENT_CARD_B: "Event Card",
}


class CenterCardType(str, Enum):
    ROAD = "road"
    SETTLEMENT = "settlement"
    CITY = "city"

    @property
    def card_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str | None) -> Optional["CenterCardType"]:
        if text is None:
            return None
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


class Capability(str, Enum):
    PARISH_HALL = "parish_hall"
    TOWN_HALL = "town_hall"
    ODIN_FOUNTAIN = "odin_fountain"
    TWO_FOR_ONE_BRICK = "two_for_one_brick"
    TWO_FOR_ONE_GRAIN = "two_for_one_grain"
    TWO_FOR_ONE_LUMBER = "two_for_one_lumber"
    TWO_FOR_ONE_WOOL = "two_for_one_wool"
    TWO_FOR_ONE_ORE = "two_for_one_ore"
    TWO_FOR_ONE_GOLD = "two_for_one_gold"

    @classmethod
    def two_for_one(cls, rtype: ResourceType) -> "Capability":
        return cls(f"two_for_one_{rtype.value}")


CostMap = Dict[ResourceType, int]
