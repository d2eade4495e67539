from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .types import CardType, CostMap, ResourceType

if TYPE_CHECKING:
    from .effects import CardEffect
    from .player import Player

MAX_STORED_RESOURCES = 3

REGION_RESOURCES: Dict[str, ResourceType] = {
    "hill": ResourceType.BRICK,
    "field": ResourceType.GRAIN,
    "forest": ResourceType.LUMBER,
    "pasture": ResourceType.WOOL,
    "mountain": ResourceType.ORE,
    "gold field": ResourceType.GOLD,
}

# booster building -> region it doubles
BOOSTERS: Dict[str, str] = {
    "iron foundry": "mountain",
    "grain mill": "field",
    "lumber camp": "forest",
    "brick factory": "hill",
    "weaver's shop": "pasture",
}


def region_name_for(rtype: ResourceType) -> str:
    for name, produced in REGION_RESOURCES.items():
        if produced == rtype:
            return name.title()
    raise ValueError(f"no region produces {rtype.value}")


@dataclass(eq=False)
class Card:
    """A single physical card. Identity matters: two Settlements are two cards."""

    name: str
    card_type: CardType = CardType.UNKNOWN
    cost: CostMap = field(default_factory=dict)
    victory_points: int = 0
    commerce_points: int = 0
    skill_points: int = 0
    strength_points: int = 0
    progress_points: int = 0
    card_text: str = ""
    dice_roll: int = 0
    _stored: int = field(default=0, repr=False)
    effect: Optional["CardEffect"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._stored = max(0, min(MAX_STORED_RESOURCES, self._stored))
        if self.effect is None:
            from .effects import effect_for

            self.effect = effect_for(self)

    def __setattr__(self, key: str, value: object) -> None:
        if key == "name" and "name" in self.__dict__:
            raise AttributeError("card name is immutable")
        super().__setattr__(key, value)

    @property
    def is_region(self) -> bool:
        return self.card_type == CardType.REGION

    @property
    def produced_resource(self) -> Optional[ResourceType]:
        if not self.is_region:
            return None
        return REGION_RESOURCES.get(self.name.lower())

    @property
    def capacity(self) -> int:
        return MAX_STORED_RESOURCES if self.is_region else 0

    @property
    def stored_resources(self) -> int:
        return self._stored

    @stored_resources.setter
    def stored_resources(self, value: int) -> None:
        self._stored = max(0, min(self.capacity, int(value)))

    def add_resource(self) -> bool:
        if self.is_region and self._stored < MAX_STORED_RESOURCES:
            self._stored += 1
            return True
        return False

    def remove_resource(self) -> bool:
        if self.is_region and self._stored > 0:
            self._stored -= 1
            return True
        return False

    def boosts(self, region: "Card") -> bool:
        if self.card_type != CardType.BUILDING or not region.is_region:
            return False
        return BOOSTERS.get(self.name.lower()) == region.name.lower()

    def points(self) -> Dict[str, int]:
        return {
            "victory": self.victory_points,
            "commerce": self.commerce_points,
            "skill": self.skill_points,
            "strength": self.strength_points,
            "progress": self.progress_points,
        }

    def can_apply_effect(self, player: "Player", opponent: "Player", row: int | None, col: int | None) -> bool:
        return self.effect.can_apply(self, player, opponent, row, col)

    def apply_effect(self, player: "Player", opponent: "Player", row: int | None, col: int | None) -> bool:
        return self.effect.apply(self, player, opponent, row, col)

    def __str__(self) -> str:
        return self.name


def _cost(**amounts: int) -> CostMap:
    return {ResourceType(key): value for key, value in amounts.items()}


ROAD_COST = _cost(brick=2, lumber=1)
SETTLEMENT_COST = _cost(brick=1, grain=1, lumber=1, wool=1)
CITY_COST = _cost(ore=3, grain=2)

# Die faces for the regions left in the region pile after both players are set up.
REMAINING_REGION_DICE: Dict[str, List[int]] = {
    "Field": [3, 1],
    "Mountain": [4, 2],
    "Hill": [5, 1],
    "Forest": [6, 4],
    "Pasture": [6, 5],
    "Gold Field": [3, 2],
}

REGIONS_PER_TYPE = 4
RESHUFFLE_EVENT = "Yule"

STANDARD_EVENTS = [
    ("Yule", "The event deck is reshuffled and a new event is drawn."),
    ("Fraternal Feuds", "The player with more strength removes up to 2 cards from the other player's hand."),
    ("Invention", "Each player gains one resource of their choice per progress point, at most 2."),
    ("Feud", "Tempers rise between the principalities."),
    ("Trade Ships Race", "Merchant fleets race for the best harbours."),
    ("Traveling Merchant", "A traveling merchant passes through."),
    ("Year of Plenty", "A year of plenty is celebrated across the land."),
]

# name, type, cost, victory, commerce, skill, strength, progress
STANDARD_STACK_CARDS = [
    ("Iron Foundry", CardType.BUILDING, _cost(ore=1, brick=1), 0, 0, 0, 0, 0),
    ("Grain Mill", CardType.BUILDING, _cost(grain=1, lumber=1), 0, 0, 0, 0, 0),
    ("Lumber Camp", CardType.BUILDING, _cost(lumber=1, brick=1), 0, 0, 0, 0, 0),
    ("Brick Factory", CardType.BUILDING, _cost(brick=1, ore=1), 0, 0, 0, 0, 0),
    ("Weaver's Shop", CardType.BUILDING, _cost(wool=1, lumber=1), 0, 0, 0, 0, 0),
    ("Abbey", CardType.BUILDING, _cost(brick=1, ore=1, grain=1), 0, 0, 0, 0, 1),
    ("Library", CardType.BUILDING, _cost(ore=1, grain=1, gold=1), 1, 0, 0, 0, 1),
    ("Marketplace", CardType.BUILDING, _cost(ore=1, grain=1), 0, 1, 0, 0, 0),
    ("Toll Bridge", CardType.BUILDING, _cost(brick=1, ore=1), 0, 1, 0, 0, 0),
    ("Storehouse", CardType.BUILDING, _cost(lumber=1, brick=1), 0, 0, 0, 0, 0),
    ("Parish Hall", CardType.BUILDING, _cost(brick=1, grain=1), 0, 0, 0, 0, 0),
    ("Town Hall", CardType.BUILDING, _cost(lumber=1, ore=1, gold=1), 1, 0, 0, 0, 0),
    ("Odin's Fountain", CardType.BUILDING, _cost(ore=1, gold=1), 0, 0, 0, 0, 0),
    ("Sacrificial Site", CardType.BUILDING, _cost(brick=1, wool=1), 0, 0, 0, 0, 0),
    ("Austin", CardType.HERO, _cost(ore=1, grain=1, wool=1), 0, 0, 1, 2, 0),
    ("Harald", CardType.HERO, _cost(ore=1, wool=1), 0, 0, 2, 1, 0),
    ("Inga", CardType.HERO, _cost(grain=1, wool=1, ore=1), 0, 0, 3, 0, 0),
    ("Osmund", CardType.HERO, _cost(ore=2, wool=1), 0, 0, 0, 3, 0),
    ("Candamir", CardType.HERO, _cost(ore=1, grain=1), 0, 0, 0, 2, 0),
    ("Siglind", CardType.HERO, _cost(grain=2, ore=1), 0, 0, 2, 1, 0),
    ("Brick Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Grain Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Lumber Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Wool Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Ore Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Gold Ship", CardType.SHIP, _cost(lumber=1, wool=1), 0, 1, 0, 0, 0),
    ("Merchant Caravan", CardType.ACTION, _cost(gold=1, grain=1), 0, 0, 0, 0, 0),
    ("Merchant Caravan", CardType.ACTION, _cost(gold=1, grain=1), 0, 0, 0, 0, 0),
    ("Brigitta the Wise Woman", CardType.ACTION_NEUTRAL, _cost(gold=1, wool=1), 0, 0, 0, 0, 0),
    ("Brigitta the Wise Woman", CardType.ACTION_NEUTRAL, _cost(gold=1, wool=1), 0, 0, 0, 0, 0),
    ("Scout", CardType.ACTION_NEUTRAL, _cost(gold=1, lumber=1), 0, 0, 0, 0, 0),
    ("Scout", CardType.ACTION_NEUTRAL, _cost(gold=1, lumber=1), 0, 0, 0, 0, 0),
    ("Relocation", CardType.ACTION, _cost(gold=1, brick=1), 0, 0, 0, 0, 0),
    ("Relocation", CardType.ACTION, _cost(gold=1, brick=1), 0, 0, 0, 0, 0),
    ("Goldsmith", CardType.ACTION, _cost(gold=2), 0, 0, 0, 0, 0),
    ("Goldsmith", CardType.ACTION, _cost(gold=2), 0, 0, 0, 0, 0),
]


def make_road() -> Card:
    return Card("Road", CardType.CENTER_CARD, cost=dict(ROAD_COST))


def make_settlement() -> Card:
    return Card("Settlement", CardType.CENTER_CARD, cost=dict(SETTLEMENT_COST), victory_points=1)


def make_city() -> Card:
    return Card("City", CardType.CENTER_CARD, cost=dict(CITY_COST), victory_points=2)


def make_region(name: str, dice_roll: int = 0, stored: int = 0) -> Card:
    if name.lower() not in REGION_RESOURCES:
        raise ValueError(f"unknown region: {name}")
    return Card(name, CardType.REGION, dice_roll=dice_roll, _stored=stored)


def standard_cards() -> List[Card]:
    """Every card of the introductory set, as fresh objects."""
    cards: List[Card] = []
    cards.extend(make_road() for _ in range(9))
    cards.extend(make_settlement() for _ in range(5))
    cards.extend(make_city() for _ in range(7))
    for region_name in REMAINING_REGION_DICE:
        cards.extend(make_region(region_name) for _ in range(REGIONS_PER_TYPE))
    cards.extend(Card(name, CardType.EVENT, card_text=text) for name, text in STANDARD_EVENTS)
    for name, card_type, cost, vp, cp, sp, fp, pp in STANDARD_STACK_CARDS:
        cards.append(
            Card(
                name,
                card_type,
                cost=dict(cost),
                victory_points=vp,
                commerce_points=cp,
                skill_points=sp,
                strength_points=fp,
                progress_points=pp,
            )
        )
    return cards
