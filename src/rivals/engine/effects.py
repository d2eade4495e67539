"""Card effect strategies.

Every card carries one effect object. A card built with an explicit ``effect`` keeps
it; otherwise ``effect_for`` picks one at creation: capability buildings first, then
the placement default, and finally the one-victory-point fallback for action cards
whose text is not modeled.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Protocol, Tuple

from .types import Capability, ResourceType

if TYPE_CHECKING:
    from .cards import Card
    from .player import Player


class CardEffect(Protocol):
    description: str

    def can_apply(self, card: "Card", player: "Player", opponent: "Player", row: int | None, col: int | None) -> bool:
        ...

    def apply(self, card: "Card", player: "Player", opponent: "Player", row: int | None, col: int | None) -> bool:
        ...


class PlacementEffect:
    description = "Place the card and gain its points"

    def can_apply(self, card, player, opponent, row, col) -> bool:
        if row is None or col is None:
            return False
        return player.board.can_place(row, col)

    def apply(self, card, player, opponent, row, col) -> bool:
        if not self.can_apply(card, player, opponent, row, col):
            return False
        if not player.board.place_card(row, col, card):
            return False
        player.add_points(**card.points())
        return True


class CapabilityEffect(PlacementEffect):
    def __init__(self, capabilities: Tuple[Capability, ...]):
        self.capabilities = capabilities
        self.description = "Place the card and gain: " + ", ".join(cap.value for cap in capabilities)

    def apply(self, card, player, opponent, row, col) -> bool:
        if not super().apply(card, player, opponent, row, col):
            return False
        for capability in self.capabilities:
            player.grant(capability)
        return True


class VictoryPointFallback:
    """Unmodeled action cards are worth one victory point when played."""

    description = "Gain 1 victory point"

    def can_apply(self, card, player, opponent, row, col) -> bool:
        return True

    def apply(self, card, player, opponent, row, col) -> bool:
        player.add_points(victory=1)
        return True


CAPABILITY_CARDS: Dict[str, Tuple[Capability, ...]] = {
    "parish hall": (Capability.PARISH_HALL,),
    "town hall": (Capability.TOWN_HALL,),
    "odin's fountain": (Capability.ODIN_FOUNTAIN,),
    "sacrificial site": (Capability.two_for_one(ResourceType.WOOL),),
}
for _rtype in ResourceType:
    CAPABILITY_CARDS[f"{_rtype.value} ship"] = (Capability.two_for_one(_rtype),)

PLACEMENT = PlacementEffect()
FALLBACK = VictoryPointFallback()


def effect_for(card: "Card") -> CardEffect:
    key = card.name.lower()
    if key in CAPABILITY_CARDS and card.card_type.requires_placement:
        return CapabilityEffect(CAPABILITY_CARDS[key])
    if card.card_type.requires_placement:
        return PLACEMENT
    return FALLBACK
