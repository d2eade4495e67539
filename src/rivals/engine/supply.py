from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from rivals.utils.logging import get_logger

from .cards import RESHUFFLE_EVENT, Card, standard_cards
from .types import CardType

logger = get_logger(__name__)

STACK_IDS: Tuple[int, ...] = (1, 2, 3, 4)
# cards left under the reshuffle card after an event shuffle
RESHUFFLE_DEPTH = 3


class Supply:
    """The shared card supply: center-card piles, regions, events and four draw stacks.

    Index 0 of every pile is its top card.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.roads: List[Card] = []
        self.settlements: List[Card] = []
        self.cities: List[Card] = []
        self.regions: List[Card] = []
        self.events: List[Card] = []
        self._stacks: Dict[int, List[Card]] = {stack_id: [] for stack_id in STACK_IDS}

    @property
    def stack_ids(self) -> Tuple[int, ...]:
        return STACK_IDS

    def add_card(self, card: Card) -> None:
        name = card.name.lower()
        if name == "road":
            self.roads.append(card)
        elif name == "settlement":
            self.settlements.append(card)
        elif name == "city":
            self.cities.append(card)
        elif card.card_type == CardType.REGION:
            self.regions.append(card)
        elif card.card_type == CardType.EVENT:
            self.events.append(card)
        else:
            dealt = sum(len(stack) for stack in self._stacks.values())
            self._stacks[STACK_IDS[dealt % len(STACK_IDS)]].append(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.add_card(card)

    def _shuffle(self, pile: List[Card]) -> None:
        order = self.rng.permutation(len(pile))
        pile[:] = [pile[i] for i in order]

    def shuffle_draw_stacks(self) -> None:
        for stack in self._stacks.values():
            self._shuffle(stack)

    def shuffle_regions(self) -> None:
        self._shuffle(self.regions)

    def shuffle_events(self) -> None:
        """Shuffle the event pile with the reshuffle card fourth from the bottom."""
        reshuffle = self.remove_card_by_name(self.events, RESHUFFLE_EVENT)
        self._shuffle(self.events)
        if reshuffle is not None:
            self.insert_reshuffle_card(reshuffle)

    def insert_reshuffle_card(self, card: Card) -> None:
        self.events.insert(max(0, len(self.events) - RESHUFFLE_DEPTH), card)

    def get_draw_stack(self, stack_id: int) -> Optional[List[Card]]:
        return self._stacks.get(stack_id)

    def draw_from_stack(self, stack_id: int) -> Optional[Card]:
        stack = self.get_draw_stack(stack_id)
        if not stack:
            return None
        return stack.pop(0)

    def is_stack_empty(self, stack_id: int) -> bool:
        return not self.get_draw_stack(stack_id)

    def stack_size(self, stack_id: int) -> int:
        stack = self.get_draw_stack(stack_id)
        return len(stack) if stack is not None else 0

    def peek_stack(self, stack_id: int) -> Optional[Card]:
        stack = self.get_draw_stack(stack_id)
        return stack[0] if stack else None

    def non_empty_stacks(self) -> List[int]:
        return [stack_id for stack_id in STACK_IDS if not self.is_stack_empty(stack_id)]

    def return_card_to_stack_bottom(self, card: Optional[Card], stack_id: int) -> bool:
        stack = self.get_draw_stack(stack_id)
        if stack is None or card is None:
            return False
        stack.append(card)
        return True

    def return_card_to_stack_top(self, card: Optional[Card], stack_id: int) -> bool:
        stack = self.get_draw_stack(stack_id)
        if stack is None or card is None:
            return False
        stack.insert(0, card)
        return True

    @staticmethod
    def remove_card_by_name(pile: Optional[List[Card]], name: Optional[str]) -> Optional[Card]:
        if pile is None or name is None:
            return None
        target = name.lower()
        for i, card in enumerate(pile):
            if card.name.lower() == target:
                return pile.pop(i)
        return None

    def center_pile(self, card_name: str) -> Optional[List[Card]]:
        return {
            "road": self.roads,
            "settlement": self.settlements,
            "city": self.cities,
        }.get(card_name.lower())

    def take_center_card(self, card_name: str) -> Optional[Card]:
        pile = self.center_pile(card_name)
        if not pile:
            logger.info("center_pile_empty", card=card_name)
            return None
        return pile.pop(0)

    def summary(self) -> Dict[str, int]:
        counts = {
            "roads": len(self.roads),
            "settlements": len(self.settlements),
            "cities": len(self.cities),
            "regions": len(self.regions),
            "events": len(self.events),
        }
        for stack_id in STACK_IDS:
            counts[f"stack_{stack_id}"] = self.stack_size(stack_id)
        return counts


def standard_supply(rng: Optional[np.random.Generator] = None) -> Supply:
    """Build and shuffle the introductory supply."""
    supply = Supply(rng)
    supply.add_cards(standard_cards())
    supply.shuffle_draw_stacks()
    supply.shuffle_events()
    logger.debug("supply_built", **supply.summary())
    return supply
