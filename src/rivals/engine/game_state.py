from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

from rivals.utils.logging import get_logger

from .board import CENTER_ROW
from .cards import REMAINING_REGION_DICE

if TYPE_CHECKING:
    from .player import Player
    from .supply import Supply

logger = get_logger(__name__)

# (card name, column) along the center row
STARTING_CENTER: Tuple[Tuple[str, int], ...] = (
    ("Settlement", 1),
    ("Road", 2),
    ("Settlement", 3),
)

# (region name, row, col, starting stock)
STARTING_REGIONS: Tuple[Tuple[str, int, int, int], ...] = (
    ("Forest", 1, 0, 1),
    ("Gold Field", 1, 2, 0),
    ("Field", 1, 4, 1),
    ("Hill", 3, 0, 1),
    ("Pasture", 3, 2, 1),
    ("Mountain", 3, 4, 1),
)

# die faces per seat, in STARTING_REGIONS order
STARTING_DICE: Tuple[Tuple[int, ...], ...] = (
    (2, 1, 6, 3, 4, 5),
    (3, 4, 5, 2, 1, 6),
)

STARTING_HAND_STACKS = (1, 2, 3)


def _take(pile: List, name: str, supply: "Supply"):
    card = supply.remove_card_by_name(pile, name)
    if card is None:
        raise ValueError(f"supply has no {name} left for setup")
    return card


def setup_principality(player: "Player", supply: "Supply", seat: int) -> None:
    for name, col in STARTING_CENTER:
        card = _take(supply.center_pile(name), name, supply)
        player.board.place_card(CENTER_ROW, col, card)
        player.add_points(**card.points())
    dice = STARTING_DICE[seat % len(STARTING_DICE)]
    for (name, row, col, stock), face in zip(STARTING_REGIONS, dice):
        region = _take(supply.regions, name, supply)
        region.dice_roll = face
        region.stored_resources = stock
        player.board.place_card(row, col, region)


def assign_remaining_region_dice(regions: Sequence) -> Dict[str, List[int]]:
    """Give the leftover regions their fixed die faces, in pile order."""
    assigned: Dict[str, List[int]] = {}
    for name, faces in REMAINING_REGION_DICE.items():
        unassigned = [card for card in regions if card.name.lower() == name.lower() and card.dice_roll == 0]
        for card, face in zip(unassigned, faces):
            card.dice_roll = face
            assigned.setdefault(name, []).append(face)
    return assigned


def draw_starting_hand(player: "Player", supply: "Supply") -> None:
    for stack_id in STARTING_HAND_STACKS:
        card = supply.draw_from_stack(stack_id)
        if card is None:
            logger.warning("starting_draw_skipped", player=player.name, stack=stack_id)
            continue
        player.add_card_to_hand(card)


def setup_game(players: Sequence["Player"], supply: "Supply") -> None:
    """Lay out both starting principalities, finish the region pile and deal hands."""
    if len(players) != 2:
        raise ValueError(f"setup needs exactly 2 players, got {len(players)}")
    for seat, player in enumerate(players):
        setup_principality(player, supply, seat)
    supply.shuffle_regions()
    assign_remaining_region_dice(supply.regions)
    for player in players:
        draw_starting_hand(player, supply)
    logger.info("game_setup", players=[p.name for p in players], **supply.summary())
