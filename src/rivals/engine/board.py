from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .types import CardType

if TYPE_CHECKING:
    from .cards import Card

INITIAL_ROWS = 5
INITIAL_COLS = 5
CENTER_ROW = 2
PLACEMENT_ROWS: Tuple[int, ...] = (1, 2, 3)

ORTHOGONAL_OFFSETS = [
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
]


@dataclass(frozen=True)
class CardPosition:
    card: "Card"
    row: int
    col: int


class Principality:
    """A player's grid of placed cards.

    Rows 0 and 4 are buffer rows; only rows 1-3 accept cards. The grid only grows:
    building a center card in the first or last column adds a column on that side.
    """

    def __init__(self, rows: int = INITIAL_ROWS, cols: int = INITIAL_COLS):
        self._grid: List[List[Optional["Card"]]] = [[None] * cols for _ in range(rows)]

    @property
    def row_count(self) -> int:
        return len(self._grid)

    @property
    def column_count(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.column_count

    def is_legal_cell(self, row: int, col: int) -> bool:
        return row in PLACEMENT_ROWS and self.in_bounds(row, col)

    def card_at(self, row: int, col: int) -> Optional["Card"]:
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def is_empty_at(self, row: int, col: int) -> bool:
        return self.card_at(row, col) is None

    def can_place(self, row: int, col: int) -> bool:
        return self.is_legal_cell(row, col) and self.is_empty_at(row, col)

    def place_card(self, row: int, col: int, card: "Card") -> bool:
        if not self.can_place(row, col):
            return False
        self._grid[row][col] = card
        return True

    def replace_card(self, row: int, col: int, card: "Card") -> Optional["Card"]:
        """Swap the occupant of a legal cell, returning the previous card."""
        if not self.is_legal_cell(row, col):
            return None
        previous = self._grid[row][col]
        self._grid[row][col] = card
        return previous

    def has_card(self, name: str) -> bool:
        target = name.lower()
        return any(pos.card.name.lower() == target for pos in self.positions())

    def positions(self) -> Iterator[CardPosition]:
        for r, row in enumerate(self._grid):
            for c, card in enumerate(row):
                if card is not None:
                    yield CardPosition(card, r, c)

    def find_cards_by_type(self, card_type: CardType) -> List[CardPosition]:
        return [pos for pos in self.positions() if pos.card.card_type == card_type]

    def regions(self) -> List[CardPosition]:
        return self.find_cards_by_type(CardType.REGION)

    def neighbors(self, row: int, col: int) -> List["Card"]:
        cards = []
        for dr, dc in ORTHOGONAL_OFFSETS:
            card = self.card_at(row + dr, col + dc)
            if card is not None:
                cards.append(card)
        return cards

    def expand_after_edge_build(self, col: int) -> int:
        """Grow the grid after a build at an edge column; returns the card's new column."""
        if col == 0:
            for row in self._grid:
                row.insert(0, None)
            return col + 1
        if col == self.column_count - 1:
            for row in self._grid:
                row.append(None)
        return col

    def cells(self) -> List[List[Optional["Card"]]]:
        return [list(row) for row in self._grid]
