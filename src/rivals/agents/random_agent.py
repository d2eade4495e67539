"""Random player for baseline games and smoke tests."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from rivals.engine.board import CENTER_ROW, PLACEMENT_ROWS
from rivals.engine.cards import Card
from rivals.engine.player import Player
from rivals.engine.rules import validate_build, validate_play_card, validate_trade
from rivals.engine.types import CenterCardType, ResourceType

if TYPE_CHECKING:
    from rivals.engine.supply import Supply


class RandomPlayer(Player):
    """Answers every decision with a random legal choice."""

    def __init__(self, name: str, seed: int | None = None, end_probability: float = 0.2):
        super().__init__(name)
        self.rng = random.Random(seed)
        self.end_probability = end_probability
        self.messages: List[str] = []

    def send_message(self, text: str) -> None:
        self.messages.append(text)

    def receive_input(self) -> str:
        return ""

    def choose_card_from_hand(self, prompt: str, allow_cancel: bool = True) -> Optional[int]:
        if not self.hand:
            return None
        return self.rng.randrange(len(self.hand))

    def choose_draw_stack(self, supply: "Supply", prompt: str, allow_cancel: bool = True) -> Optional[int]:
        stacks = supply.non_empty_stacks()
        return self.rng.choice(stacks) if stacks else None

    def choose_card_from_stack(self, stack: List[Card], prompt: str, allow_cancel: bool = True) -> Optional[Card]:
        if not stack:
            return None
        return stack.pop(self.rng.randrange(len(stack)))

    def choose_resource_type(self, prompt: str) -> Optional[ResourceType]:
        return self.rng.choice(list(ResourceType))

    def choose_option(self, prompt: str, options: Sequence[str], allow_cancel: bool = True) -> Optional[str]:
        return self.rng.choice(list(options))

    def confirm(self, prompt: str) -> bool:
        return self.rng.random() < 0.5

    def prompt_for_action(self, opponent: "Player", supply: "Supply") -> str:
        commands = self.legal_commands(opponent, supply)
        if not commands or self.rng.random() < self.end_probability:
            return "END"
        return self.rng.choice(commands)

    def legal_commands(self, opponent: "Player", supply: "Supply") -> List[str]:
        commands: List[str] = []
        cells = [
            (row, col)
            for row in PLACEMENT_ROWS
            for col in range(self.board.column_count)
        ]
        for index, card in enumerate(self.hand):
            if not card.card_type.requires_placement:
                if not validate_play_card(self, opponent, index):
                    commands.append(f"PLAY {index}")
                continue
            for row, col in cells:
                if row != CENTER_ROW and not validate_play_card(self, opponent, index, row, col):
                    commands.append(f"PLAY {index} {row} {col}")
        for kind in CenterCardType:
            for row, col in cells:
                if not validate_build(self, supply, kind, row, col):
                    commands.append(f"BUILD {kind.card_name} {row} {col}")
        for give in ResourceType:
            for get in ResourceType:
                if give != get and not validate_trade(self, give, get):
                    commands.append(f"TRADE {give.value} {get.value}")
        return commands
