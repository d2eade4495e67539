from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Set, TypeVar

from .bank import ResourceBank
from .board import Principality
from .cards import Card
from .types import Capability, ResourceType

if TYPE_CHECKING:
    from .supply import Supply

T = TypeVar("T")

CANCEL_TOKENS = ("c", "cancel")
POINT_KINDS = ("victory", "commerce", "skill", "strength", "progress")


class Player(ABC):
    """One seat at the table: its principality, hand, point tallies and capabilities.

    Subclasses supply the two I/O primitives; every decision helper is built on them and
    re-prompts after invalid input up to ``max_prompt_attempts`` times before giving up.
    """

    def __init__(self, name: str, max_prompt_attempts: int = 3):
        self.name = name
        self.board = Principality()
        self.bank = ResourceBank(self.board)
        self.hand: List[Card] = []
        self.flags: Set[Capability] = set()
        self.max_prompt_attempts = max_prompt_attempts
        self.victory_points = 0
        self.commerce_points = 0
        self.skill_points = 0
        self.strength_points = 0
        self.progress_points = 0

    @abstractmethod
    def send_message(self, text: str) -> None:
        ...

    @abstractmethod
    def receive_input(self) -> str:
        ...

    def __str__(self) -> str:
        return self.name

    # points and capabilities

    def add_points(
        self,
        victory: int = 0,
        commerce: int = 0,
        skill: int = 0,
        strength: int = 0,
        progress: int = 0,
    ) -> None:
        self.victory_points = max(0, self.victory_points + victory)
        self.commerce_points = max(0, self.commerce_points + commerce)
        self.skill_points = max(0, self.skill_points + skill)
        self.strength_points = max(0, self.strength_points + strength)
        self.progress_points = max(0, self.progress_points + progress)

    def points(self) -> dict:
        return {kind: getattr(self, f"{kind}_points") for kind in POINT_KINDS}

    def grant(self, capability: Capability) -> None:
        self.flags.add(capability)

    def has(self, capability: Capability) -> bool:
        return capability in self.flags

    def hand_limit(self, base_hand_size: int) -> int:
        return base_hand_size + self.progress_points

    # hand

    def add_card_to_hand(self, card: Optional[Card]) -> None:
        if card is not None:
            self.hand.append(card)

    def remove_card_from_hand(self, index: int) -> Optional[Card]:
        if 0 <= index < len(self.hand):
            return self.hand.pop(index)
        return None

    # decisions

    def _ask(self, prompt: str, parse: Callable[[str], Optional[T]], allow_cancel: bool) -> Optional[T]:
        for _ in range(max(1, self.max_prompt_attempts)):
            self.send_message(prompt)
            raw = self.receive_input()
            text = (raw or "").strip()
            if allow_cancel and text.lower() in CANCEL_TOKENS:
                return None
            value = parse(text)
            if value is not None:
                return value
            self.send_message("Invalid input!")
        return None

    def choose_card_from_hand(self, prompt: str, allow_cancel: bool = True) -> Optional[int]:
        if not self.hand:
            self.send_message("Your hand is empty!")
            return None
        listing = "\n".join(f"[{i}] {card.name}" for i, card in enumerate(self.hand))
        cancel_text = " or 'C' to cancel" if allow_cancel else ""
        question = f"{listing}\n{prompt} (0-{len(self.hand) - 1}){cancel_text}:"
        return self._ask(question, lambda text: _parse_index(text, len(self.hand)), allow_cancel)

    def choose_draw_stack(self, supply: "Supply", prompt: str, allow_cancel: bool = True) -> Optional[int]:
        cancel_text = " or 'C' to cancel" if allow_cancel else ""
        question = f"{prompt} ({supply.stack_ids[0]}-{supply.stack_ids[-1]}){cancel_text}:"

        def parse(text: str) -> Optional[int]:
            try:
                stack_id = int(text)
            except ValueError:
                return None
            if stack_id not in supply.stack_ids or supply.is_stack_empty(stack_id):
                return None
            return stack_id

        return self._ask(question, parse, allow_cancel)

    def choose_card_from_stack(self, stack: List[Card], prompt: str, allow_cancel: bool = True) -> Optional[Card]:
        """Pick any card of a stack; the chosen card is removed from the stack."""
        if not stack:
            self.send_message("Stack is empty!")
            return None
        listing = "\n".join(f"[{i}] {card.name} - {card.card_type.value}" for i, card in enumerate(stack))
        cancel_text = " or 'C' to cancel" if allow_cancel else ""
        question = f"{listing}\n{prompt} (0-{len(stack) - 1}){cancel_text}:"
        index = self._ask(question, lambda text: _parse_index(text, len(stack)), allow_cancel)
        if index is None:
            return None
        return stack.pop(index)

    def choose_resource_type(self, prompt: str) -> Optional[ResourceType]:
        options = ", ".join(rtype.display_name for rtype in ResourceType)
        return self._ask(f"{prompt}\nOptions: {options}", ResourceType.parse, allow_cancel=False)

    def choose_option(self, prompt: str, options: Sequence[str], allow_cancel: bool = True) -> Optional[str]:
        """Pick one of ``options`` by its text, case-insensitively."""
        lookup = {option.lower(): option for option in options}
        return self._ask(prompt, lambda text: lookup.get(text.lower()), allow_cancel)

    def confirm(self, prompt: str) -> bool:
        self.send_message(f"{prompt} (Y/N)")
        answer = (self.receive_input() or "").strip().upper()
        return answer.startswith("Y")

    def prompt_for_action(self, opponent: "Player", supply: "Supply") -> str:
        from .actions import action_help

        self.send_message("Choose action:\n" + action_help())
        return self.receive_input() or ""


def _parse_index(text: str, size: int) -> Optional[int]:
    try:
        index = int(text)
    except ValueError:
        return None
    return index if 0 <= index < size else None
