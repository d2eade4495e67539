from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class GameConfig:
    """Tunable rule constants for one game session.

    Defaults describe the introductory game.
    """

    victory_points: int = 7
    base_hand_size: int = 3
    advantage_lead: int = 3
    brigand_threshold: int = 7
    max_prompt_attempts: int = 3
    max_actions_per_turn: int = 30
    paid_exchange_cost: int = 2
    parish_hall_exchange_cost: int = 1
    bank_trade_rate: int = 3
    two_for_one_rate: int = 2
    seed: int | None = None

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


INTRODUCTORY_GAME = GameConfig()
