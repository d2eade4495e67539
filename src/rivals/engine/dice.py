from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .types import EventFace

FACES = 6


@dataclass(frozen=True)
class DiceRoll:
    production: int
    event: int

    @property
    def event_face(self) -> EventFace:
        return EventFace(self.event)

    def to_dict(self) -> dict:
        return {"production": self.production, "event": self.event, "event_name": self.event_face.description}


class Dice:
    """Production and event dice backed by two independent generators.

    Both streams are spawned from one seed so a seeded game is reproducible while the
    two dice stay uncorrelated.
    """

    def __init__(self, seed: Optional[int] = None):
        production_seq, event_seq = np.random.SeedSequence(seed).spawn(2)
        self._production_rng = np.random.default_rng(production_seq)
        self._event_rng = np.random.default_rng(event_seq)

    def roll_production(self) -> int:
        return int(self._production_rng.integers(1, FACES + 1))

    def roll_event(self) -> int:
        return int(self._event_rng.integers(1, FACES + 1))

    def roll_both(self) -> DiceRoll:
        return DiceRoll(self.roll_production(), self.roll_event())
