"""
Shared builders for engine tests.
"""
import numpy as np
import pytest

from rivals.agents import ScriptedPlayer
from rivals.engine.cards import make_region
from rivals.engine.context import TurnContext
from rivals.engine.dice import Dice, DiceRoll
from rivals.engine.supply import Supply


class FixedDice(Dice):
    """Dice that replay a list of (production, event) pairs."""

    def __init__(self, rolls):
        super().__init__(seed=0)
        self.rolls = list(rolls)

    def roll_both(self) -> DiceRoll:
        production, event = self.rolls.pop(0)
        return DiceRoll(production, event)


@pytest.fixture
def fixed_dice():
    return FixedDice


@pytest.fixture
def player_factory():
    def make(name="Ada", inputs=(), default_answer="END"):
        return ScriptedPlayer(name, inputs, default_answer=default_answer)

    return make


@pytest.fixture
def place_region():
    def place(player, name, row, col, stored=0, dice_roll=1):
        region = make_region(name, dice_roll=dice_roll, stored=stored)
        assert player.board.place_card(row, col, region)
        return region

    return place


@pytest.fixture
def supply():
    return Supply(np.random.default_rng(0))


@pytest.fixture
def context_factory(supply):
    def make(active, opponent, **kwargs):
        return TurnContext(active=active, opponent=opponent, supply=kwargs.pop("supply", supply), **kwargs)

    return make
