from __future__ import annotations

from typing import Dict, List, Optional

from rivals.config import GameConfig, INTRODUCTORY_GAME
from rivals.utils.logging import get_logger
from rivals.utils.repro import make_rng

from . import observers
from .context import TurnContext
from .dice import Dice, DiceRoll
from .event_handlers import EventHandler, default_event_handlers
from .game_state import setup_game
from .observers import EventBus, Listener
from .phases import PhaseHandler, default_phase_handlers
from .player import Player
from .supply import Supply, standard_supply
from .types import EventFace, GamePhase
from .victory import VictoryCondition

logger = get_logger(__name__)

PLAYER_COUNT = 2

STANDARD_ORDER = (
    GamePhase.PRODUCTION,
    GamePhase.EVENT,
    GamePhase.ACTION,
    GamePhase.REPLENISH,
    GamePhase.EXCHANGE,
    GamePhase.VICTORY_CHECK,
)
# brigands strike before the harvest comes in
BRIGAND_ORDER = (
    GamePhase.EVENT,
    GamePhase.PRODUCTION,
    GamePhase.ACTION,
    GamePhase.REPLENISH,
    GamePhase.EXCHANGE,
    GamePhase.VICTORY_CHECK,
)


def phase_order(roll: DiceRoll) -> tuple:
    return BRIGAND_ORDER if roll.event_face == EventFace.BRIGAND else STANDARD_ORDER


class TurnEngine:
    """Runs the turn state machine for one two-player game."""

    def __init__(
        self,
        config: GameConfig = INTRODUCTORY_GAME,
        supply: Optional[Supply] = None,
        dice: Optional[Dice] = None,
        victory: Optional[VictoryCondition] = None,
        event_handlers: Optional[Dict[EventFace, EventHandler]] = None,
        phase_handlers: Optional[Dict[GamePhase, PhaseHandler]] = None,
    ):
        self.config = config
        self.supply = supply
        self.dice = dice if dice is not None else Dice(config.seed)
        self.victory = victory if victory is not None else VictoryCondition(config.victory_points, config.advantage_lead)
        if event_handlers is None:
            event_handlers = default_event_handlers(config.brigand_threshold)
        self.phase_handlers = phase_handlers if phase_handlers is not None else default_phase_handlers(event_handlers)
        self.players: List[Player] = []
        self.phase = GamePhase.SETUP
        self.active_index = 0
        self.turn = 0
        self.winner: Optional[Player] = None
        self.last_roll: Optional[DiceRoll] = None
        self.bus = EventBus()

    @property
    def active_player(self) -> Optional[Player]:
        return self.players[self.active_index] if self.players else None

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def add_player(self, player: Player) -> None:
        if len(self.players) >= PLAYER_COUNT:
            raise ValueError(f"a game takes exactly {PLAYER_COUNT} players")
        player.max_prompt_attempts = self.config.max_prompt_attempts
        self.players.append(player)

    def add_listener(self, listener: Listener) -> None:
        self.bus.subscribe(listener)

    def broadcast(self, text: str) -> None:
        for player in self.players:
            player.send_message(text)

    def initialize(self) -> None:
        if len(self.players) != PLAYER_COUNT:
            raise ValueError(f"a game takes exactly {PLAYER_COUNT} players, got {len(self.players)}")
        if self.phase != GamePhase.SETUP:
            return
        if self.supply is None:
            self.supply = standard_supply(make_rng(self.config.seed))
        setup_game(self.players, self.supply)
        logger.info("game_initialized", players=[p.name for p in self.players], config=self.config.to_dict())
        self.bus.publish(observers.game_initialized([p.name for p in self.players]))
        self.broadcast("=== RIVALS FOR CATAN - GAME START ===")
        self._enter(GamePhase.ROLL_DICE)

    def _enter(self, phase: GamePhase) -> None:
        previous, self.phase = self.phase, phase
        logger.debug("phase_changed", old=previous.value, new=phase.value, player=self.active_player.name)
        self.bus.publish(observers.phase_changed(previous.value, phase.value, self.active_player.name))

    def play_turn(self) -> Optional[Player]:
        """Play one full turn of the active player; returns the winner once there is one."""
        if self.phase == GamePhase.SETUP:
            self.initialize()
        if self.is_over:
            return self.winner

        active = self.players[self.active_index]
        opponent = self.players[1 - self.active_index]
        self.turn += 1
        logger.info("turn_started", turn=self.turn, player=active.name)
        self.bus.publish(observers.turn_started(self.turn, active.name))
        self.broadcast(f"--- {active.name}'s Turn ---")

        if self.phase != GamePhase.ROLL_DICE:
            self._enter(GamePhase.ROLL_DICE)
        roll = self.dice.roll_both()
        self.last_roll = roll
        logger.info("dice_rolled", production=roll.production, event_die=roll.event, player=active.name)
        self.bus.publish(observers.dice_rolled(roll.production, roll.event, active.name))
        self.broadcast(f"Production Die: {roll.production}")
        self.broadcast(f"Event Die: {roll.event} ({roll.event_face.description})")

        ctx = TurnContext(
            active=active,
            opponent=opponent,
            supply=self.supply,
            config=self.config,
            victory=self.victory,
            roll=roll,
            turn=self.turn,
        )
        for phase in phase_order(roll):
            self._enter(phase)
            handler = self.phase_handlers.get(phase)
            if handler is not None:
                handler.execute(ctx)

        if ctx.winner is not None:
            self._finish(ctx.winner, ctx.other(ctx.winner))
        else:
            self.active_index = 1 - self.active_index
            self._enter(GamePhase.ROLL_DICE)
        return self.winner

    def _finish(self, winner: Player, loser: Player) -> None:
        self.winner = winner
        points = self.victory.total_victory_points(winner, loser)
        self._enter(GamePhase.GAME_OVER)
        self.broadcast("=== GAME OVER ===")
        self.broadcast(f"Winner: {winner.name}")
        self.broadcast(self.victory.summary(winner, loser))
        logger.info("game_won", winner=winner.name, points=points, turns=self.turn)
        self.bus.publish(observers.game_won(winner.name, points))

    def run(self, max_turns: Optional[int] = None) -> Optional[Player]:
        """Play turns until someone wins or ``max_turns`` turns have been played in this call."""
        played = 0
        while not self.is_over:
            if max_turns is not None and played >= max_turns:
                logger.info("turn_limit_reached", turns=self.turn)
                break
            self.play_turn()
            played += 1
        return self.winner
