"""Per-phase turn logic.

The engine owns phase order; each handler only does the work of its phase against the
shared ``TurnContext``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Protocol

from rivals.config import GameConfig, INTRODUCTORY_GAME
from rivals.utils.logging import get_logger

from . import actions
from .types import Capability, EventFace, GamePhase

if TYPE_CHECKING:
    from .cards import Card
    from .context import TurnContext
    from .event_handlers import EventHandler
    from .player import Player
    from .supply import Supply

logger = get_logger(__name__)

FREE_EXCHANGE = "1"
PAID_EXCHANGE = "2"


class PhaseHandler(Protocol):
    phase: GamePhase

    def execute(self, ctx: "TurnContext") -> None:
        ...


class ProductionPhaseHandler:
    phase = GamePhase.PRODUCTION

    def execute(self, ctx: "TurnContext") -> None:
        face = ctx.roll.production
        ctx.broadcast(f"[Production] Die face: {face}")
        for player in ctx.players:
            produced = produce(player, face)
            logger.debug("production", player=player.name, face=face, produced=produced)


def produce(player: "Player", face: int) -> int:
    """Add one resource to every matching region, two next to a booster; capped per region."""
    produced = 0
    for pos in player.board.regions():
        region = pos.card
        if region.dice_roll != face:
            continue
        boosted = any(neighbor.boosts(region) for neighbor in player.board.neighbors(pos.row, pos.col))
        for _ in range(2 if boosted else 1):
            if region.add_resource():
                produced += 1
    return produced


class EventPhaseHandler:
    phase = GamePhase.EVENT

    def __init__(self, handlers: Dict[EventFace, "EventHandler"]):
        self.handlers = handlers

    def execute(self, ctx: "TurnContext") -> None:
        face = ctx.roll.event_face
        ctx.broadcast(f"[Event] {face.description}")
        handler = self.handlers.get(face)
        if handler is None:
            logger.warning("event_unhandled", face=int(face))
            return
        handler.handle(ctx)


class ActionPhaseHandler:
    phase = GamePhase.ACTION

    def execute(self, ctx: "TurnContext") -> None:
        player = ctx.active
        for _ in range(ctx.config.max_actions_per_turn):
            command = player.prompt_for_action(ctx.opponent, ctx.supply)
            if actions.execute(ctx, command):
                return
        logger.info("action_limit_reached", player=player.name, limit=ctx.config.max_actions_per_turn)


class ReplenishPhaseHandler:
    phase = GamePhase.REPLENISH

    def execute(self, ctx: "TurnContext") -> None:
        player = ctx.active
        limit = player.hand_limit(ctx.config.base_hand_size)
        while len(player.hand) < limit:
            if not ctx.supply.non_empty_stacks():
                player.send_message("All draw stacks are empty.")
                logger.warning("draw_stacks_empty", player=player.name)
                break
            stack_id = player.choose_draw_stack(ctx.supply, "Draw from stack", allow_cancel=False)
            card = draw_with_fallthrough(ctx.supply, stack_id)
            player.add_card_to_hand(card)
            player.send_message(f"Drew: {card.name}")
        player.send_message(f"Hand replenished to {len(player.hand)} cards.")


def draw_with_fallthrough(supply: "Supply", stack_id: Optional[int]) -> Optional["Card"]:
    """Draw from ``stack_id``, moving on to the following stacks while they are empty."""
    ids = list(supply.stack_ids)
    start = ids.index(stack_id) if stack_id in ids else 0
    for offset in range(len(ids)):
        card = supply.draw_from_stack(ids[(start + offset) % len(ids)])
        if card is not None:
            return card
    return None


class ExchangePhaseHandler:
    phase = GamePhase.EXCHANGE

    def execute(self, ctx: "TurnContext") -> None:
        player = ctx.active
        allowed = 2 if player.has(Capability.ODIN_FOUNTAIN) else 1
        made = 0
        while made < allowed:
            if not player.confirm(f"Exchange a card? ({allowed - made} left)"):
                break
            if not self.exchange(player, ctx.supply, ctx.config):
                player.send_message("Exchange failed or cancelled.")
                break
            made += 1
        if made:
            logger.info("exchange_done", player=player.name, exchanges=made)

    def exchange_cost(self, player: "Player", config: GameConfig = INTRODUCTORY_GAME) -> Optional[int]:
        """Cost of this exchange: 0 draws the top card, more lets the player pick; None is cancel."""
        if player.has(Capability.TOWN_HALL):
            return 0
        paid = config.parish_hall_exchange_cost if player.has(Capability.PARISH_HALL) else config.paid_exchange_cost
        choice = player.choose_option(
            f"Exchange options:\n1. FREE: top card of a stack\n2. PAID ({paid}): choose any card of a stack",
            (FREE_EXCHANGE, PAID_EXCHANGE),
        )
        if choice is None:
            return None
        return 0 if choice == FREE_EXCHANGE else paid

    def exchange(self, player: "Player", supply: "Supply", config: GameConfig = INTRODUCTORY_GAME) -> bool:
        if not player.hand:
            player.send_message("No cards to exchange!")
            return False
        cost = self.exchange_cost(player, config)
        if cost is None:
            return False
        can_choose = cost > 0 or player.has(Capability.TOWN_HALL)
        index = player.choose_card_from_hand("Choose card to exchange")
        if index is None:
            return False
        stack_id = player.choose_draw_stack(supply, "Choose draw stack")
        if stack_id is None:
            return False

        paid = None
        if cost > 0:
            paid_with = player.choose_resource_type(f"Pay {cost} of one resource type:")
            if paid_with is not None:
                paid = player.bank.withdraw({paid_with: cost})
            if paid is None:
                player.send_message("Cannot pay for the exchange.")
                return False

        if can_choose:
            new_card = player.choose_card_from_stack(supply.get_draw_stack(stack_id), "Choose card from stack")
        else:
            new_card = supply.draw_from_stack(stack_id)
        if new_card is None:
            if paid is not None:
                player.bank.restore(paid)
            return False

        given = player.remove_card_from_hand(index)
        player.add_card_to_hand(new_card)
        supply.return_card_to_stack_bottom(given, stack_id)
        player.send_message(f"Exchanged: {given.name} -> {new_card.name}")
        return True


class VictoryCheckHandler:
    """Sets ``ctx.winner``. The active player is checked first, so a double win goes to them."""

    phase = GamePhase.VICTORY_CHECK

    def execute(self, ctx: "TurnContext") -> None:
        for player in ctx.players:
            if ctx.victory.has_won(player, ctx.other(player)):
                ctx.winner = player
                return


def default_phase_handlers(event_handlers: Dict[EventFace, "EventHandler"]) -> Dict[GamePhase, PhaseHandler]:
    handlers = (
        ProductionPhaseHandler(),
        EventPhaseHandler(event_handlers),
        ActionPhaseHandler(),
        ReplenishPhaseHandler(),
        ExchangePhaseHandler(),
        VictoryCheckHandler(),
    )
    return {handler.phase: handler for handler in handlers}
