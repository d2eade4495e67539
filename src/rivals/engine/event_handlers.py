from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional, Protocol

from rivals.utils.logging import get_logger

from .cards import RESHUFFLE_EVENT, Card
from .types import EventFace, ResourceType

if TYPE_CHECKING:
    from .context import TurnContext
    from .player import Player

logger = get_logger(__name__)

BRIGAND_TARGETS = (ResourceType.GOLD, ResourceType.WOOL)
FEUD_DISCARDS = 2
INVENTION_MAX = 2
FEUD_RETURN_STACK = 1


class EventHandler(Protocol):
    name: str

    def handle(self, ctx: "TurnContext") -> None:
        ...


def grant_chosen_resource(player: "Player", prompt: str) -> Optional[ResourceType]:
    """Ask a player for a resource type and store one unit of it."""
    rtype = player.choose_resource_type(prompt)
    if rtype is None:
        return None
    if player.bank.add(rtype, 1):
        player.send_message(f"Gained 1 {rtype.display_name}")
    else:
        player.send_message(f"No room for {rtype.display_name}; it is lost")
    return rtype


class BrigandHandler:
    name = "Brigand Attack"

    def __init__(self, threshold: int = 7):
        self.threshold = threshold

    def handle(self, ctx: "TurnContext") -> None:
        for player in ctx.players:
            if player.bank.total() <= self.threshold:
                continue
            lost = {rtype.value: player.bank.clear(rtype) for rtype in BRIGAND_TARGETS}
            player.send_message("Brigands stole your Gold and Wool!")
            logger.info("brigand_attack", player=player.name, **lost)


class TradeHandler:
    name = "Trade"

    def handle(self, ctx: "TurnContext") -> None:
        for player in ctx.players:
            if ctx.victory.has_trade_advantage(player, ctx.other(player)):
                grant_chosen_resource(player, "Trade advantage! Choose 1 resource:")


class CelebrationHandler:
    name = "Celebration"

    def handle(self, ctx: "TurnContext") -> None:
        first, second = ctx.players
        if first.skill_points == second.skill_points:
            for player in ctx.players:
                grant_chosen_resource(player, "Celebration (tie)! Choose 1 resource:")
            return
        winner = first if first.skill_points > second.skill_points else second
        grant_chosen_resource(winner, "Celebration (most skill)! Choose 1 resource:")


class PlentifulHarvestHandler:
    name = "Plentiful Harvest"

    def handle(self, ctx: "TurnContext") -> None:
        for player in ctx.players:
            grant_chosen_resource(player, "Plentiful Harvest! Choose 1 resource:")


def fraternal_feuds(ctx: "TurnContext") -> None:
    first, second = ctx.players
    if first.strength_points == second.strength_points:
        ctx.broadcast("No strength advantage - Fraternal Feuds has no effect.")
        return
    stronger = first if first.strength_points > second.strength_points else second
    weaker = ctx.other(stronger)
    for _ in range(min(FEUD_DISCARDS, len(weaker.hand))):
        card = stronger.choose_card_from_stack(weaker.hand, "Choose a card for your opponent to discard", allow_cancel=True)
        if card is None:
            break
        ctx.supply.return_card_to_stack_bottom(card, FEUD_RETURN_STACK)
        weaker.send_message(f"Your {card.name} was discarded!")
        logger.info("feud_discard", player=stronger.name, victim=weaker.name, card=card.name)


def invention(ctx: "TurnContext") -> None:
    for player in ctx.players:
        for _ in range(min(INVENTION_MAX, player.progress_points)):
            grant_chosen_resource(player, "Invention! Choose 1 resource:")


EventCardEffect = Callable[["TurnContext"], None]

EVENT_CARD_EFFECTS: Dict[str, EventCardEffect] = {
    "fraternal feuds": fraternal_feuds,
    "invention": invention,
}


class EventCardHandler:
    """Resolve the top event card.

    The reshuffle card shuffles the rest of the pile, the next card is resolved, and the
    reshuffle card then goes back fourth from the bottom. Each draw removes a card from
    the pile, so the chain ends once the pile is exhausted.
    """

    name = "Event Card"

    def __init__(self, effects: Optional[Dict[str, EventCardEffect]] = None):
        self.effects = dict(EVENT_CARD_EFFECTS if effects is None else effects)

    def handle(self, ctx: "TurnContext") -> None:
        events = ctx.supply.events
        if not events:
            ctx.broadcast("Event deck is empty!")
            logger.warning("event_pile_empty")
            return
        card = events.pop(0)
        ctx.broadcast(f"Drew event: {card.name}")
        if card.name.lower() == RESHUFFLE_EVENT.lower():
            ctx.supply.shuffle_events()
            ctx.broadcast(f"{card.name}: event deck reshuffled!")
            self.handle(ctx)
            ctx.supply.insert_reshuffle_card(card)
            return
        self.resolve(card, ctx)
        events.append(card)

    def resolve(self, card: Card, ctx: "TurnContext") -> None:
        if card.card_text:
            ctx.broadcast(f"  {card.card_text}")
        effect = self.effects.get(card.name.lower())
        logger.info("event_card", card=card.name, modeled=effect is not None)
        if effect is not None:
            effect(ctx)


def default_event_handlers(brigand_threshold: int = 7) -> Dict[EventFace, EventHandler]:
    card_handler = EventCardHandler()
    return {
        EventFace.BRIGAND: BrigandHandler(brigand_threshold),
        EventFace.TRADE: TradeHandler(),
        EventFace.CELEBRATION: CelebrationHandler(),
        EventFace.PLENTIFUL_HARVEST: PlentifulHarvestHandler(),
        EventFace.EVENT_CARD_A: card_handler,
        EventFace.EVENT_CARD_B: card_handler,
    }
