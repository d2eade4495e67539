from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from rivals.config import GameConfig, INTRODUCTORY_GAME
from rivals.utils.logging import get_logger

from .board import CENTER_ROW
from .cards import CITY_COST, ROAD_COST, SETTLEMENT_COST
from .types import Capability, CenterCardType, CostMap, ResourceType

if TYPE_CHECKING:
    from .player import Player
    from .supply import Supply

logger = get_logger(__name__)

CENTER_CARD_COSTS: Dict[CenterCardType, CostMap] = {
    CenterCardType.ROAD: ROAD_COST,
    CenterCardType.SETTLEMENT: SETTLEMENT_COST,
    CenterCardType.CITY: CITY_COST,
}


@dataclass(frozen=True)
class RuleViolation:
    reason: str


def _refuse(player: "Player", action: str, violations: List[RuleViolation]) -> List[RuleViolation]:
    if violations:
        logger.info("rule_refused", player=player.name, action=action, reasons=[v.reason for v in violations])
    return violations


def validate_play_card(
    player: "Player",
    opponent: "Player",
    card_index: int,
    row: Optional[int] = None,
    col: Optional[int] = None,
) -> List[RuleViolation]:
    violations: List[RuleViolation] = []
    if not 0 <= card_index < len(player.hand):
        violations.append(RuleViolation(reason="card_not_in_hand"))
        return violations
    card = player.hand[card_index]
    if not player.bank.can_afford(card.cost):
        violations.append(RuleViolation(reason="insufficient_resources"))
    if card.card_type.requires_placement and (row is None or col is None):
        violations.append(RuleViolation(reason="placement_required"))
    elif not card.can_apply_effect(player, opponent, row, col):
        violations.append(RuleViolation(reason="cannot_apply_effect"))
    return violations


def play_card(
    player: "Player",
    opponent: "Player",
    card_index: int,
    row: Optional[int] = None,
    col: Optional[int] = None,
) -> List[RuleViolation]:
    """Pay for and apply a hand card; the cost is refunded if the effect fails."""
    violations = validate_play_card(player, opponent, card_index, row, col)
    if violations:
        return _refuse(player, "play", violations)
    card = player.hand[card_index]
    paid = player.bank.withdraw(card.cost)
    if paid is None:
        return _refuse(player, "play", [RuleViolation(reason="insufficient_resources")])
    if not card.apply_effect(player, opponent, row, col):
        player.bank.restore(paid)
        return _refuse(player, "play", [RuleViolation(reason="effect_failed")])
    player.remove_card_from_hand(card_index)
    logger.info("card_played", player=player.name, card=card.name, row=row, col=col)
    return []


def validate_build(
    player: "Player",
    supply: "Supply",
    kind: Optional[CenterCardType],
    row: int,
    col: int,
) -> List[RuleViolation]:
    violations: List[RuleViolation] = []
    if kind is None:
        violations.append(RuleViolation(reason="unknown_center_card"))
        return violations
    board = player.board
    if kind == CenterCardType.CITY:
        existing = board.card_at(row, col)
        if existing is None or existing.name.lower() != "settlement":
            violations.append(RuleViolation(reason="city_requires_settlement"))
    elif row != CENTER_ROW:
        violations.append(RuleViolation(reason="center_row_only"))
    elif not board.can_place(row, col):
        violations.append(RuleViolation(reason="cell_occupied"))
    if not supply.center_pile(kind.card_name):
        violations.append(RuleViolation(reason="pile_empty"))
    if not player.bank.can_afford(CENTER_CARD_COSTS[kind]):
        violations.append(RuleViolation(reason="insufficient_resources"))
    return violations


def build_center_card(
    player: "Player",
    supply: "Supply",
    kind: Optional[CenterCardType],
    row: int,
    col: int,
) -> List[RuleViolation]:
    """Build a Road, Settlement or City.

    A City replaces a Settlement and gains the difference in victory points; the
    Settlement goes back under its pile. Roads and Settlements built on an edge column
    grow the principality by one column on that side.
    """
    violations = validate_build(player, supply, kind, row, col)
    if violations:
        return _refuse(player, "build", violations)
    cost = CENTER_CARD_COSTS[kind]
    paid = player.bank.withdraw(cost)
    if paid is None:
        return _refuse(player, "build", [RuleViolation(reason="insufficient_resources")])
    card = supply.take_center_card(kind.card_name)
    if card is None:
        player.bank.restore(paid)
        return _refuse(player, "build", [RuleViolation(reason="pile_empty")])

    if kind == CenterCardType.CITY:
        previous = player.board.replace_card(row, col, card)
        player.add_points(victory=card.victory_points - previous.victory_points)
        supply.settlements.append(previous)
    else:
        if not player.board.place_card(row, col, card):
            player.bank.restore(paid)
            supply.center_pile(kind.card_name).insert(0, card)
            return _refuse(player, "build", [RuleViolation(reason="cell_occupied")])
        player.add_points(**card.points())
        col = player.board.expand_after_edge_build(col)
    logger.info("center_card_built", player=player.name, card=card.name, row=row, col=col)
    return []


def trade_rate(player: "Player", give: ResourceType, config: GameConfig = INTRODUCTORY_GAME) -> int:
    if player.has(Capability.two_for_one(give)):
        return config.two_for_one_rate
    return config.bank_trade_rate


def validate_trade(
    player: "Player",
    give: Optional[ResourceType],
    get: Optional[ResourceType],
    config: GameConfig = INTRODUCTORY_GAME,
) -> List[RuleViolation]:
    violations: List[RuleViolation] = []
    if give is None or get is None:
        violations.append(RuleViolation(reason="invalid_trade_resource"))
        return violations
    if give == get:
        violations.append(RuleViolation(reason="invalid_trade_pair"))
        return violations
    if player.bank.count(give) < trade_rate(player, give, config):
        violations.append(RuleViolation(reason="insufficient_resources"))
    if player.bank.count(get) >= player.bank.capacity(get):
        violations.append(RuleViolation(reason="no_storage"))
    return violations


def trade_with_bank(
    player: "Player",
    give: Optional[ResourceType],
    get: Optional[ResourceType],
    config: GameConfig = INTRODUCTORY_GAME,
) -> List[RuleViolation]:
    violations = validate_trade(player, give, get, config)
    if violations:
        return _refuse(player, "trade", violations)
    rate = trade_rate(player, give, config)
    player.bank.remove(give, rate)
    player.bank.add(get, 1)
    logger.info("bank_trade", player=player.name, give=give.value, get=get.value, rate=rate)
    return []
