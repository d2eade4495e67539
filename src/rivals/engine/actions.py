"""Action-phase commands.

Each command line is ``<NAME> [args...]``. A command returns True when it closes the
action phase; refused commands leave the game untouched and tell the player why.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from .rules import RuleViolation, build_center_card, play_card, trade_with_bank
from .types import CenterCardType, ResourceType

if TYPE_CHECKING:
    from .phases import TurnContext
    from .player import Player
    from .victory import VictoryCondition


@dataclass(frozen=True)
class PlayerAction:
    name: str
    usage: str
    handler: Callable[["TurnContext", List[str]], bool]


def parse_command(text: str) -> Tuple[str, List[str]]:
    parts = (text or "").split()
    if not parts:
        return "", []
    return parts[0].upper(), parts[1:]


def _ints(args: List[str]) -> Optional[List[int]]:
    try:
        return [int(arg) for arg in args]
    except ValueError:
        return None


def _report(player: "Player", verb: str, violations: List[RuleViolation]) -> None:
    if violations:
        player.send_message(f"Cannot {verb}: " + ", ".join(v.reason for v in violations))


def _play(ctx: "TurnContext", args: List[str]) -> bool:
    player = ctx.active
    numbers = _ints(args)
    if numbers is None or len(numbers) not in (1, 3):
        player.send_message("Usage: PLAY <index> [<row> <col>]")
        return False
    index = numbers[0]
    row, col = (numbers[1], numbers[2]) if len(numbers) == 3 else (None, None)
    name = player.hand[index].name if 0 <= index < len(player.hand) else None
    violations = play_card(player, ctx.opponent, index, row, col)
    _report(player, "play card", violations)
    if not violations:
        ctx.broadcast(f"{player.name} played {name}")
    return False


def _build(ctx: "TurnContext", args: List[str]) -> bool:
    player = ctx.active
    numbers = _ints(args[1:]) if len(args) == 3 else None
    if numbers is None:
        player.send_message("Usage: BUILD <Road|Settlement|City> <row> <col>")
        return False
    kind = CenterCardType.parse(args[0])
    violations = build_center_card(player, ctx.supply, kind, numbers[0], numbers[1])
    _report(player, "build", violations)
    if not violations:
        ctx.broadcast(f"{player.name} built a {kind.card_name}")
    return False


def _trade(ctx: "TurnContext", args: List[str]) -> bool:
    player = ctx.active
    if len(args) != 2:
        player.send_message("Usage: TRADE <give> <get>")
        return False
    give, get = ResourceType.parse(args[0]), ResourceType.parse(args[1])
    violations = trade_with_bank(player, give, get, ctx.config)
    _report(player, "trade", violations)
    if not violations:
        player.send_message(f"Traded for 1 {get.display_name}")
    return False


def _view(ctx: "TurnContext", args: List[str]) -> bool:
    ctx.active.send_message(describe_player(ctx.active, ctx.opponent, ctx.victory))
    return False


def _end(ctx: "TurnContext", args: List[str]) -> bool:
    return True


ACTIONS: Dict[str, PlayerAction] = {
    action.name: action
    for action in (
        PlayerAction("PLAY", "PLAY <index> [<row> <col>] - play a card from your hand", _play),
        PlayerAction("BUILD", "BUILD <Road|Settlement|City> <row> <col> - build a center card", _build),
        PlayerAction("TRADE", "TRADE <give> <get> - trade with the bank", _trade),
        PlayerAction("VIEW", "VIEW - show your principality and hand", _view),
        PlayerAction("END", "END - end the action phase", _end),
    )
}


def action_help() -> str:
    return "\n".join(action.usage for action in ACTIONS.values())


def execute(ctx: "TurnContext", text: str) -> bool:
    name, args = parse_command(text)
    action = ACTIONS.get(name)
    if action is None:
        ctx.active.send_message("Unknown command. Available:\n" + action_help())
        return False
    return action.handler(ctx, args)


def describe_player(player: "Player", opponent: "Player", victory: "VictoryCondition") -> str:
    resources = ", ".join(f"{rtype.display_name}={amount}" for rtype, amount in player.bank.summary().items())
    hand = ", ".join(f"[{i}] {card.name}" for i, card in enumerate(player.hand)) or "(empty)"
    lines = [
        f"=== {player.name} ===",
        victory.summary(player, opponent),
        "Points: " + ", ".join(f"{kind}={value}" for kind, value in player.points().items()),
        f"Resources: {resources}",
        f"Hand: {hand}",
        "Principality:",
    ]
    for row in player.board.cells():
        lines.append(" | ".join(_cell_label(card) for card in row))
    return "\n".join(lines)


def _cell_label(card) -> str:
    if card is None:
        return "."
    if card.is_region:
        return f"{card.name}({card.dice_roll}:{card.stored_resources})"
    return card.name
