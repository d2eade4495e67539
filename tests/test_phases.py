from rivals.engine.cards import Card
from rivals.engine.dice import DiceRoll
from rivals.engine.phases import (
    ActionPhaseHandler,
    ExchangePhaseHandler,
    ProductionPhaseHandler,
    ReplenishPhaseHandler,
    VictoryCheckHandler,
    draw_with_fallthrough,
    produce,
)
from rivals.engine.types import Capability, CardType, ResourceType


def _card(name, card_type=CardType.ACTION):
    return Card(name, card_type)


def test_production_adds_one_to_matching_regions(player_factory, place_region, context_factory):
    a, b = player_factory("Ada"), player_factory("Bo")
    hit = place_region(a, "Forest", 1, 0, stored=1, dice_roll=4)
    miss = place_region(a, "Hill", 1, 2, stored=1, dice_roll=5)
    other = place_region(b, "Field", 3, 0, stored=0, dice_roll=4)
    ctx = context_factory(a, b, roll=DiceRoll(4, 2))

    ProductionPhaseHandler().execute(ctx)

    assert hit.stored_resources == 2
    assert miss.stored_resources == 1
    assert other.stored_resources == 1


def test_boosted_production_is_capped(player_factory, place_region):
    player = player_factory()
    mountain = place_region(player, "Mountain", 1, 2, stored=2, dice_roll=3)
    player.board.place_card(1, 1, Card("Iron Foundry", CardType.BUILDING))

    assert produce(player, 3) == 1
    assert mountain.stored_resources == 3


def test_booster_doubles_production(player_factory, place_region):
    player = player_factory()
    field = place_region(player, "Field", 3, 2, stored=0, dice_roll=6)
    player.board.place_card(2, 2, Card("Grain Mill", CardType.BUILDING))

    assert produce(player, 6) == 2
    assert field.stored_resources == 2


def test_wrong_booster_does_not_double(player_factory, place_region):
    player = player_factory()
    field = place_region(player, "Field", 3, 2, stored=0, dice_roll=6)
    player.board.place_card(3, 3, Card("Iron Foundry", CardType.BUILDING))

    assert produce(player, 6) == 1
    assert field.stored_resources == 1


def test_replenish_fills_to_hand_limit(player_factory, context_factory, supply):
    player = player_factory("Ada", ["1", "3", "3", "4"])
    player.add_points(progress=1)
    cards = [_card(name) for name in ("a", "b", "c", "d")]
    supply.get_draw_stack(1).append(cards[0])
    supply.get_draw_stack(3).extend(cards[1:3])
    supply.get_draw_stack(4).append(cards[3])
    ctx = context_factory(player, player_factory("Bo"))

    ReplenishPhaseHandler().execute(ctx)

    assert player.hand == cards
    assert supply.non_empty_stacks() == []


def test_replenish_stops_when_stacks_run_out(player_factory, context_factory, supply):
    player = player_factory("Ada", ["2"])
    only = _card("only")
    supply.get_draw_stack(2).append(only)
    ctx = context_factory(player, player_factory("Bo"))

    ReplenishPhaseHandler().execute(ctx)

    assert player.hand == [only]
    assert player.saw("All draw stacks are empty.")


def test_empty_stack_falls_through_to_next(supply):
    later = _card("later")
    supply.get_draw_stack(4).append(later)
    assert draw_with_fallthrough(supply, 2) is later
    assert draw_with_fallthrough(supply, 2) is None


def test_free_exchange_swaps_with_top_of_stack(player_factory, context_factory, supply):
    player = player_factory("Ada", ["Y", "1", "0", "2"])
    given, kept = _card("given"), _card("kept")
    player.hand.extend([given, kept])
    top, under = _card("top"), _card("under")
    supply.get_draw_stack(2).extend([top, under])
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [kept, top]
    assert supply.get_draw_stack(2) == [under, given]


def test_parish_hall_exchange_costs_one_and_lets_player_pick(player_factory, place_region, context_factory, supply):
    player = player_factory("Ada", ["Y", "2", "0", "2", "ore", "1"])
    player.grant(Capability.PARISH_HALL)
    place_region(player, "Mountain", 1, 0, stored=2)
    given = _card("given")
    player.hand.append(given)
    top, picked = _card("top"), _card("picked")
    supply.get_draw_stack(2).extend([top, picked])
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [picked]
    assert supply.get_draw_stack(2) == [top, given]
    assert player.bank.count(ResourceType.ORE) == 1


def test_cancelled_paid_draw_is_refunded(player_factory, place_region, context_factory, supply):
    player = player_factory("Ada", ["Y", "2", "0", "2", "ore", "C"])
    place_region(player, "Mountain", 1, 0, stored=3)
    given = _card("given")
    player.hand.append(given)
    supply.get_draw_stack(2).append(_card("top"))
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [given]
    assert player.bank.count(ResourceType.ORE) == 3
    assert player.saw("Exchange failed or cancelled.")


def test_cancelled_paid_draw_restores_each_region(player_factory, place_region, context_factory, supply):
    player = player_factory("Ada", ["Y", "2", "0", "2", "ore", "C"])
    player.grant(Capability.PARISH_HALL)
    full = place_region(player, "Mountain", 1, 0, stored=3)
    low = place_region(player, "Mountain", 1, 2, stored=1)
    player.hand.append(_card("given"))
    supply.get_draw_stack(2).append(_card("top"))
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert (full.stored_resources, low.stored_resources) == (3, 1)


def test_odin_fountain_allows_two_exchanges(player_factory, context_factory, supply):
    player = player_factory("Ada", ["Y", "1", "0", "1", "Y", "1", "0", "1", "Y"])
    player.grant(Capability.ODIN_FOUNTAIN)
    first, second = _card("first"), _card("second")
    player.hand.extend([first, second])
    x, y, z = _card("x"), _card("y"), _card("z")
    supply.get_draw_stack(1).extend([x, y, z])
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [x, y]
    assert supply.get_draw_stack(1) == [z, first, second]
    assert list(player.inputs) == ["Y"]


def test_town_hall_exchange_is_free_choice(player_factory, context_factory, supply):
    player = player_factory("Ada", ["Y", "0", "3", "1"])
    player.grant(Capability.TOWN_HALL)
    given = _card("given")
    player.hand.append(given)
    top, picked = _card("top"), _card("picked")
    supply.get_draw_stack(3).extend([top, picked])
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [picked]
    assert supply.get_draw_stack(3) == [top, given]


def test_declined_exchange_changes_nothing(player_factory, context_factory, supply):
    player = player_factory("Ada", ["N"])
    card = _card("card")
    player.hand.append(card)
    ctx = context_factory(player, player_factory("Bo"))

    ExchangePhaseHandler().execute(ctx)

    assert player.hand == [card]


def test_action_phase_runs_until_end(player_factory, context_factory):
    player = player_factory("Ada", ["VIEW", "DANCE", "END", "VIEW"])
    ctx = context_factory(player, player_factory("Bo"))

    ActionPhaseHandler().execute(ctx)

    assert list(player.inputs) == ["VIEW"]
    assert player.saw("=== Ada ===")
    assert player.saw("Unknown command")


def test_action_phase_is_bounded(player_factory, context_factory):
    from rivals.config import GameConfig

    player = player_factory("Ada", default_answer="VIEW")
    ctx = context_factory(player, player_factory("Bo"), config=GameConfig(max_actions_per_turn=4))

    ActionPhaseHandler().execute(ctx)

    assert sum(1 for m in player.messages if m.startswith("=== Ada ===")) == 4


def test_victory_check_prefers_active_player_on_double_win(player_factory, context_factory):
    a, b = player_factory("Ada"), player_factory("Bo")
    a.add_points(victory=7)
    b.add_points(victory=8)
    ctx = context_factory(a, b)

    VictoryCheckHandler().execute(ctx)

    assert ctx.winner is a


def test_victory_check_finds_opponent_win(player_factory, context_factory):
    a, b = player_factory("Ada"), player_factory("Bo")
    b.add_points(victory=7)
    ctx = context_factory(a, b)

    VictoryCheckHandler().execute(ctx)

    assert ctx.winner is b
