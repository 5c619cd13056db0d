"""
Tests for library, canteen and oratory special events.
"""

import pytest

from conftest import CANTEEN_SPACE, LIBRARY_SPACE, ORATORY_SPACE
from language_monopoly import GameConfig, Player, create_game
from language_monopoly.cards import Card, CardType, DeckType
from language_monopoly.exceptions import MismatchedChoiceKind, NoPendingEvent, WrongResolver
from language_monopoly.rules import apply_roll, apply_special_resolution
from language_monopoly.specials import (
    ChoiceOption,
    OratoryChoice,
    PendingSpecial,
    ResourceOrCardChoice,
    SpecialEffect,
    SpecialKind,
    parse_special_choice,
    resolve_special,
)

LIBRARY_RESOURCE = ResourceOrCardChoice(SpecialKind.LIBRARY, ChoiceOption.RESOURCE)
LIBRARY_CARD = ResourceOrCardChoice(SpecialKind.LIBRARY, ChoiceOption.CARD)
CANTEEN_RESOURCE = ResourceOrCardChoice(SpecialKind.CANTEEN, ChoiceOption.RESOURCE)
CANTEEN_CARD = ResourceOrCardChoice(SpecialKind.CANTEEN, ChoiceOption.CARD)


@pytest.mark.parametrize(
    "kind, choice, expected",
    [
        (SpecialKind.LIBRARY, LIBRARY_RESOURCE, SpecialEffect(SpecialKind.LIBRARY, 50)),
        (SpecialKind.LIBRARY, LIBRARY_CARD, SpecialEffect(SpecialKind.LIBRARY, 0, DeckType.FATE)),
        (SpecialKind.CANTEEN, CANTEEN_RESOURCE, SpecialEffect(SpecialKind.CANTEEN, 100)),
        (SpecialKind.CANTEEN, CANTEEN_CARD, SpecialEffect(SpecialKind.CANTEEN, 0, DeckType.SUPPLY)),
        (SpecialKind.ORATORY, OratoryChoice(success=True), SpecialEffect(SpecialKind.ORATORY, 50)),
        (SpecialKind.ORATORY, OratoryChoice(success=False), SpecialEffect(SpecialKind.ORATORY, -30)),
    ],
)
def test_resolution_table(kind, choice, expected):
    effect = resolve_special(PendingSpecial(kind, 0), 0, choice, GameConfig())

    assert effect == expected


def test_resolution_uses_configured_amounts():
    config = GameConfig(library_reward=70, oratory_penalty=5)

    assert resolve_special(PendingSpecial(SpecialKind.LIBRARY, 0), 0, LIBRARY_RESOURCE, config).resource_delta == 70
    assert (
        resolve_special(PendingSpecial(SpecialKind.ORATORY, 0), 0, OratoryChoice(False), config).resource_delta
        == -5
    )


def test_resolver_guards():
    pending = PendingSpecial(SpecialKind.LIBRARY, 0)

    with pytest.raises(NoPendingEvent):
        resolve_special(None, 0, LIBRARY_RESOURCE, GameConfig())
    with pytest.raises(WrongResolver):
        resolve_special(pending, 1, LIBRARY_RESOURCE, GameConfig())
    with pytest.raises(MismatchedChoiceKind):
        resolve_special(pending, 0, OratoryChoice(True), GameConfig())
    with pytest.raises(MismatchedChoiceKind):
        resolve_special(pending, 0, CANTEEN_RESOURCE, GameConfig())


def test_oratory_has_no_resource_or_card_choice():
    with pytest.raises(ValueError):
        ResourceOrCardChoice(SpecialKind.ORATORY, ChoiceOption.RESOURCE)


def test_parse_special_choice():
    assert parse_special_choice({"type": "library", "choice": "card"}) == LIBRARY_CARD
    assert parse_special_choice({"kind": "canteen", "choice": "resource"}) == CANTEEN_RESOURCE
    assert parse_special_choice({"type": "oratory", "success": False}) == OratoryChoice(False)

    with pytest.raises(ValueError):
        parse_special_choice({"type": "museum", "choice": "card"})
    with pytest.raises(ValueError):
        parse_special_choice({"type": "oratory", "success": "yes"})
    with pytest.raises(ValueError):
        parse_special_choice({"type": "library", "choice": "nap"})


def test_landing_on_library_opens_pending_special(basic_game):
    assert apply_roll(basic_game, 0, (1, 2)).ok

    assert basic_game.players[0].position == LIBRARY_SPACE
    assert basic_game.pending_special == PendingSpecial(SpecialKind.LIBRARY, 0)
    assert basic_game.pending_purchase is None


def test_library_resource_choice(basic_game):
    """Player with 200 takes the library resource option and ends at 250."""
    apply_roll(basic_game, 0, (1, 2))
    basic_game.players[0].resources = 200

    result = apply_special_resolution(basic_game, 0, LIBRARY_RESOURCE)

    assert result.ok
    assert result.effect == SpecialEffect(SpecialKind.LIBRARY, 50)
    assert basic_game.players[0].resources == 250
    assert basic_game.pending_special is None


def test_oratory_failure_costs_thirty(basic_game):
    basic_game.players[0].position = 10
    apply_roll(basic_game, 0, (1, 2))
    assert basic_game.players[0].position == ORATORY_SPACE
    before = basic_game.players[0].resources

    result = apply_special_resolution(basic_game, 0, OratoryChoice(success=False))

    assert result.ok
    assert basic_game.players[0].resources == before - 30
    assert basic_game.pending_special is None


def test_other_player_cannot_resolve(basic_game):
    apply_roll(basic_game, 0, (1, 2))
    version = basic_game.version
    resources = {pid: p.resources for pid, p in basic_game.players.items()}

    result = apply_special_resolution(basic_game, 1, LIBRARY_RESOURCE)

    assert not result.ok
    assert result.error == "WrongResolver"
    assert basic_game.pending_special == PendingSpecial(SpecialKind.LIBRARY, 0)
    assert {pid: p.resources for pid, p in basic_game.players.items()} == resources
    assert basic_game.version == version


def test_mismatched_choice_keeps_pending(basic_game):
    apply_roll(basic_game, 0, (1, 2))

    result = apply_special_resolution(basic_game, 0, OratoryChoice(success=True))

    assert not result.ok
    assert result.error == "MismatchedChoiceKind"
    assert basic_game.pending_special == PendingSpecial(SpecialKind.LIBRARY, 0)


def test_resolution_without_pending(basic_game):
    result = apply_special_resolution(basic_game, 0, LIBRARY_RESOURCE)

    assert not result.ok
    assert result.error == "NoPendingEvent"


def test_resolved_event_cannot_be_resolved_twice(basic_game):
    apply_roll(basic_game, 0, (1, 2))
    assert apply_special_resolution(basic_game, 0, LIBRARY_RESOURCE).ok

    again = apply_special_resolution(basic_game, 0, LIBRARY_RESOURCE)

    assert not again.ok
    assert again.error == "NoPendingEvent"


def test_library_card_draws_from_fate_deck(two_players):
    game = create_game(
        GameConfig(seed=3),
        two_players,
        fate_cards=[Card("Essay prize", CardType.COLLECT, 100)],
    )
    apply_roll(game, 0, (1, 2))

    result = apply_special_resolution(game, 0, LIBRARY_CARD)

    assert result.ok
    assert result.effect.draw_from == DeckType.FATE
    assert game.players[0].resources == 1600
    assert game.pending_special is None
    assert game.decks[DeckType.FATE].discard_pile[-1].description == "Essay prize"


def test_canteen_card_can_grant_upgrade_credit(two_players):
    game = create_game(
        GameConfig(seed=3),
        two_players,
        supply_cards=[Card("Kitchen voucher", CardType.GRANT_UPGRADE_CREDIT, 1)],
    )
    apply_roll(game, 0, (3, 4))
    assert game.players[0].position == CANTEEN_SPACE

    result = apply_special_resolution(game, 0, CANTEEN_CARD)

    assert result.ok
    assert game.players[0].upgrade_credits == 1
    assert game.players[0].resources == 1500


def test_deck_reshuffles_discards(two_players):
    game = create_game(
        GameConfig(seed=3),
        two_players,
        fate_cards=[Card("Fine", CardType.PAY, 10)],
    )

    for _ in range(3):
        game.draw_card(0, DeckType.FATE)

    assert game.players[0].resources == 1470


def test_empty_custom_deck_rejected(two_players):
    with pytest.raises(ValueError):
        create_game(GameConfig(seed=3), two_players, fate_cards=[])
