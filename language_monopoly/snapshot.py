"""
Snapshot serialization of GameState.

Produces a JSON-safe dict of the rule state (property states, players,
pending decisions, turn bookkeeping) and restores a GameState from it.
Deck order and the event log are not part of the snapshot.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from language_monopoly.board import Board
from language_monopoly.config import GameConfig
from language_monopoly.exceptions import InvariantViolation, SnapshotError
from language_monopoly.game import GameState, PendingPurchase
from language_monopoly.ledger import OwnershipLedger
from language_monopoly.player import Player, PropertyState
from language_monopoly.schemas import (
    GameSnapshot,
    PendingPurchaseModel,
    PendingSpecialModel,
    PlayerStateModel,
    PropertyStateModel,
    TurnModel,
)
from language_monopoly.specials import PendingSpecial


def build_snapshot(game: GameState) -> GameSnapshot:
    """Capture the rule state of a game as a validated model."""
    purchase = game.pending_purchase
    special = game.pending_special
    return GameSnapshot(
        version=game.version,
        property_states={
            space_id: PropertyStateModel(
                owner_id=state.owner_id, houses=state.houses, academy=state.academy
            )
            for space_id, state in game.ledger.items()
        },
        players=[
            PlayerStateModel(
                player_id=pid,
                name=p.name,
                resources=p.resources,
                position=p.position,
                upgrade_credits=p.upgrade_credits,
                properties=sorted(p.properties),
            )
            for pid, p in sorted(game.players.items())
        ],
        pending_purchase=(
            PendingPurchaseModel(space_id=purchase.space_id, player_id=purchase.player_id)
            if purchase
            else None
        ),
        pending_special=(
            PendingSpecialModel(kind=special.kind, player_id=special.player_id) if special else None
        ),
        turn=TurnModel(
            current_player_index=game.current_player_index,
            turn_number=game.turn_number,
            has_rolled=game.has_rolled,
            last_dice_roll=game.last_dice_roll,
        ),
    )


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a JSON-safe dict."""
    return build_snapshot(game).model_dump(mode="json")


def restore_game(
    data: Mapping[str, Any],
    config: Optional[GameConfig] = None,
    board: Optional[Board] = None,
) -> GameState:
    """
    Rebuild a GameState from `serialize_snapshot` output.

    Raises:
        SnapshotError: if the data does not match the snapshot layout
        InvariantViolation: if the data is well-formed but inconsistent
    """
    try:
        snap = GameSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid game snapshot: {e}") from e

    try:
        game = GameState(
            config or GameConfig(),
            [Player(p.player_id, p.name) for p in snap.players],
            board,
        )
    except ValueError as e:
        raise SnapshotError(f"Invalid game snapshot: {e}") from e
    game.event_log.clear()

    for model in snap.players:
        if model.position not in game.board:
            raise InvariantViolation(f"Player {model.player_id} stands on unknown space {model.position}")
        player = game.players[model.player_id]
        player.resources = model.resources
        player.position = model.position
        player.upgrade_credits = model.upgrade_credits
        player.properties = set(model.properties)

    game.ledger = OwnershipLedger(
        game.board,
        {
            space_id: PropertyState(owner_id=m.owner_id, houses=m.houses, academy=m.academy)
            for space_id, m in snap.property_states.items()
        },
    )

    if snap.pending_purchase is not None:
        game.pending_purchase = PendingPurchase(
            snap.pending_purchase.space_id, snap.pending_purchase.player_id
        )
    if snap.pending_special is not None:
        game.pending_special = PendingSpecial(snap.pending_special.kind, snap.pending_special.player_id)

    game.current_player_index = snap.turn.current_player_index % len(game.players)
    game.turn_number = snap.turn.turn_number
    game.has_rolled = snap.turn.has_rolled
    game.last_dice_roll = snap.turn.last_dice_roll
    game.version = snap.version

    game.check_invariants()
    return game
