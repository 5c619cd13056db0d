"""
Ownership ledger: one PropertyState per ownable space.

The ledger is the only place that writes ownership, so a player's
`properties` set and the `owner_id` back-references change together.
"""

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from language_monopoly.board import Board
from language_monopoly.config import MAX_HOUSES
from language_monopoly.exceptions import IneligibleAction, InvariantViolation
from language_monopoly.player import PlayerState, PropertyState


class OwnershipLedger:
    """Mutable per-space ownership and building records."""

    def __init__(self, board: Board, states: Optional[Mapping[int, PropertyState]] = None):
        self.board = board
        self._states: Dict[int, PropertyState] = {
            space_id: PropertyState() for space_id in board.ownable_space_ids()
        }
        if states:
            for space_id, state in states.items():
                if space_id not in self._states:
                    raise InvariantViolation(f"Space {space_id} is not ownable")
                self._states[space_id] = state

    def __getitem__(self, space_id: int) -> PropertyState:
        return self._states[space_id]

    def __contains__(self, space_id: object) -> bool:
        return space_id in self._states

    def __iter__(self) -> Iterator[int]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def get(self, space_id: int) -> Optional[PropertyState]:
        return self._states.get(space_id)

    def items(self) -> Iterable[Tuple[int, PropertyState]]:
        return self._states.items()

    def as_mapping(self) -> Mapping[int, PropertyState]:
        """Read view used by the set evaluator."""
        return self._states

    def require(self, space_id: int) -> PropertyState:
        """Get the state of an ownable space or reject the action."""
        state = self._states.get(space_id)
        if state is None:
            raise IneligibleAction(f"Space {space_id} cannot be owned", reason="not_ownable")
        return state

    def assign_owner(self, space_id: int, player: PlayerState) -> None:
        """Record `player` as owner of an unowned space."""
        state = self._states[space_id]
        if state.owner_id is not None:
            raise InvariantViolation(
                f"Space {space_id} already owned by player {state.owner_id}"
            )
        state.owner_id = player.player_id
        player.properties.add(space_id)

    def check_invariants(self, players: Mapping[int, PlayerState]) -> None:
        """
        Verify ownership agrees in both directions and building bounds hold.

        Raises:
            InvariantViolation: on the first inconsistency found
        """
        for space_id, state in self._states.items():
            if not 0 <= state.houses <= MAX_HOUSES:
                raise InvariantViolation(f"Space {space_id} has {state.houses} houses")
            if state.academy and state.houses != MAX_HOUSES:
                raise InvariantViolation(f"Space {space_id} has an academy below {MAX_HOUSES} houses")
            if state.owner_id is None:
                continue
            owner = players.get(state.owner_id)
            if owner is None:
                raise InvariantViolation(
                    f"Space {space_id} owned by unknown player {state.owner_id}"
                )
            if space_id not in owner.properties:
                raise InvariantViolation(
                    f"Space {space_id} names player {owner.player_id} as owner "
                    f"but is missing from their properties"
                )

        for player in players.values():
            for space_id in player.properties:
                state = self._states.get(space_id)
                if state is None or state.owner_id != player.player_id:
                    raise InvariantViolation(
                        f"Player {player.player_id} lists space {space_id} "
                        f"which they do not own"
                    )
            if player.upgrade_credits < 0:
                raise InvariantViolation(
                    f"Player {player.player_id} has negative upgrade credits"
                )
