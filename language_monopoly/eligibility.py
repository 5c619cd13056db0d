"""
Monopoly-set evaluation and build eligibility.

The three predicates are pure. The `*_blocker` helpers add the checks an
attempted action needs on top of them (ownership, affordability) and name
the first failing precondition, so offers and applies share one source of
truth.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from language_monopoly.board import Board
from language_monopoly.config import MAX_HOUSES, GameConfig
from language_monopoly.exceptions import IneligibleAction
from language_monopoly.player import PlayerState, PropertyState
from language_monopoly.spaces import BoardSpace


def owns_color_set(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    board: Board,
) -> bool:
    """
    Check if a player owns every space in the color group of `space`.

    Returns False for spaces without a color group.
    """
    group = board.color_group(space.color)
    if not group:
        return False
    for space_id in group:
        state = property_states.get(space_id)
        if state is None or state.owner_id != player.player_id:
            return False
    return True


def can_build_house(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    board: Board,
) -> bool:
    state = property_states.get(space.id)
    if state is None:
        return False
    return (
        owns_color_set(player, space, property_states, board)
        and state.houses < MAX_HOUSES
        and not state.academy
    )


def can_upgrade_to_academy(player: PlayerState, space: BoardSpace, state: PropertyState) -> bool:
    # Full-set ownership is implied: every house step required it
    return state.houses == MAX_HOUSES and not state.academy


def can_consume_credit(player: PlayerState, space: BoardSpace, state: PropertyState) -> bool:
    return player.upgrade_credits > 0 and not state.academy


def house_blocker(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    board: Board,
    config: GameConfig,
) -> Optional[str]:
    """Return why building a house on `space` is illegal, or None."""
    state = property_states.get(space.id)
    if state is None:
        return "not_ownable"
    if state.owner_id != player.player_id:
        return "not_owner"
    if state.academy:
        return "academy_built"
    if state.houses >= MAX_HOUSES:
        return "max_houses"
    if not owns_color_set(player, space, property_states, board):
        return "no_color_set"
    if player.resources < config.build_cost:
        return "insufficient_resources"
    return None


def upgrade_blocker(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    config: GameConfig,
) -> Optional[str]:
    """Return why upgrading `space` to an academy is illegal, or None."""
    state = property_states.get(space.id)
    if state is None:
        return "not_ownable"
    if state.owner_id != player.player_id:
        return "not_owner"
    if state.academy:
        return "academy_built"
    if state.houses < MAX_HOUSES:
        return "houses_below_max"
    if player.resources < config.academy_cost:
        return "insufficient_resources"
    return None


def credit_blocker(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    board: Board,
) -> Optional[str]:
    """
    Return why spending an upgrade credit on `space` is illegal, or None.

    A credit replaces the cost of the next step, never its ownership gate:
    a house step still needs the full color set.
    """
    state = property_states.get(space.id)
    if state is None:
        return "not_ownable"
    if player.upgrade_credits <= 0:
        return "no_credits"
    if state.academy:
        return "academy_built"
    if state.owner_id != player.player_id:
        return "not_owner"
    if state.houses < MAX_HOUSES and not owns_color_set(player, space, property_states, board):
        return "no_color_set"
    return None


def _raise_if_blocked(reason: Optional[str], action: str, space: BoardSpace) -> None:
    if reason is not None:
        raise IneligibleAction(f"Cannot {action} on {space.name}: {reason}", reason=reason)


def require_build_house(player, space, property_states, board, config) -> None:
    _raise_if_blocked(house_blocker(player, space, property_states, board, config), "build a house", space)


def require_upgrade(player, space, property_states, config) -> None:
    _raise_if_blocked(upgrade_blocker(player, space, property_states, config), "upgrade to an academy", space)


def require_consume_credit(player, space, property_states, board) -> None:
    _raise_if_blocked(credit_blocker(player, space, property_states, board), "use an upgrade credit", space)


@dataclass
class BuildOptions:
    """Which building actions are currently legal for one player/space pair."""

    space_id: int
    can_build: bool = False
    can_upgrade: bool = False
    can_consume_credit: bool = False
    blockers: Dict[str, str] = field(default_factory=dict)


def evaluate_build_options(
    player: PlayerState,
    space: BoardSpace,
    property_states: Mapping[int, PropertyState],
    board: Board,
    config: GameConfig,
) -> BuildOptions:
    """Run all three gates for one space."""
    reasons = {
        "build": house_blocker(player, space, property_states, board, config),
        "upgrade": upgrade_blocker(player, space, property_states, config),
        "credit": credit_blocker(player, space, property_states, board),
    }
    return BuildOptions(
        space_id=space.id,
        can_build=reasons["build"] is None,
        can_upgrade=reasons["upgrade"] is None,
        can_consume_credit=reasons["credit"] is None,
        blockers={action: reason for action, reason in reasons.items() if reason is not None},
    )
