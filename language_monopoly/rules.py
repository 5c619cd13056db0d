"""
High-level rules API for controlling game flow.

This module is the turn-action gateway: it tells a presentation layer which
actions are currently on offer and applies attempted actions. Offers are
advisory only; every apply re-runs the eligibility gate and the special
resolver guards against the live state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from language_monopoly.eligibility import BuildOptions, evaluate_build_options
from language_monopoly.exceptions import ActionRejected, InvalidActionError
from language_monopoly.game import ActionType, GameState, PendingPurchase
from language_monopoly.player import PlayerState
from language_monopoly.spaces import BoardSpace
from language_monopoly.specials import (
    ChoiceOption,
    OratoryChoice,
    PendingSpecial,
    ResourceOrCardChoice,
    SpecialChoice,
    SpecialEffect,
    SpecialKind,
    parse_special_choice,
)

logger = logging.getLogger(__name__)


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, player_id: int, **params: Any):
        self.action_type = action_type
        self.player_id = player_id
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, player={self.player_id}, {self.params})"


@dataclass
class ActionResult:
    """Outcome of an attempted action. Rejections leave the state unchanged."""

    ok: bool
    action_type: ActionType
    version: int
    error: Optional[str] = None
    reason: Optional[str] = None
    message: str = ""
    effect: Optional[SpecialEffect] = None


@dataclass
class ActionOffer:
    """Actions currently offerable to one player for one target space."""

    player_id: int
    space_id: int
    version: int
    can_roll: bool = False
    can_end_turn: bool = False
    can_purchase: bool = False
    can_build: bool = False
    can_upgrade: bool = False
    can_consume_credit: bool = False
    upgrade_credits: int = 0
    pending_purchase: Optional[PendingPurchase] = None
    pending_special: Optional[PendingSpecial] = None
    special_choices: List[SpecialChoice] = field(default_factory=list)
    build_rows: List[BuildOptions] = field(default_factory=list)


def _special_choices(kind: SpecialKind) -> List[SpecialChoice]:
    if kind == SpecialKind.ORATORY:
        return [OratoryChoice(success=True), OratoryChoice(success=False)]
    return [ResourceOrCardChoice(kind, ChoiceOption.RESOURCE), ResourceOrCardChoice(kind, ChoiceOption.CARD)]


def _build_options(game: GameState, player: PlayerState, space: BoardSpace, is_current: bool) -> BuildOptions:
    if not is_current:
        return BuildOptions(
            space_id=space.id,
            blockers={"build": "not_your_turn", "upgrade": "not_your_turn", "credit": "not_your_turn"},
        )
    return evaluate_build_options(player, space, game.ledger.as_mapping(), game.board, game.config)


def offer_actions(game_state: GameState, player_id: int, selected_space: Optional[int] = None) -> ActionOffer:
    """
    Compute the actions on offer for a player.

    Args:
        game_state: Current game state
        player_id: Player to compute the offer for
        selected_space: Space the player is looking at (defaults to their position)

    Returns:
        ActionOffer for the target space, plus one build row per owned property
    """
    player = game_state.get_player(player_id)
    space = game_state.get_space(player.position if selected_space is None else selected_space)
    is_current = game_state.get_current_player().player_id == player_id
    any_pending = game_state.pending_purchase is not None or game_state.pending_special is not None

    offer = ActionOffer(
        player_id=player_id,
        space_id=space.id,
        version=game_state.version,
        upgrade_credits=player.upgrade_credits,
        pending_purchase=game_state.pending_purchase,
        pending_special=game_state.pending_special,
    )
    offer.can_roll = is_current and not game_state.has_rolled and not any_pending
    offer.can_end_turn = (
        is_current and game_state.has_rolled and not game_state.has_pending_decision(player_id)
    )

    pending_purchase = game_state.pending_purchase
    if pending_purchase and pending_purchase.space_id == space.id and pending_purchase.player_id == player_id:
        offer.can_purchase = player.resources >= (space.cost or 0)

    pending_special = game_state.pending_special
    if pending_special and pending_special.player_id == player_id:
        offer.special_choices = _special_choices(pending_special.kind)

    if space.id in game_state.ledger:
        options = _build_options(game_state, player, space, is_current)
        offer.can_build = options.can_build
        offer.can_upgrade = options.can_upgrade
        offer.can_consume_credit = options.can_consume_credit

    offer.build_rows = [
        _build_options(game_state, player, game_state.board.get_space(space_id), is_current)
        for space_id in sorted(player.properties)
    ]
    return offer


def get_legal_actions(game_state: GameState, player_id: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    ROLL_DICE carries no dice; the caller supplies them when applying.
    """
    offer = offer_actions(game_state, player_id)
    actions: List[Action] = []

    if offer.can_roll:
        actions.append(Action(ActionType.ROLL_DICE, player_id))

    pending = offer.pending_purchase
    if pending is not None and pending.player_id == player_id:
        if offer.can_purchase:
            actions.append(Action(ActionType.BUY_PROPERTY, player_id, space_id=pending.space_id))
        actions.append(Action(ActionType.SKIP_PURCHASE, player_id, space_id=pending.space_id))

    for choice in offer.special_choices:
        actions.append(Action(ActionType.RESOLVE_SPECIAL, player_id, choice=choice))

    for row in offer.build_rows:
        if row.can_build:
            actions.append(Action(ActionType.BUILD_HOUSE, player_id, space_id=row.space_id))
        if row.can_upgrade:
            actions.append(Action(ActionType.UPGRADE_ACADEMY, player_id, space_id=row.space_id))
        if row.can_consume_credit:
            actions.append(Action(ActionType.CONSUME_CREDIT, player_id, space_id=row.space_id))

    if offer.can_end_turn:
        actions.append(Action(ActionType.END_TURN, player_id))

    return actions


def _param(action: Action, name: str) -> Any:
    if name not in action.params:
        raise InvalidActionError(f"{action.action_type.value} needs '{name}'", reason="missing_parameter")
    return action.params[name]


def _choice_param(action: Action) -> SpecialChoice:
    choice = _param(action, "choice")
    if isinstance(choice, Mapping):
        try:
            return parse_special_choice(choice)
        except ValueError as e:
            raise InvalidActionError(str(e), reason="invalid_choice") from None
    if not isinstance(choice, (ResourceOrCardChoice, OratoryChoice)):
        raise InvalidActionError(f"Not a special choice: {choice!r}", reason="invalid_choice")
    return choice


_HANDLERS: Dict[ActionType, Callable[[GameState, Action], Any]] = {
    ActionType.ROLL_DICE: lambda g, a: g.roll(a.player_id, _param(a, "dice")),
    ActionType.END_TURN: lambda g, a: g.end_turn(a.player_id),
    ActionType.BUY_PROPERTY: lambda g, a: g.buy_property(a.player_id, _param(a, "space_id")),
    ActionType.SKIP_PURCHASE: lambda g, a: g.skip_purchase(_param(a, "space_id"), a.player_id),
    ActionType.BUILD_HOUSE: lambda g, a: g.build_house(a.player_id, _param(a, "space_id")),
    ActionType.UPGRADE_ACADEMY: lambda g, a: g.upgrade_to_academy(a.player_id, _param(a, "space_id")),
    ActionType.CONSUME_CREDIT: lambda g, a: g.consume_credit(a.player_id, _param(a, "space_id")),
    ActionType.RESOLVE_SPECIAL: lambda g, a: g.resolve_special(a.player_id, _choice_param(a)),
}


def apply_action(game_state: GameState, action: Action) -> ActionResult:
    """
    Apply an action to the game state.

    This is the main interface for executing moves. Rejections come back
    as a failed ActionResult; InvariantViolation propagates.

    Args:
        game_state: Current game state
        action: Action to apply

    Returns:
        ActionResult describing success or the rejection
    """
    handler = _HANDLERS.get(action.action_type)
    try:
        if handler is None:
            raise InvalidActionError(f"Unsupported action {action.action_type}", reason="unknown_action")
        outcome = handler(game_state, action)
    except ActionRejected as e:
        logger.info(f"Rejected {action!r}: {e.reason} ({e})")
        return ActionResult(
            ok=False,
            action_type=action.action_type,
            version=game_state.version,
            error=type(e).__name__,
            reason=e.reason,
            message=str(e),
        )

    game_state.version += 1
    game_state.check_invariants()
    return ActionResult(
        ok=True,
        action_type=action.action_type,
        version=game_state.version,
        effect=outcome if isinstance(outcome, SpecialEffect) else None,
    )


def apply_roll(game_state: GameState, player_id: int, dice: Tuple[int, int]) -> ActionResult:
    return apply_action(game_state, Action(ActionType.ROLL_DICE, player_id, dice=dice))


def apply_end_turn(game_state: GameState, player_id: int) -> ActionResult:
    return apply_action(game_state, Action(ActionType.END_TURN, player_id))


def apply_purchase(game_state: GameState, player_id: int, space_id: int) -> ActionResult:
    return apply_action(game_state, Action(ActionType.BUY_PROPERTY, player_id, space_id=space_id))


def apply_skip(game_state: GameState, space_id: int, player_id: Optional[int] = None) -> ActionResult:
    """Skip the pending purchase. Without `player_id` anyone may skip it."""
    return apply_action(game_state, Action(ActionType.SKIP_PURCHASE, player_id, space_id=space_id))


def apply_build(game_state: GameState, player_id: int, space_id: int) -> ActionResult:
    return apply_action(game_state, Action(ActionType.BUILD_HOUSE, player_id, space_id=space_id))


def apply_upgrade(game_state: GameState, player_id: int, space_id: int) -> ActionResult:
    return apply_action(game_state, Action(ActionType.UPGRADE_ACADEMY, player_id, space_id=space_id))


def apply_consume_credit(game_state: GameState, player_id: int, space_id: int) -> ActionResult:
    return apply_action(game_state, Action(ActionType.CONSUME_CREDIT, player_id, space_id=space_id))


def apply_special_resolution(game_state: GameState, player_id: int, choice: SpecialChoice) -> ActionResult:
    return apply_action(game_state, Action(ActionType.RESOLVE_SPECIAL, player_id, choice=choice))
