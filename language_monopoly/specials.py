"""
Special-event resolution for library, canteen and oratory spaces.

Landing on a special space opens a PendingSpecial owned by the lander.
Only that player can close it, and only with a choice of the matching
kind. Resolving is a pure computation: it returns the SpecialEffect and
leaves applying it (and clearing the pending event) to the game state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from language_monopoly.cards import DeckType
from language_monopoly.config import GameConfig
from language_monopoly.exceptions import MismatchedChoiceKind, NoPendingEvent, WrongResolver
from language_monopoly.spaces import BoardSpace, SpaceType


class SpecialKind(Enum):
    """Kinds of special events."""

    LIBRARY = "library"
    CANTEEN = "canteen"
    ORATORY = "oratory"


class ChoiceOption(Enum):
    """Library and canteen options."""

    RESOURCE = "resource"
    CARD = "card"


_KIND_BY_SPACE_TYPE = {
    SpaceType.LIBRARY: SpecialKind.LIBRARY,
    SpaceType.CANTEEN: SpecialKind.CANTEEN,
    SpaceType.ORATORY: SpecialKind.ORATORY,
}

_DECK_BY_KIND = {
    SpecialKind.LIBRARY: DeckType.FATE,
    SpecialKind.CANTEEN: DeckType.SUPPLY,
}


@dataclass(frozen=True)
class ResourceOrCardChoice:
    """Library or canteen resolution: take resources or draw a card."""

    kind: SpecialKind
    choice: ChoiceOption

    def __post_init__(self) -> None:
        if self.kind not in _DECK_BY_KIND:
            raise ValueError(f"{self.kind.value} does not offer a resource-or-card choice")


@dataclass(frozen=True)
class OratoryChoice:
    """Oratory resolution: whether the speech succeeded."""

    success: bool

    @property
    def kind(self) -> SpecialKind:
        return SpecialKind.ORATORY


SpecialChoice = Union[ResourceOrCardChoice, OratoryChoice]


@dataclass(frozen=True)
class PendingSpecial:
    """A special event waiting for its designated player."""

    kind: SpecialKind
    player_id: int


@dataclass(frozen=True)
class SpecialEffect:
    """Outcome of a resolved special event."""

    kind: SpecialKind
    resource_delta: int = 0
    draw_from: Optional[DeckType] = None


def special_kind_for(space: BoardSpace) -> Optional[SpecialKind]:
    """Special kind triggered by landing on `space`, if any."""
    return _KIND_BY_SPACE_TYPE.get(space.space_type)


def parse_special_choice(payload: Mapping[str, Any]) -> SpecialChoice:
    """
    Build a SpecialChoice from a loose payload.

    Accepts ``{"type"|"kind": "library"|"canteen", "choice": "resource"|"card"}``
    or ``{"type"|"kind": "oratory", "success": bool}``.
    """
    raw_kind = payload.get("kind", payload.get("type"))
    try:
        kind = SpecialKind(raw_kind)
    except ValueError:
        raise ValueError(f"Unknown special kind: {raw_kind!r}") from None

    if kind == SpecialKind.ORATORY:
        success = payload.get("success")
        if not isinstance(success, bool):
            raise ValueError("Oratory choice needs a boolean 'success'")
        return OratoryChoice(success=success)
    return ResourceOrCardChoice(kind=kind, choice=ChoiceOption(payload.get("choice")))


def resolve_special(
    pending: Optional[PendingSpecial],
    player_id: int,
    choice: SpecialChoice,
    config: GameConfig,
) -> SpecialEffect:
    """
    Validate a choice against the pending event and compute its effect.

    Raises:
        NoPendingEvent: nothing to resolve
        WrongResolver: `player_id` is not the designated player
        MismatchedChoiceKind: choice kind differs from the pending kind
    """
    if pending is None:
        raise NoPendingEvent("No special event is waiting to be resolved")
    if pending.player_id != player_id:
        raise WrongResolver(
            f"Player {player_id} cannot resolve player {pending.player_id}'s {pending.kind.value}"
        )
    if choice.kind != pending.kind:
        raise MismatchedChoiceKind(
            f"Pending event is {pending.kind.value}, got a {choice.kind.value} choice"
        )

    if isinstance(choice, OratoryChoice):
        delta = config.oratory_reward if choice.success else -config.oratory_penalty
        return SpecialEffect(kind=SpecialKind.ORATORY, resource_delta=delta)

    if isinstance(choice, ResourceOrCardChoice):
        if choice.choice == ChoiceOption.CARD:
            return SpecialEffect(kind=choice.kind, draw_from=_DECK_BY_KIND[choice.kind])
        reward = (
            config.library_reward if choice.kind == SpecialKind.LIBRARY else config.canteen_reward
        )
        return SpecialEffect(kind=choice.kind, resource_delta=reward)

    raise TypeError(f"Unhandled special choice: {choice!r}")
