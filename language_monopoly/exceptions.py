"""
Custom exception hierarchy for the Language Monopoly engine.

Rejections raised by the engine are recoverable: the gateway turns them
into an ActionResult and the caller re-offers the current valid actions.
InvariantViolation is the exception to that rule and always propagates.
"""

from typing import Optional


class MonopolyError(Exception):
    """Base exception for all game-related errors."""


class ActionRejected(MonopolyError):
    """An attempted action is not legal in the current state."""

    reason: str = "rejected"

    def __init__(self, message: str = "", reason: Optional[str] = None):
        if reason is not None:
            self.reason = reason
        super().__init__(message or self.reason)


class IneligibleAction(ActionRejected):
    """Build, upgrade, credit or purchase fails the eligibility gate."""

    reason = "ineligible"


class NoPendingEvent(ActionRejected):
    """No matching pending purchase or special event exists."""

    reason = "no_pending_event"


class WrongResolver(ActionRejected):
    """Player is not the designated resolver of the pending event."""

    reason = "wrong_resolver"


class MismatchedChoiceKind(ActionRejected):
    """Special choice kind differs from the pending special kind."""

    reason = "mismatched_choice_kind"


class InvalidActionError(ActionRejected):
    """Action violates turn flow (wrong player, already rolled, ...)."""

    reason = "invalid_action"


class StaleActionError(ActionRejected):
    """Action was computed against an older version of the game state."""

    reason = "stale_action"


class InvariantViolation(MonopolyError):
    """Game state is internally inconsistent. Signals a programming error."""


class UnknownSpaceError(MonopolyError, KeyError):
    """Board has no space with the requested id."""


class SnapshotError(MonopolyError):
    """Saved game data failed validation."""
