"""
GameSession serialises all access to one shared GameState.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from language_monopoly.exceptions import InvariantViolation, StaleActionError
from language_monopoly.game import GameState
from language_monopoly.rules import Action, ActionOffer, ActionResult, apply_action, offer_actions
from language_monopoly.snapshot import serialize_snapshot

logger = logging.getLogger(__name__)


class GameSession:
    """
    Single arbiter for a game shared by several clients.

    Exactly one action is applied at a time. Clients that pass the
    `version` of the offer they acted on get a stale rejection when the
    state moved on in between.
    """

    def __init__(self, game: GameState):
        self.game = game
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        return self.game.version

    def offers(self, player_id: int, selected_space: Optional[int] = None) -> ActionOffer:
        with self._lock:
            return offer_actions(self.game, player_id, selected_space)

    def submit(self, action: Action, expected_version: Optional[int] = None) -> ActionResult:
        """Apply one action atomically."""
        with self._lock:
            if expected_version is not None and expected_version != self.game.version:
                logger.warning(
                    f"Stale {action!r}: offered at version {expected_version}, "
                    f"game is at {self.game.version}"
                )
                error = StaleActionError(
                    f"Action was offered at version {expected_version}, "
                    f"current version is {self.game.version}"
                )
                return ActionResult(
                    ok=False,
                    action_type=action.action_type,
                    version=self.game.version,
                    error=type(error).__name__,
                    reason=error.reason,
                    message=str(error),
                )
            try:
                return apply_action(self.game, action)
            except InvariantViolation:
                logger.exception(f"Invariant violated while applying {action!r}")
                raise

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return serialize_snapshot(self.game)
