"""
Language Monopoly Rules Engine

Rule gating and special-event resolution for a turn-based, language-themed
property-trading board game.
"""

from .board import Board
from .config import GameConfig
from .game import ActionType, GameState, create_game
from .player import Player, PlayerState, PropertyState
from .rules import (
    Action,
    ActionOffer,
    ActionResult,
    apply_action,
    apply_build,
    apply_consume_credit,
    apply_end_turn,
    apply_purchase,
    apply_roll,
    apply_skip,
    apply_special_resolution,
    apply_upgrade,
    get_legal_actions,
    offer_actions,
)
from .service import GameSession
from .specials import ChoiceOption, OratoryChoice, ResourceOrCardChoice, SpecialKind

__all__ = [
    "Board",
    "GameConfig",
    "ActionType",
    "GameState",
    "create_game",
    "Player",
    "PlayerState",
    "PropertyState",
    "Action",
    "ActionOffer",
    "ActionResult",
    "apply_action",
    "apply_build",
    "apply_consume_credit",
    "apply_end_turn",
    "apply_purchase",
    "apply_roll",
    "apply_skip",
    "apply_special_resolution",
    "apply_upgrade",
    "get_legal_actions",
    "offer_actions",
    "GameSession",
    "ChoiceOption",
    "OratoryChoice",
    "ResourceOrCardChoice",
    "SpecialKind",
]
