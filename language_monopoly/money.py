"""
Resource events and the game event log.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    PASS_START = "pass_start"
    LAND = "land"

    PURCHASE = "purchase"
    PURCHASE_SKIPPED = "purchase_skipped"
    RENT_PAYMENT = "rent_payment"

    BUILD_HOUSE = "build_house"
    UPGRADE_ACADEMY = "upgrade_academy"
    CREDIT_CONSUMED = "credit_consumed"

    SPECIAL_PENDING = "special_pending"
    SPECIAL_RESOLVED = "special_resolved"
    CARD_DRAW = "card_draw"
    CARD_EFFECT = "card_effect"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        self.events.append(GameEvent(event_type, player_id, details))

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()
