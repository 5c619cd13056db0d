"""
Player state and property state.
"""

from dataclasses import dataclass
from typing import Optional, Set


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(
        self,
        player_id: int,
        name: str,
        starting_resources: int,
        position: int = 0,
        upgrade_credits: int = 0,
    ):
        self.player_id = player_id
        self.name = name
        self.resources = starting_resources
        self.position = position
        self.upgrade_credits = upgrade_credits
        self.properties: Set[int] = set()

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"resources={self.resources}, position={self.position}, "
            f"credits={self.upgrade_credits})"
        )


@dataclass
class PropertyState:
    """Tracks ownership and building state of an ownable space."""

    owner_id: Optional[int] = None
    houses: int = 0
    academy: bool = False

    def is_owned(self) -> bool:
        """Check if property is owned by any player."""
        return self.owner_id is not None


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}')"
