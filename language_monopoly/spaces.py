"""
Board space definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SpaceType(Enum):
    """Types of spaces on the board."""

    START = "start"
    PROPERTY = "property"
    LIBRARY = "library"
    CANTEEN = "canteen"
    ORATORY = "oratory"
    REST = "rest"


@dataclass(frozen=True)
class BoardSpace:
    """An immutable board space. Ownable spaces carry a cost."""

    id: int
    name: str
    space_type: SpaceType
    description: str = ""
    cost: Optional[int] = None
    base_rent: Optional[int] = None
    color: Optional[str] = None

    @property
    def is_ownable(self) -> bool:
        return self.space_type == SpaceType.PROPERTY and self.cost is not None

    def __repr__(self) -> str:
        return f"BoardSpace(id={self.id}, name='{self.name}')"


def property_space(
    space_id: int,
    name: str,
    cost: int,
    base_rent: int,
    color: str,
    description: str = "",
) -> BoardSpace:
    """Shorthand for an ownable property space."""
    return BoardSpace(space_id, name, SpaceType.PROPERTY, description, cost, base_rent, color)
