"""
Pydantic models for the persisted game layout.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from language_monopoly.config import MAX_HOUSES
from language_monopoly.specials import SpecialKind


class PropertyStateModel(BaseModel):
    owner_id: Optional[int] = None
    houses: int = Field(default=0, ge=0, le=MAX_HOUSES)
    academy: bool = False

    @model_validator(mode="after")
    def academy_needs_full_houses(self) -> "PropertyStateModel":
        if self.academy and self.houses != MAX_HOUSES:
            raise ValueError(f"academy requires {MAX_HOUSES} houses")
        return self


class PlayerStateModel(BaseModel):
    player_id: int
    name: str
    resources: int
    position: int
    upgrade_credits: int = Field(default=0, ge=0)
    properties: List[int] = Field(default_factory=list)


class PendingPurchaseModel(BaseModel):
    space_id: int
    player_id: int


class PendingSpecialModel(BaseModel):
    kind: SpecialKind
    player_id: int


class TurnModel(BaseModel):
    current_player_index: int = Field(default=0, ge=0)
    turn_number: int = Field(default=0, ge=0)
    has_rolled: bool = False
    last_dice_roll: Optional[Tuple[int, int]] = None


class GameSnapshot(BaseModel):
    """Everything needed to restore a game's rule state."""

    version: int = Field(default=0, ge=0)
    property_states: Dict[int, PropertyStateModel]
    players: List[PlayerStateModel] = Field(min_length=1)
    pending_purchase: Optional[PendingPurchaseModel] = None
    pending_special: Optional[PendingSpecialModel] = None
    turn: TurnModel = Field(default_factory=TurnModel)
