"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from language_monopoly.settings import GameSettings


# Houses a space can hold before the academy upgrade
MAX_HOUSES = 4

# Rent multipliers over base rent, indexed by house count
HOUSE_RENT_MULTIPLIERS = (1, 5, 15, 45, 80)
ACADEMY_RENT_MULTIPLIER = 125


@dataclass
class GameConfig:
    """Configuration for a Language Monopoly game."""

    starting_resources: int = 1500
    start_salary: int = 200

    build_cost: int = 50
    academy_cost: int = 100
    starting_upgrade_credits: int = 0

    library_reward: int = 50
    canteen_reward: int = 100
    oratory_reward: int = 50
    oratory_penalty: int = 30

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.starting_upgrade_credits < 0:
            raise ValueError("starting_upgrade_credits cannot be negative")

    @classmethod
    def from_settings(cls, settings: "GameSettings") -> "GameConfig":
        """Build an engine config from environment settings."""
        return cls(
            starting_resources=settings.starting_resources,
            start_salary=settings.start_salary,
            build_cost=settings.build_cost,
            academy_cost=settings.academy_cost,
            starting_upgrade_credits=settings.starting_upgrade_credits,
            library_reward=settings.library_reward,
            canteen_reward=settings.canteen_reward,
            oratory_reward=settings.oratory_reward,
            oratory_penalty=settings.oratory_penalty,
            seed=settings.seed,
        )
