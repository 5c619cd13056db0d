"""
Dice collaborator.

The engine never rolls on its own: callers roll here and hand the outcome
to `apply_roll`, which keeps the rules deterministic under test.
"""

import random
from typing import Optional, Tuple


class Dice:
    """A pair of six-sided dice backed by a seedable RNG."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def roll(self) -> Tuple[int, int]:
        """Roll two dice."""
        return self.rng.randint(1, 6), self.rng.randint(1, 6)


def validate_dice(dice: Tuple[int, int]) -> Tuple[int, int]:
    """Check a dice outcome handed in by a caller."""
    if not isinstance(dice, (tuple, list)) or len(dice) != 2 or not all(isinstance(d, int) and 1 <= d <= 6 for d in dice):
        raise ValueError(f"Invalid dice outcome: {dice!r}")
    return dice[0], dice[1]
