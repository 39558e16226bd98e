"""Dice rolling for rule-table generation."""

from __future__ import annotations

import random
from typing import Protocol

from ..constants import DICE_PER_ROLL, DIE_SIDES


class DiceRoller(Protocol):
    """Random source consumed by the generators."""

    def basic_roll(self) -> int:
        """Roll the standard dice pool (3d6, 3–18)."""
        ...

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        ...


class Dice:
    """Seeded dice. Not safe to share between threads; give each worker its own."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed if seed is not None else random.randint(0, 2**32)
        self.rng = random.Random(self.seed)

    def roll(self, count: int = DICE_PER_ROLL, sides: int = DIE_SIDES) -> int:
        return sum(self.rng.randint(1, sides) for _ in range(count))

    def basic_roll(self) -> int:
        return self.roll()

    def random(self) -> float:
        return self.rng.random()
