"""World size and type vocabulary produced by the classification step."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PlanetSize(enum.Enum):
    """Size classes of a world."""

    TINY = "tiny"
    SMALL = "small"
    STANDARD = "standard"
    LARGE = "large"
    SPECIAL = "special"  # Asteroid belts and gas giants


class PlanetType(enum.Enum):
    """Broad world types."""

    HADEAN = "hadean"
    ROCK = "rock"
    SULFUR = "sulfur"
    CHTHONIAN = "chthonian"
    ASTEROID_BELT = "asteroid_belt"
    ICE = "ice"
    OCEAN = "ocean"
    AMMONIA = "ammonia"
    GARDEN = "garden"
    GREENHOUSE = "greenhouse"
    GAS_GIANT = "gas_giant"


@dataclass(frozen=True)
class WorldType:
    """The (size, type) pair a world was classified as."""

    size: PlanetSize
    type: PlanetType

    @property
    def key(self) -> tuple[PlanetSize, PlanetType]:
        return (self.size, self.type)

    def __str__(self) -> str:
        return f"{self.size.value} {self.type.value}"
