"""
Grid vectors - Positions, velocities and acceleration directions.

Defines:
- PositionVector: immutable integer 2D vector
- Direction: the 9 possible acceleration vectors

The grid origin is the top left cell; x grows to the right and
y grows downwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List
import numpy as np


@dataclass(frozen=True)
class PositionVector:
    """Immutable 2D integer vector.

    Used both for absolute grid positions and for velocity /
    acceleration deltas.
    """
    x: int = 0
    y: int = 0

    def __add__(self, other: "PositionVector") -> "PositionVector":
        return PositionVector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "PositionVector") -> "PositionVector":
        return PositionVector(self.x - other.x, self.y - other.y)

    def dot(self, other: "PositionVector") -> int:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def __str__(self) -> str:
        return f"(X:{self.x}, Y:{self.y})"


class Direction(Enum):
    """Acceleration direction on the grid.

    Each member carries a vector with components in {-1, 0, 1}.
    NONE keeps the current velocity.
    """
    DOWN_LEFT = PositionVector(-1, 1)
    DOWN = PositionVector(0, 1)
    DOWN_RIGHT = PositionVector(1, 1)
    LEFT = PositionVector(-1, 0)
    NONE = PositionVector(0, 0)
    RIGHT = PositionVector(1, 0)
    UP_LEFT = PositionVector(-1, -1)
    UP = PositionVector(0, -1)
    UP_RIGHT = PositionVector(1, -1)

    @property
    def vector(self) -> PositionVector:
        return self.value

    @classmethod
    def from_vector(cls, vector: PositionVector) -> "Direction":
        """Get the direction matching the sign of each vector component.

        Args:
            vector: Any integer vector

        Returns:
            Direction whose components are the signs of vector's components
        """
        clamped = PositionVector(int(np.sign(vector.x)), int(np.sign(vector.y)))
        return cls(clamped)

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Parse a direction from its member name (e.g. "UP_RIGHT").

        Raises:
            ValueError: If name is not a direction
        """
        try:
            return cls[name.strip()]
        except KeyError:
            raise ValueError(f"Invalid direction: {name!r}") from None

    @classmethod
    def moving_directions(cls) -> List["Direction"]:
        """All directions which change the velocity (everything but NONE)."""
        return [direction for direction in cls if direction is not cls.NONE]
