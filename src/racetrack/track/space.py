"""
Space types - Classification of a single track grid cell.
"""

from enum import Enum
from typing import FrozenSet, Optional


class SpaceType(Enum):
    """Types of grid spaces.

    The value is the character used in track files and in the
    text representation of a track. Finish types encode the
    direction in which the line has to be crossed.
    """
    WALL = "#"
    TRACK = " "
    FINISH_UP = "^"
    FINISH_DOWN = "v"
    FINISH_LEFT = "<"
    FINISH_RIGHT = ">"

    @property
    def char(self) -> str:
        return self.value

    @property
    def is_finish(self) -> bool:
        return self in _FINISH_TYPES

    @classmethod
    def for_char(cls, char: str) -> Optional["SpaceType"]:
        """Get the space type for a track character.

        Returns:
            Matching space type, or None for any other character
        """
        for space_type in cls:
            if space_type.value == char:
                return space_type
        return None

    @classmethod
    def finish_types(cls) -> FrozenSet["SpaceType"]:
        return _FINISH_TYPES


_FINISH_TYPES = frozenset({
    SpaceType.FINISH_UP,
    SpaceType.FINISH_DOWN,
    SpaceType.FINISH_LEFT,
    SpaceType.FINISH_RIGHT,
})
