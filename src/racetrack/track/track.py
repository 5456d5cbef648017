"""
Track - Racetrack grid with the cars racing on it.

Contains:
- Rectangular grid of space types
- Ordered list of cars
- Track text loader and text representation

The track text is a rectangular block of characters. Leading
empty lines are skipped and the track ends at the first empty
line following a non-empty one. Characters map to space types
('#', ' ', '^', 'v', '<', '>'); any other character is the id
and starting cell of a car.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple
import logging
import numpy as np

from racetrack.car.car import Car
from racetrack.track.space import SpaceType
from racetrack.vector import PositionVector, Direction

logger = logging.getLogger(__name__)

# Grid cells are stored as indices into this list
_SPACE_TYPES: List[SpaceType] = list(SpaceType)
_SPACE_CODES = {space_type: code for code, space_type in enumerate(_SPACE_TYPES)}
_WALL_CODE = _SPACE_CODES[SpaceType.WALL]


class InvalidTrackFormatError(ValueError):
    """Raised when track data does not describe a valid track."""


@dataclass
class TrackConfig:
    """Track loading configuration."""
    min_cars: int = 2
    max_cars: int = 9
    crash_indicator: str = "X"


class Track:
    """Racetrack grid.

    A grid of width x height spaces plus the cars racing on it.
    Positions outside the grid are walls.

    Usage:
        track = Track.from_file("tracks/oval.txt")
        track.get_space_type(PositionVector(3, 2))
        print(track)
    """

    def __init__(self, lines: Sequence[str], config: TrackConfig | None = None):
        """Build a track from its text lines.

        Args:
            lines: Track rows, already stripped of surrounding empty lines
            config: Track configuration. Uses defaults if None.

        Raises:
            InvalidTrackFormatError: If the lines don't form a valid track
        """
        self.config = config or TrackConfig()

        if not lines:
            raise InvalidTrackFormatError("Track contains no track lines")

        width = len(lines[0])
        for row, line in enumerate(lines):
            if len(line) != width:
                raise InvalidTrackFormatError(
                    f"Track line {row} has length {len(line)}, expected {width}"
                )

        self._width = width
        self._height = len(lines)
        self._grid = np.full((self._height, self._width), _WALL_CODE, dtype=np.int8)
        self._cars: List[Car] = []

        seen_ids = set()
        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                space_type = SpaceType.for_char(char)
                if space_type is None:
                    if not char.isprintable():
                        raise InvalidTrackFormatError(
                            f"Invalid character {char!r} at ({x}, {y})"
                        )
                    if char in seen_ids:
                        raise InvalidTrackFormatError(f"Duplicate car id {char!r}")
                    seen_ids.add(char)
                    self._cars.append(Car(char, PositionVector(x, y)))
                    space_type = SpaceType.TRACK
                self._grid[y, x] = _SPACE_CODES[space_type]

        if len(self._cars) < self.config.min_cars:
            raise InvalidTrackFormatError(
                f"Track contains {len(self._cars)} cars, at least {self.config.min_cars} required"
            )
        if len(self._cars) > self.config.max_cars:
            raise InvalidTrackFormatError(
                f"Track contains {len(self._cars)} cars, at most {self.config.max_cars} allowed"
            )

        self._near_wall = self._compute_near_wall()

        logger.debug(
            "Loaded %dx%d track with cars %s",
            self._width, self._height, "".join(car.id for car in self._cars),
        )

    @classmethod
    def from_text(cls, text: str, config: TrackConfig | None = None) -> "Track":
        """Parse a track from its text representation.

        Args:
            text: Track text
            config: Track configuration

        Returns:
            Loaded track
        """
        lines: List[str] = []
        for line in text.splitlines():
            if not line:
                if lines:
                    break
                continue
            lines.append(line)
        return cls(lines, config)

    @classmethod
    def from_file(cls, path: str | Path, config: TrackConfig | None = None) -> "Track":
        """Load a track from a UTF-8 text file.

        Raises:
            OSError: If the file can't be read
            InvalidTrackFormatError: If the file contains invalid track data
        """
        path = Path(path)
        logger.info("Loading track from %s", path)
        return cls.from_text(path.read_text(encoding="utf-8"), config)

    @property
    def width(self) -> int:
        """Number of grid columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of grid rows."""
        return self._height

    @property
    def cars(self) -> List[Car]:
        """Cars in track order."""
        return list(self._cars)

    @property
    def car_count(self) -> int:
        return len(self._cars)

    @property
    def grid(self) -> np.ndarray:
        """Read-only (height, width) array of space type codes."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def get_car(self, car_index: int) -> Car:
        """Get car by zero-based index.

        Raises:
            IndexError: If the index is out of range
        """
        if not 0 <= car_index < len(self._cars):
            raise IndexError(f"Car index {car_index} out of range [0, {len(self._cars)})")
        return self._cars[car_index]

    def in_bounds(self, position: PositionVector) -> bool:
        return 0 <= position.x < self._width and 0 <= position.y < self._height

    def get_space_type(self, position: PositionVector) -> SpaceType:
        """Get the space type at a position.

        Positions outside the grid are WALL.
        """
        if position is None:
            raise TypeError("position must not be None")
        if not self.in_bounds(position):
            return SpaceType.WALL
        return _SPACE_TYPES[self._grid[position.y, position.x]]

    def is_near_wall(self, position: PositionVector) -> bool:
        """Check whether any of the 8 neighbors of a position is a wall."""
        if not self.in_bounds(position):
            return True
        return bool(self._near_wall[position.y, position.x])

    def _compute_near_wall(self) -> np.ndarray:
        """Mask of cells with at least one wall among their 8 neighbors."""
        # Pad with walls so cells on the border see the outside as wall
        walls = np.pad(self._grid == _WALL_CODE, 1, constant_values=True)
        near = np.zeros((self._height, self._width), dtype=bool)
        for direction in Direction.moving_directions():
            dx, dy = direction.vector.x, direction.vector.y
            near |= walls[1 + dy:1 + dy + self._height, 1 + dx:1 + dx + self._width]
        return near

    def get_cars_at(self, position: PositionVector) -> List[Car]:
        """All cars (crashed or not) occupying a position."""
        return [car for car in self._cars if car.position == position]

    def finish_positions(self) -> List[PositionVector]:
        """All finish line cells."""
        finish_codes = [_SPACE_CODES[space_type] for space_type in SpaceType.finish_types()]
        ys, xs = np.nonzero(np.isin(self._grid, finish_codes))
        return [PositionVector(int(x), int(y)) for y, x in zip(ys, xs)]

    def get_char_representation_at_position(self, row: int, col: int) -> str:
        """Character for a cell including cars.

        Args:
            row: Row (y) of the cell
            col: Column (x) of the cell

        Returns:
            Id of an active car on the cell, the crash indicator if only
            a crashed car is there, otherwise the space character
        """
        position = PositionVector(col, row)
        cars = self.get_cars_at(position)
        for car in cars:
            if not car.is_crashed:
                return car.id
        if cars:
            return self.config.crash_indicator
        return self.get_space_type(position).char

    def get_state(self) -> dict:
        """Get track state for serialization."""
        return {
            "width": self._width,
            "height": self._height,
            "cars": [car.get_state() for car in self._cars],
            "finish_cells": len(self.finish_positions()),
        }

    def __str__(self) -> str:
        return "\n".join(
            "".join(
                self.get_char_representation_at_position(row, col)
                for col in range(self._width)
            )
            for row in range(self._height)
        )
