"""
Path follower - Steers a car along a list of waypoints.
"""

from collections import deque
from pathlib import Path
from typing import List, Sequence
import logging
import re

from racetrack.car.car import Car
from racetrack.strategy.base import CAR_WON_STATS_TEXT, StrategyType
from racetrack.vector import PositionVector, Direction

logger = logging.getLogger(__name__)

_WAYPOINT_PATTERN = re.compile(r"^\s*\(X:\s*(-?\d+),\s*Y:\s*(-?\d+)\)\s*$")

INVALID_PATH_MESSAGE = (
    "The content of the Path Follower File did not match valid path vectors. e.g. (X:5, Y:-15)"
)


def load_path_file(path: str | Path) -> List[PositionVector]:
    """Read a waypoint file.

    One waypoint per line in the form "(X:5, Y:-15)", empty lines
    are skipped.

    Raises:
        OSError: If the file can't be read
        ValueError: If a line is not a waypoint
    """
    waypoints = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        match = _WAYPOINT_PATTERN.match(line)
        if match is None:
            raise ValueError(INVALID_PATH_MESSAGE)
        waypoints.append(PositionVector(int(match.group(1)), int(match.group(2))))
    return waypoints


def _anticipate(velocity: int) -> int:
    return velocity * 2 if abs(velocity) > 1 else velocity


class PathFollowerStrategy:
    """Greedy controller driving a car through waypoints in order.

    Each turn the car accelerates on each axis towards the next
    waypoint, corrected by its (anticipated) velocity. A waypoint
    is done once the car stands on it. With no waypoints left the
    car keeps its velocity.
    """

    strategy_type = StrategyType.PATH_FOLLOWER

    def __init__(self, waypoints: Sequence[PositionVector], car: Car):
        """Initialize follower.

        Args:
            waypoints: Cells to visit in order
            car: Car to steer (read only)
        """
        if car is None:
            raise TypeError("car must not be None")
        self._waypoints = deque(waypoints)
        self._car = car
        self._turns = 0

    @classmethod
    def from_file(cls, path: str | Path, car: Car) -> "PathFollowerStrategy":
        return cls(load_path_file(path), car)

    @property
    def waypoints(self) -> List[PositionVector]:
        """Waypoints not reached yet."""
        return list(self._waypoints)

    @property
    def turns(self) -> int:
        return self._turns

    def next_move(self) -> Direction:
        position = self._car.position
        if self._waypoints and self._waypoints[0] == position:
            self._waypoints.popleft()

        if not self._waypoints:
            return Direction.NONE

        self._turns += 1
        delta = self._waypoints[0] - position
        velocity = self._car.velocity
        anticipated = PositionVector(_anticipate(velocity.x), _anticipate(velocity.y))
        return Direction.from_vector(delta - anticipated)

    def turn_message(self, car: Car) -> str:
        if not self._waypoints:
            return f"Car {car.id} has no waypoints left."
        return f"Car {car.id} heads for waypoint {self._waypoints[0]}."

    def statistics(self) -> str:
        return CAR_WON_STATS_TEXT.format(turns=self._turns)
