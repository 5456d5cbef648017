"""
Car - A single racer on the track grid.

Holds:
- Identifier character
- Position and velocity vectors
- Race status (active, penalized, crashed)
"""

from enum import Enum
from typing import Dict, Any

from racetrack.vector import PositionVector, Direction


class CarStatus(Enum):
    """Race status of a car.

    CRASHED is terminal. PENALIZED is entered when the finish line
    is crossed the wrong way and left by crossing it correctly.
    """
    ACTIVE = "active"
    PENALIZED = "penalized"
    CRASHED = "crashed"


class Car:
    """Car racing on the grid.

    The velocity is changed by accelerating in one of the 9
    directions; a move adds the velocity to the position. Once
    crashed, the car is frozen at its crash position.

    Usage:
        car = Car("a", PositionVector(3, 4))
        car.accelerate(Direction.RIGHT)
        car.move()
    """

    def __init__(self, car_id: str, start_position: PositionVector):
        """Initialize car at its starting position.

        Args:
            car_id: Single printable character identifying the car
            start_position: Starting cell on the grid
        """
        if car_id is None or start_position is None:
            raise TypeError("car_id and start_position must not be None")
        if len(car_id) != 1 or not car_id.isprintable():
            raise ValueError(f"Car id must be a single printable character, got {car_id!r}")

        self._id = car_id
        self._position = start_position
        self._velocity = PositionVector(0, 0)
        self._status = CarStatus.ACTIVE

    @property
    def id(self) -> str:
        return self._id

    @property
    def position(self) -> PositionVector:
        """Current position on the grid."""
        return self._position

    @property
    def velocity(self) -> PositionVector:
        """Current velocity vector."""
        return self._velocity

    @property
    def status(self) -> CarStatus:
        return self._status

    @property
    def is_crashed(self) -> bool:
        return self._status is CarStatus.CRASHED

    @property
    def has_penalty(self) -> bool:
        return self._status is CarStatus.PENALIZED

    @property
    def next_position(self) -> PositionVector:
        """Position after the next move at the current velocity."""
        return self._position + self._velocity

    def accelerate(self, acceleration: Direction) -> None:
        """Add an acceleration direction to the velocity.

        Velocity is not clamped. Crashed cars ignore acceleration.

        Args:
            acceleration: One of the 9 acceleration directions
        """
        if acceleration is None:
            raise TypeError("acceleration must not be None")
        if self.is_crashed:
            return
        self._velocity = self._velocity + acceleration.vector

    def move(self) -> None:
        """Move to the next position at the current velocity."""
        if self.is_crashed:
            return
        self._position = self.next_position

    def move_to(self, position: PositionVector) -> None:
        """Place the car on a given cell (e.g. where it crossed the finish)."""
        if position is None:
            raise TypeError("position must not be None")
        if self.is_crashed:
            return
        self._position = position

    def crash(self, crash_position: PositionVector) -> None:
        """Mark the car as crashed at the given position.

        Args:
            crash_position: Cell where the car crashed
        """
        if crash_position is None:
            raise TypeError("crash_position must not be None")
        if self.is_crashed:
            return
        self._position = crash_position
        self._status = CarStatus.CRASHED

    def penalize(self) -> None:
        """Set the wrong-way finish penalty."""
        if self._status is CarStatus.ACTIVE:
            self._status = CarStatus.PENALIZED

    def clear_penalty(self) -> None:
        """Clear the wrong-way finish penalty."""
        if self._status is CarStatus.PENALIZED:
            self._status = CarStatus.ACTIVE

    def get_state(self) -> Dict[str, Any]:
        """Get car state for serialization."""
        return {
            "id": self._id,
            "position": (self._position.x, self._position.y),
            "velocity": (self._velocity.x, self._velocity.y),
            "status": self._status.value,
        }

    def __repr__(self) -> str:
        return (
            f"Car(id={self._id!r}, position={self._position}, "
            f"velocity={self._velocity}, status={self._status.value})"
        )
