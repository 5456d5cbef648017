"""
World - Race state container.

Manages:
- Track reference (grid and cars)
- Index of the car whose turn it is
- Winner index
- Turn counting
"""

from typing import List

from racetrack.car.car import Car
from racetrack.track.track import Track

# Winner index while the race is still undecided
NO_WINNER = -1


class World:
    """Race state for one simulation run.

    The winner index is NO_WINNER until a car wins; once set it
    is never changed again.
    """

    def __init__(self, track: Track):
        """Initialize world.

        Args:
            track: Loaded race track
        """
        if track is None:
            raise TypeError("track must not be None")

        self.track = track
        self._current_car_index: int = 0
        self._winner_index: int = NO_WINNER
        self._turn: int = 0

    @property
    def car_count(self) -> int:
        return self.track.car_count

    @property
    def current_car_index(self) -> int:
        """Zero-based index of the car whose turn it is."""
        return self._current_car_index

    @property
    def current_car(self) -> Car:
        return self.track.get_car(self._current_car_index)

    @property
    def winner_index(self) -> int:
        return self._winner_index

    @property
    def has_winner(self) -> bool:
        return self._winner_index != NO_WINNER

    @property
    def turn(self) -> int:
        """Number of turns executed so far."""
        return self._turn

    @property
    def active_car_indices(self) -> List[int]:
        """Indices of all cars which have not crashed."""
        return [index for index, car in enumerate(self.track.cars) if not car.is_crashed]

    def set_current_car(self, car_index: int) -> None:
        self.track.get_car(car_index)  # validates the index
        self._current_car_index = car_index

    def declare_winner(self, car_index: int) -> None:
        """Set the winner. Ignored if a winner already exists."""
        self.track.get_car(car_index)
        if self.has_winner:
            return
        self._winner_index = car_index

    def advance_turn(self) -> int:
        self._turn += 1
        return self._turn

    def get_state(self) -> dict:
        """Get world state for serialization."""
        return {
            "turn": self._turn,
            "current_car_index": self._current_car_index,
            "winner_index": self._winner_index,
            "active_cars": len(self.active_car_indices),
            "track": self.track.get_state(),
        }
