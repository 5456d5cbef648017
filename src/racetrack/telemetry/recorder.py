"""
Turn recorder - Records every executed turn of a race.

Provides:
- Per-turn records (acceleration, move, outcome, penalty)
- Per-car trajectories as numpy arrays
- Race statistics
"""

from dataclasses import dataclass
from typing import Dict, List, Any, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from racetrack.simulation.simulator import TurnResult


@dataclass(frozen=True)
class TurnRecord:
    """Flat record of one executed turn."""
    turn: int
    car_index: int
    car_id: str
    acceleration: str
    start_x: int
    start_y: int
    end_x: int
    end_y: int
    velocity_x: int
    velocity_y: int
    outcome: str
    has_penalty: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "car_index": self.car_index,
            "car_id": self.car_id,
            "acceleration": self.acceleration,
            "start_x": self.start_x,
            "start_y": self.start_y,
            "end_x": self.end_x,
            "end_y": self.end_y,
            "velocity_x": self.velocity_x,
            "velocity_y": self.velocity_y,
            "outcome": self.outcome,
            "has_penalty": self.has_penalty,
        }


class TurnRecorder:
    """Records turn results during a race.

    Skipped turns are not recorded since they change nothing.

    Usage:
        recorder = TurnRecorder()
        recorder.record(sim.do_car_turn(Direction.RIGHT))
        path = recorder.get_positions(0)
    """

    def __init__(self):
        self._records: List[TurnRecord] = []

    @property
    def records(self) -> List[TurnRecord]:
        return list(self._records)

    @property
    def count(self) -> int:
        return len(self._records)

    def record(self, result: "TurnResult") -> bool:
        """Record a turn result.

        Args:
            result: Result returned by the simulator

        Returns:
            True if the turn was recorded
        """
        from racetrack.simulation.simulator import TurnOutcome

        if result.outcome is TurnOutcome.SKIPPED:
            return False

        self._records.append(TurnRecord(
            turn=result.turn,
            car_index=result.car_index,
            car_id=result.car_id,
            acceleration=result.acceleration.name,
            start_x=result.start.x,
            start_y=result.start.y,
            end_x=result.end.x,
            end_y=result.end.y,
            velocity_x=result.velocity.x,
            velocity_y=result.velocity.y,
            outcome=result.outcome.value,
            has_penalty=result.has_penalty,
        ))
        return True

    def get_car_records(self, car_index: int) -> List[TurnRecord]:
        return [record for record in self._records if record.car_index == car_index]

    def get_positions(self, car_index: int) -> np.ndarray:
        """Trajectory of a car.

        Args:
            car_index: Zero-based car index

        Returns:
            (n + 1, 2) int array: start of the first recorded turn
            followed by the end of every turn. Empty (0, 2) array if
            the car never moved.
        """
        records = self.get_car_records(car_index)
        if not records:
            return np.empty((0, 2), dtype=int)

        points = [(records[0].start_x, records[0].start_y)]
        points.extend((record.end_x, record.end_y) for record in records)
        return np.array(points, dtype=int)

    def get_turn_counts(self) -> Dict[str, int]:
        """Number of recorded turns per car id."""
        counts: Dict[str, int] = {}
        for record in self._records:
            counts[record.car_id] = counts.get(record.car_id, 0) + 1
        return counts

    def get_distance_travelled(self, car_index: int) -> float:
        """Euclidean distance covered by a car over all its turns."""
        positions = self.get_positions(car_index)
        if len(positions) < 2:
            return 0.0
        steps = np.diff(positions, axis=0)
        return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))

    def get_summary(self) -> Dict[str, Any]:
        """Race statistics for logging and export."""
        outcomes: Dict[str, int] = {}
        for record in self._records:
            outcomes[record.outcome] = outcomes.get(record.outcome, 0) + 1

        max_speed = 0.0
        if self._records:
            velocities = np.array(
                [(record.velocity_x, record.velocity_y) for record in self._records],
                dtype=float,
            )
            max_speed = float(np.max(np.hypot(velocities[:, 0], velocities[:, 1])))

        return {
            "total_turns": len(self._records),
            "turns_per_car": self.get_turn_counts(),
            "outcomes": outcomes,
            "max_speed": max_speed,
        }

    def clear(self) -> None:
        """Clear all recorded turns."""
        self._records.clear()
