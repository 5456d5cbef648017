"""
Simulator - Turn engine and race loop.

Provides:
- Turn execution for the current car (acceleration, collisions,
  finish line rules)
- Rotation between cars that are still racing
- Elimination based winner detection
- Race loop driven by the cars' move strategies
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING
import logging

from racetrack.car.car import Car
from racetrack.track.space import SpaceType
from racetrack.track.track import Track
from racetrack.vector import PositionVector, Direction
from racetrack.simulation.physics import (
    calculate_path,
    is_finish_line_crossed_correctly,
    is_finish_line_crossing_penalised,
)
from racetrack.simulation.world import World, NO_WINNER
from racetrack.telemetry.recorder import TurnRecorder

if TYPE_CHECKING:
    from racetrack.strategy.base import MoveStrategy

logger = logging.getLogger(__name__)


class TrackInvariantError(RuntimeError):
    """Raised when a turn meets a grid state that can't occur on a valid track."""


class TurnOutcome(Enum):
    """How a single car turn ended."""
    MOVED = "moved"        # Full move to the next position
    CRASHED = "crashed"    # Hit a wall or another car
    WON = "won"            # Crossed the finish line correctly
    SKIPPED = "skipped"    # Race decided or car already crashed


@dataclass(frozen=True)
class TurnResult:
    """Result of one car turn."""
    turn: int
    car_index: int
    car_id: str
    acceleration: Direction
    start: PositionVector
    end: PositionVector
    velocity: PositionVector
    outcome: TurnOutcome
    penalty_set: bool = False
    penalty_cleared: bool = False
    has_penalty: bool = False


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Race loop limit when run() gets no explicit limit
    max_turns: int = 1000

    # Record every turn into the telemetry recorder
    enable_telemetry: bool = True


class Simulator:
    """Turn based race simulator.

    Owns the race state and executes one turn at a time for the
    current car. The calling code decides when to rotate to the
    next car, or uses run() to let the move strategies race.

    Usage:
        sim = Simulator(Track.from_file("tracks/oval.txt"))
        sim.set_car_move_strategy(0, PathFinderStrategy(sim.track, sim.track.get_car(0)))
        sim.set_car_move_strategy(1, DoNotMoveStrategy())
        winner = sim.run()
    """

    def __init__(self, track: Track, config: SimulatorConfig | None = None):
        """Initialize simulator.

        Args:
            track: Loaded race track
            config: Simulator configuration. Uses defaults if None.
        """
        self.config = config or SimulatorConfig()
        self.world = World(track)
        self.recorder = TurnRecorder()

        self._strategies: Dict[int, "MoveStrategy"] = {}

    @property
    def track(self) -> Track:
        return self.world.track

    @property
    def car_count(self) -> int:
        """Number of cars."""
        return self.world.car_count

    @property
    def current_car_index(self) -> int:
        """Zero-based index of the car whose turn it is."""
        return self.world.current_car_index

    def get_car_id(self, car_index: int) -> str:
        return self.track.get_car(car_index).id

    def get_car_position(self, car_index: int) -> PositionVector:
        return self.track.get_car(car_index).position

    def get_car_velocity(self, car_index: int) -> PositionVector:
        return self.track.get_car(car_index).velocity

    def set_car_move_strategy(self, car_index: int, strategy: "MoveStrategy") -> None:
        """Associate a move strategy with a car.

        Raises:
            IndexError: If the car index is out of range
            TypeError: If strategy is None
        """
        self.track.get_car(car_index)
        if strategy is None:
            raise TypeError("strategy must not be None")
        self._strategies[car_index] = strategy

    def get_car_move_strategy(self, car_index: int) -> Optional["MoveStrategy"]:
        self.track.get_car(car_index)
        return self._strategies.get(car_index)

    def get_winner(self) -> int:
        """Index of the winning car, or NO_WINNER while the race runs."""
        return self.world.winner_index

    def do_car_turn(self, acceleration: Direction) -> TurnResult:
        """Execute the turn of the current car.

        Steps:
        1. Accelerate the car
        2. Calculate the cells between current and next position
        3. Check each cell:
           - WALL: crash, stop
           - TRACK: crash and stop if another car is there
           - FINISH_*: crash and stop if another car is there;
             crossing the wrong way sets the penalty, crossing the
             right way clears it, or wins if there is none
        4. Crashed or winning cars stay on the stopping cell, all
           others move to the next position
        5. After a crash, a single remaining car wins

        Does nothing if the race is decided or the current car is
        already crashed.

        Args:
            acceleration: Acceleration direction for this turn

        Returns:
            Turn result

        Raises:
            TrackInvariantError: If a cell has an unknown space type
        """
        if acceleration is None:
            raise TypeError("acceleration must not be None")

        car_index = self.world.current_car_index
        car = self.world.current_car

        if self.world.has_winner or car.is_crashed:
            return TurnResult(
                turn=self.world.turn,
                car_index=car_index,
                car_id=car.id,
                acceleration=acceleration,
                start=car.position,
                end=car.position,
                velocity=car.velocity,
                outcome=TurnOutcome.SKIPPED,
                has_penalty=car.has_penalty,
            )

        turn = self.world.advance_turn()
        start = car.position
        car.accelerate(acceleration)
        velocity = car.velocity

        outcome, stop_position, penalty_set, penalty_cleared = self._walk_path(
            car, calculate_path(start, car.next_position)[1:]
        )

        if outcome is TurnOutcome.CRASHED:
            car.crash(stop_position)
            logger.info("Car %s crashed at %s in turn %d", car.id, stop_position, turn)
        elif outcome is TurnOutcome.WON:
            car.move_to(stop_position)
            self.world.declare_winner(car_index)
            logger.info("Car %s crossed the finish line at %s and wins", car.id, stop_position)
        else:
            car.move()

        logger.debug(
            "Turn %d: car %s accelerated %s, %s -> %s, velocity %s",
            turn, car.id, acceleration.name, start, car.position, velocity,
        )

        result = TurnResult(
            turn=turn,
            car_index=car_index,
            car_id=car.id,
            acceleration=acceleration,
            start=start,
            end=car.position,
            velocity=velocity,
            outcome=outcome,
            penalty_set=penalty_set,
            penalty_cleared=penalty_cleared,
            has_penalty=car.has_penalty,
        )

        if outcome is TurnOutcome.CRASHED:
            self._check_last_car_standing()

        if self.config.enable_telemetry:
            self.recorder.record(result)

        return result

    def _walk_path(
        self,
        car: Car,
        path: List[PositionVector],
    ) -> tuple[TurnOutcome, Optional[PositionVector], bool, bool]:
        """Evaluate the cells a car passes during its move.

        Returns:
            Tuple of (outcome, stopping cell or None, penalty set,
            penalty cleared)
        """
        penalty_set = False
        penalty_cleared = False

        for position in path:
            space_type = self.track.get_space_type(position)

            if space_type is SpaceType.WALL:
                return TurnOutcome.CRASHED, position, penalty_set, penalty_cleared

            if self._is_occupied_by_other(car, position):
                return TurnOutcome.CRASHED, position, penalty_set, penalty_cleared

            if space_type is SpaceType.TRACK:
                continue

            if space_type.is_finish:
                if is_finish_line_crossing_penalised(space_type, car.velocity):
                    car.penalize()
                    penalty_set = True
                    logger.info("Car %s crossed the finish line the wrong way", car.id)
                elif is_finish_line_crossed_correctly(space_type, car.velocity):
                    if car.has_penalty:
                        car.clear_penalty()
                        penalty_cleared = True
                        logger.info("Car %s cleared its finish line penalty", car.id)
                    else:
                        return TurnOutcome.WON, position, penalty_set, penalty_cleared
                continue

            raise TrackInvariantError(f"Unexpected space type {space_type} at {position}")

        return TurnOutcome.MOVED, None, penalty_set, penalty_cleared

    def _is_occupied_by_other(self, car: Car, position: PositionVector) -> bool:
        return any(other is not car for other in self.track.get_cars_at(position))

    def _check_last_car_standing(self) -> None:
        """Declare the only remaining car the winner."""
        active = self.world.active_car_indices
        if len(active) == 1:
            self.world.set_current_car(active[0])
            self.world.declare_winner(active[0])
            logger.info(
                "Car %s is the last car racing and wins",
                self.track.get_car(active[0]).id,
            )

    def switch_to_next_active_car(self) -> bool:
        """Rotate to the next car that has not crashed.

        Returns:
            True if an active car was found. False if every car has
            crashed, in which case the current index is unchanged.
        """
        count = self.world.car_count
        index = self.world.current_car_index
        for _ in range(count):
            index = (index + 1) % count
            if not self.track.get_car(index).is_crashed:
                self.world.set_current_car(index)
                return True

        logger.warning("No active car left to switch to")
        return False

    def run(self, max_turns: int | None = None) -> int:
        """Race until a car wins.

        The current car's strategy provides each acceleration. A
        strategy returning None stops the race.

        Args:
            max_turns: Maximum turns to execute (config value if None)

        Returns:
            Winner index, or NO_WINNER if the race stopped undecided
        """
        limit = max_turns if max_turns is not None else self.config.max_turns
        turns = 0

        while not self.world.has_winner and turns < limit:
            if self.world.current_car.is_crashed and not self.switch_to_next_active_car():
                break

            car_index = self.world.current_car_index
            car = self.world.current_car
            strategy = self._strategies.get(car_index)
            if strategy is None:
                raise RuntimeError(f"No move strategy set for car {car.id} (index {car_index})")

            direction = strategy.next_move()
            if direction is None:
                logger.info("Car %s stopped the race", car.id)
                break

            logger.debug(strategy.turn_message(car))
            self.do_car_turn(direction)
            turns += 1

            if self.world.has_winner or not self.switch_to_next_active_car():
                break

        if self.world.has_winner:
            winner = self.track.get_car(self.world.winner_index)
            logger.info("Race finished after %d turns, winner: car %s", self.world.turn, winner.id)
            strategy = self._strategies.get(self.world.winner_index)
            if strategy is not None:
                logger.info(strategy.statistics())
        else:
            logger.info("Race stopped after %d turns without a winner", self.world.turn)

        return self.world.winner_index

    def get_state(self) -> dict:
        """Get complete simulation state."""
        return {
            "config": {
                "max_turns": self.config.max_turns,
                "enable_telemetry": self.config.enable_telemetry,
            },
            "winner_index": self.world.winner_index,
            "world": self.world.get_state(),
            "telemetry": self.recorder.get_summary(),
        }
