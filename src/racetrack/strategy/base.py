"""
Move strategies - Where a car's next acceleration comes from.

Defines:
- MoveStrategy: the capability every strategy provides
- StrategyType: tag of each strategy variant
- DoNotMoveStrategy: always keeps the current velocity
- MoveListStrategy: replays a prerecorded list of directions
"""

from collections import deque
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Protocol
import logging

from racetrack.car.car import Car
from racetrack.vector import Direction

logger = logging.getLogger(__name__)

CAR_WON_STATS_TEXT = "Car won after {turns} turns."


class StrategyType(Enum):
    """Available move strategy variants."""
    DO_NOT_MOVE = "do_not_move"
    MOVE_LIST = "move_list"
    PATH_FOLLOWER = "path_follower"
    PATH_FINDER = "path_finder"


class MoveStrategy(Protocol):
    """Produces the next acceleration for a car."""
    strategy_type: StrategyType

    def next_move(self) -> Optional[Direction]:
        """Direction to accelerate in the next turn. None ends the race."""
        ...

    def turn_message(self, car: Car) -> str:
        """Human readable description of the car's current turn."""
        ...

    def statistics(self) -> str:
        """Summary of the strategy's moves so far."""
        ...


class DoNotMoveStrategy:
    """Never accelerates."""

    strategy_type = StrategyType.DO_NOT_MOVE

    def __init__(self):
        self._turns = 0

    def next_move(self) -> Direction:
        self._turns += 1
        return Direction.NONE

    def turn_message(self, car: Car) -> str:
        return f"Car {car.id} is not moving."

    def statistics(self) -> str:
        return CAR_WON_STATS_TEXT.format(turns=self._turns)


def load_move_file(path: str | Path) -> List[Direction]:
    """Read a move list file.

    One direction name per line (e.g. "UP_RIGHT"), empty lines
    are skipped.

    Raises:
        OSError: If the file can't be read
        ValueError: If a line is not a direction name
    """
    path = Path(path)
    directions = []
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        try:
            directions.append(Direction.from_name(line))
        except ValueError:
            raise ValueError(f"{path}:{number}: invalid direction {line.strip()!r}") from None
    logger.debug("Loaded %d moves from %s", len(directions), path)
    return directions


class MoveListStrategy:
    """Replays a fixed list of directions.

    Returns Direction.NONE once the list is exhausted.
    """

    strategy_type = StrategyType.MOVE_LIST

    def __init__(self, moves: Iterable[Direction]):
        self._moves = deque(moves)
        self._turns = 0

    @classmethod
    def from_file(cls, path: str | Path) -> "MoveListStrategy":
        return cls(load_move_file(path))

    @property
    def remaining_moves(self) -> int:
        return len(self._moves)

    def next_move(self) -> Direction:
        self._turns += 1
        if not self._moves:
            return Direction.NONE
        return self._moves.popleft()

    def turn_message(self, car: Car) -> str:
        return f"Car {car.id} plays its move list, {len(self._moves)} moves left."

    def statistics(self) -> str:
        return CAR_WON_STATS_TEXT.format(turns=self._turns)
