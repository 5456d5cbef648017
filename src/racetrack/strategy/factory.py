"""
Strategy factory - Builds a move strategy variant for a car.
"""

from pathlib import Path

from racetrack.strategy.base import (
    DoNotMoveStrategy,
    MoveListStrategy,
    MoveStrategy,
    StrategyType,
)
from racetrack.strategy.follower import PathFollowerStrategy
from racetrack.strategy.pathfinder import PathFinderConfig, PathFinderStrategy
from racetrack.track.track import Track


def create_strategy(
    strategy_type: StrategyType,
    track: Track,
    car_index: int,
    source: str | Path | None = None,
    pathfinder_config: PathFinderConfig | None = None,
) -> MoveStrategy:
    """Create a move strategy for a car.

    Args:
        strategy_type: Strategy variant
        track: Race track
        car_index: Zero-based index of the car to steer
        source: Move file (MOVE_LIST) or waypoint file (PATH_FOLLOWER)
        pathfinder_config: Cost model for PATH_FINDER

    Returns:
        New strategy

    Raises:
        ValueError: If a file based strategy gets no source file
    """
    car = track.get_car(car_index)

    if strategy_type is StrategyType.DO_NOT_MOVE:
        return DoNotMoveStrategy()
    if strategy_type is StrategyType.PATH_FINDER:
        return PathFinderStrategy(track, car, pathfinder_config)

    if source is None:
        raise ValueError(f"Strategy {strategy_type.value} requires a source file")
    if strategy_type is StrategyType.MOVE_LIST:
        return MoveListStrategy.from_file(source)
    if strategy_type is StrategyType.PATH_FOLLOWER:
        return PathFollowerStrategy.from_file(source, car)

    raise ValueError(f"Unknown strategy type: {strategy_type}")
