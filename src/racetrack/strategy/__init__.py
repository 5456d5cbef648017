"""
Strategy module - Sources of each turn's acceleration.

This module contains:
- MoveStrategy: Capability shared by all strategies
- DoNotMoveStrategy, MoveListStrategy: Fixed moves
- PathFollowerStrategy: Steers through waypoints
- PathFinder, PathFinderStrategy: Plans and follows a route to the finish
- create_strategy: Builds a strategy by type
"""

from racetrack.strategy.base import (
    MoveStrategy,
    StrategyType,
    DoNotMoveStrategy,
    MoveListStrategy,
)
from racetrack.strategy.follower import PathFollowerStrategy
from racetrack.strategy.pathfinder import PathFinder, PathFinderConfig, PathFinderStrategy
from racetrack.strategy.factory import create_strategy

__all__ = [
    "MoveStrategy",
    "StrategyType",
    "DoNotMoveStrategy",
    "MoveListStrategy",
    "PathFollowerStrategy",
    "PathFinder",
    "PathFinderConfig",
    "PathFinderStrategy",
    "create_strategy",
]
