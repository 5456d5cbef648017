"""
Path finder - Plans a route from a car to the finish line.

Provides:
- Uniform-cost grid search preferring straight paths away from walls
- Path smoothing by line of sight shortcuts
- A move strategy following the planned route
"""

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple
import heapq
import logging
import math
import sys

from racetrack.car.car import Car
from racetrack.simulation.physics import calculate_path, is_finish_line_crossed_correctly
from racetrack.strategy.base import StrategyType
from racetrack.strategy.follower import PathFollowerStrategy
from racetrack.track.space import SpaceType
from racetrack.track.track import Track
from racetrack.vector import PositionVector, Direction

logger = logging.getLogger(__name__)

# Predecessor index of the start node
NO_NODE = -1


@dataclass
class PathFinderConfig:
    """Search cost model."""
    # Too high for any real path to reach, low enough to never overflow
    cost_impassable: float = sys.float_info.max / 1e6

    cost_open: float = 1.0
    cost_near_wall: float = 2.0

    # Scales (1 - dot(previous step, next step)) to penalize turning
    cost_direction_constant: float = 0.001


@dataclass
class _PathNode:
    position: PositionVector
    prev: int
    cost: float


class PathFinder:
    """Finds a cheap path from a position to any finish cell.

    Moves go to the 8 neighboring cells. Walls and finish cells
    entered against their direction are impassable, cells next to a
    wall cost more than open cells, and changing direction adds a
    small penalty.

    Usage:
        finder = PathFinder(track)
        path = finder.plan(car.position)
    """

    def __init__(self, track: Track, config: PathFinderConfig | None = None):
        """Initialize path finder.

        Args:
            track: Track to search (read only)
            config: Cost model. Uses defaults if None.
        """
        if track is None:
            raise TypeError("track must not be None")
        self.track = track
        self.config = config or PathFinderConfig()

    def plan(self, start: PositionVector) -> List[PositionVector]:
        """Find and smooth a path from start to the finish line.

        Returns:
            Waypoints from start to a finish cell, or an empty list if
            the finish can't be reached
        """
        path = self.find_path(start)
        if not path:
            logger.warning("No path from %s to the finish line", start)
            return []
        return self.smooth_path(path)

    def find_path(self, start: PositionVector) -> List[PositionVector]:
        """Search the cheapest path from start to any finish cell.

        Args:
            start: Start cell

        Returns:
            Neighboring cells from start to a finish cell, or an empty
            list if no finish cell is reachable
        """
        if start is None:
            raise TypeError("start must not be None")

        nodes: List[_PathNode] = [_PathNode(start, NO_NODE, 0.0)]
        node_at: Dict[PositionVector, int] = {start: 0}
        frontier: List[Tuple[float, int]] = [(0.0, 0)]
        visited: Set[PositionVector] = set()
        end_index = NO_NODE

        while frontier:
            cost, index = heapq.heappop(frontier)
            node = nodes[index]
            # Outdated entry of a node whose cost was lowered later
            if node.position in visited or cost > node.cost:
                continue

            if cost >= self.config.cost_impassable:
                break
            if self.track.get_space_type(node.position).is_finish:
                end_index = index
                break

            self._process_neighbors(nodes, node_at, frontier, visited, index)
            visited.add(node.position)

        if end_index == NO_NODE:
            return []

        path = []
        index = end_index
        while index != NO_NODE:
            path.append(nodes[index].position)
            index = nodes[index].prev
        path.reverse()

        logger.debug(
            "Found path of %d cells with cost %.3f after visiting %d cells",
            len(path), nodes[end_index].cost, len(visited),
        )
        return path

    def _process_neighbors(
        self,
        nodes: List[_PathNode],
        node_at: Dict[PositionVector, int],
        frontier: List[Tuple[float, int]],
        visited: Set[PositionVector],
        index: int,
    ) -> None:
        current = nodes[index]
        for direction in Direction.moving_directions():
            position = current.position + direction.vector
            if position in visited:
                continue

            total_cost = current.cost + self._move_cost(nodes, index, position)
            neighbor_index = node_at.get(position)
            known_cost = nodes[neighbor_index].cost if neighbor_index is not None else math.inf
            if total_cost >= known_cost:
                continue

            if neighbor_index is None:
                neighbor_index = len(nodes)
                nodes.append(_PathNode(position, index, total_cost))
                node_at[position] = neighbor_index
            else:
                nodes[neighbor_index].prev = index
                nodes[neighbor_index].cost = total_cost
            heapq.heappush(frontier, (total_cost, neighbor_index))

    def _move_cost(
        self,
        nodes: List[_PathNode],
        from_index: int,
        to_position: PositionVector,
    ) -> float:
        from_node = nodes[from_index]
        step = to_position - from_node.position
        space_type = self.track.get_space_type(to_position)

        if space_type is SpaceType.WALL:
            return self.config.cost_impassable
        if space_type.is_finish and not is_finish_line_crossed_correctly(space_type, step):
            return self.config.cost_impassable

        if self.track.is_near_wall(to_position):
            cost = self.config.cost_near_wall
        else:
            cost = self.config.cost_open

        if from_node.prev != NO_NODE:
            previous_step = from_node.position - nodes[from_node.prev].position
            cost += self.config.cost_direction_constant * (1 - previous_step.dot(step))
        return cost

    def has_line_of_sight(self, start: PositionVector, end: PositionVector) -> bool:
        """Check that a straight line stays clear of walls and wall-adjacent cells."""
        for position in calculate_path(start, end):
            if self.track.get_space_type(position) is SpaceType.WALL:
                return False
            if self.track.is_near_wall(position):
                return False
        return True

    def smooth_path(self, path: List[PositionVector]) -> List[PositionVector]:
        """Remove waypoints that a straight line can skip.

        Walking back from the end, the first waypoint whose neighbors
        in the path see each other is removed, then the walk starts
        over. Stops when a full walk removes nothing.

        Args:
            path: Waypoints from start to end

        Returns:
            New, smoothed list of waypoints with the same start and end
        """
        waypoints = list(path)
        iterations = 0
        while self._remove_last_detour(waypoints):
            iterations += 1

        logger.debug(
            "Smoothed out the path %d times, %d waypoints left",
            iterations, len(waypoints),
        )
        return waypoints

    def _remove_last_detour(self, waypoints: List[PositionVector]) -> bool:
        for end in range(len(waypoints) - 1, 1, -1):
            anchor = end - 2
            if self.has_line_of_sight(waypoints[end], waypoints[anchor]):
                del waypoints[end - 1]
                return True
        return False


class PathFinderStrategy:
    """Plans a route once and follows it with a path follower."""

    strategy_type = StrategyType.PATH_FINDER

    def __init__(self, track: Track, car: Car, config: PathFinderConfig | None = None):
        """Plan the route from the car's current position.

        Args:
            track: Race track
            car: Car to steer
            config: Search cost model
        """
        self.finder = PathFinder(track, config)
        self.path = self.finder.plan(car.position)
        logger.info("Car %s planned a route with %d waypoints", car.id, len(self.path))
        self._follower = PathFollowerStrategy(self.path, car)

    def next_move(self) -> Direction:
        return self._follower.next_move()

    def turn_message(self, car: Car) -> str:
        return self._follower.turn_message(car)

    def statistics(self) -> str:
        return self._follower.statistics()
