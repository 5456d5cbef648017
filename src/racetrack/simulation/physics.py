"""
Grid physics - Line rasterization and finish line rules.

Provides:
- Grid cells passed by a straight move (Bresenham line)
- Finish line crossing evaluation
"""

from typing import Callable, Dict, List
import numpy as np

from racetrack.track.space import SpaceType
from racetrack.vector import PositionVector


# Velocity checks per finish type: crossed in the required direction
_CROSSING_EVALUATIONS: Dict[SpaceType, Callable[[PositionVector], bool]] = {
    SpaceType.FINISH_UP: lambda velocity: velocity.y < 0,
    SpaceType.FINISH_DOWN: lambda velocity: velocity.y > 0,
    SpaceType.FINISH_LEFT: lambda velocity: velocity.x < 0,
    SpaceType.FINISH_RIGHT: lambda velocity: velocity.x > 0,
}

# Velocity checks per finish type: crossed against the required direction
_PENALTY_EVALUATIONS: Dict[SpaceType, Callable[[PositionVector], bool]] = {
    SpaceType.FINISH_UP: lambda velocity: velocity.y > 0,
    SpaceType.FINISH_DOWN: lambda velocity: velocity.y < 0,
    SpaceType.FINISH_LEFT: lambda velocity: velocity.x > 0,
    SpaceType.FINISH_RIGHT: lambda velocity: velocity.x < 0,
}


def calculate_path(
    start_position: PositionVector,
    end_position: PositionVector,
) -> List[PositionVector]:
    """Get all grid cells on the straight line between two positions.

    Uses Bresenham's line algorithm: the axis with the larger
    distance is the fast axis, one cell is emitted per step along
    it, and an error term decides when to also step on the slow
    axis.

    Args:
        start_position: First cell of the line
        end_position: Last cell of the line

    Returns:
        Cells from start to end, both included. Has
        max(|dx|, |dy|) + 1 entries.
    """
    if start_position is None or end_position is None:
        raise TypeError("start_position and end_position must not be None")

    diff_x = end_position.x - start_position.x
    diff_y = end_position.y - start_position.y
    dist_x = abs(diff_x)
    dist_y = abs(diff_y)
    dir_x = int(np.sign(diff_x))
    dir_y = int(np.sign(diff_y))

    # Parallel steps follow the fast axis only, diagonal steps move on both
    if dist_x > dist_y:
        parallel_step = PositionVector(dir_x, 0)
        distance_slow_axis = dist_y
        distance_fast_axis = dist_x
    else:
        parallel_step = PositionVector(0, dir_y)
        distance_slow_axis = dist_x
        distance_fast_axis = dist_y
    diagonal_step = PositionVector(dir_x, dir_y)

    position = start_position
    error = distance_fast_axis // 2
    path = [position]

    for _ in range(distance_fast_axis):
        error -= distance_slow_axis
        if error < 0:
            error += distance_fast_axis
            position = position + diagonal_step
        else:
            position = position + parallel_step
        path.append(position)

    return path


def is_finish_line_crossed_correctly(
    space_type: SpaceType,
    velocity: PositionVector,
) -> bool:
    """Check if a finish line is crossed in its required direction.

    Args:
        space_type: Space type of the crossed cell
        velocity: Velocity (or step vector) when crossing

    Returns:
        True for a finish cell crossed the right way. False
        otherwise, including for non-finish cells.
    """
    evaluation = _CROSSING_EVALUATIONS.get(space_type)
    return evaluation is not None and evaluation(velocity)


def is_finish_line_crossing_penalised(
    space_type: SpaceType,
    velocity: PositionVector,
) -> bool:
    """Check if a finish line is crossed against its required direction.

    A velocity with no component along the required axis is
    neither correct nor penalised.

    Args:
        space_type: Space type of the crossed cell
        velocity: Velocity when crossing

    Returns:
        True for a finish cell crossed the wrong way
    """
    evaluation = _PENALTY_EVALUATIONS.get(space_type)
    return evaluation is not None and evaluation(velocity)
