"""Tests for line rasterization and finish line rules."""

import pytest

from racetrack.simulation.physics import (
    calculate_path,
    is_finish_line_crossed_correctly,
    is_finish_line_crossing_penalised,
)
from racetrack.track.space import SpaceType
from racetrack.vector import PositionVector


def _points(*coordinates):
    return [PositionVector(x, y) for x, y in coordinates]


class TestCalculatePath:
    """Test Bresenham line rasterization."""

    def test_single_cell(self):
        """Test a zero length line is just the start cell."""
        assert calculate_path(PositionVector(4, 2), PositionVector(4, 2)) == _points((4, 2))

    def test_horizontal(self):
        """Test straight line along x."""
        path = calculate_path(PositionVector(0, 0), PositionVector(-3, 0))

        assert path == _points((0, 0), (-1, 0), (-2, 0), (-3, 0))

    def test_vertical(self):
        """Test straight line along y."""
        path = calculate_path(PositionVector(2, 1), PositionVector(2, 4))

        assert path == _points((2, 1), (2, 2), (2, 3), (2, 4))

    def test_diagonal(self):
        """Test 45 degree line."""
        path = calculate_path(PositionVector(0, 0), PositionVector(2, 2))

        assert path == _points((0, 0), (1, 1), (2, 2))

    def test_five_cell_lines(self):
        """Test collinear and diagonal lines of five cells."""
        assert calculate_path(PositionVector(0, 0), PositionVector(4, 0)) == [
            PositionVector(x, 0) for x in range(5)
        ]
        assert calculate_path(PositionVector(1, 1), PositionVector(5, 5)) == [
            PositionVector(i, i) for i in range(1, 6)
        ]

    def test_shallow_line(self):
        """Test line with x as the fast axis."""
        path = calculate_path(PositionVector(0, 0), PositionVector(3, 1))

        assert path == _points((0, 0), (1, 0), (2, 1), (3, 1))

    def test_steep_line(self):
        """Test line with y as the fast axis."""
        path = calculate_path(PositionVector(0, 0), PositionVector(1, 3))

        assert path == _points((0, 0), (0, 1), (1, 2), (1, 3))

    def test_path_length_and_endpoints(self):
        """Test every line covers max(|dx|, |dy|) + 1 cells from start to end."""
        start = PositionVector(3, -2)
        for end in _points((10, 1), (-4, -5), (3, 7), (0, 0), (8, -9)):
            path = calculate_path(start, end)
            expected_length = max(abs(end.x - start.x), abs(end.y - start.y)) + 1

            assert len(path) == expected_length
            assert path[0] == start
            assert path[-1] == end

    def test_consecutive_cells_are_neighbors(self):
        """Test the line never skips a cell."""
        path = calculate_path(PositionVector(0, 0), PositionVector(7, -3))

        for previous, current in zip(path, path[1:]):
            step = current - previous
            assert abs(step.x) <= 1 and abs(step.y) <= 1
            assert step != PositionVector(0, 0)

    def test_reverse_straight_lines(self):
        """Test straight and diagonal lines are the same both ways."""
        for start, end in [
            (PositionVector(0, 0), PositionVector(4, 0)),
            (PositionVector(1, 1), PositionVector(5, 5)),
            (PositionVector(0, 0), PositionVector(0, -4)),
            (PositionVector(1, 1), PositionVector(-3, 5)),
        ]:
            assert calculate_path(end, start) == list(reversed(calculate_path(start, end)))

    def test_none_arguments(self):
        """Test missing positions are rejected."""
        with pytest.raises(TypeError):
            calculate_path(None, PositionVector(0, 0))


class TestFinishLineRules:
    """Test finish line crossing evaluation."""

    def test_crossed_correctly(self):
        """Test each finish type's required direction."""
        assert is_finish_line_crossed_correctly(SpaceType.FINISH_UP, PositionVector(0, -1))
        assert is_finish_line_crossed_correctly(SpaceType.FINISH_DOWN, PositionVector(3, 2))
        assert is_finish_line_crossed_correctly(SpaceType.FINISH_LEFT, PositionVector(-2, 5))
        assert is_finish_line_crossed_correctly(SpaceType.FINISH_RIGHT, PositionVector(1, -1))

        assert not is_finish_line_crossed_correctly(SpaceType.FINISH_UP, PositionVector(0, 1))
        assert not is_finish_line_crossed_correctly(SpaceType.FINISH_RIGHT, PositionVector(-1, 0))

    def test_penalised(self):
        """Test crossing against each finish type's direction."""
        assert is_finish_line_crossing_penalised(SpaceType.FINISH_UP, PositionVector(0, 1))
        assert is_finish_line_crossing_penalised(SpaceType.FINISH_DOWN, PositionVector(0, -3))
        assert is_finish_line_crossing_penalised(SpaceType.FINISH_LEFT, PositionVector(1, 1))
        assert is_finish_line_crossing_penalised(SpaceType.FINISH_RIGHT, PositionVector(-1, 0))

        assert not is_finish_line_crossing_penalised(SpaceType.FINISH_DOWN, PositionVector(0, 1))

    def test_parallel_crossing_is_neutral(self):
        """Test moving along the finish line is neither correct nor penalised."""
        for space_type, velocity in [
            (SpaceType.FINISH_UP, PositionVector(2, 0)),
            (SpaceType.FINISH_DOWN, PositionVector(-1, 0)),
            (SpaceType.FINISH_LEFT, PositionVector(0, 3)),
            (SpaceType.FINISH_RIGHT, PositionVector(0, -1)),
        ]:
            assert not is_finish_line_crossed_correctly(space_type, velocity)
            assert not is_finish_line_crossing_penalised(space_type, velocity)

    def test_non_finish_spaces(self):
        """Test walls and track are never finish crossings."""
        for space_type in (SpaceType.WALL, SpaceType.TRACK):
            assert not is_finish_line_crossed_correctly(space_type, PositionVector(1, 1))
            assert not is_finish_line_crossing_penalised(space_type, PositionVector(-1, -1))
