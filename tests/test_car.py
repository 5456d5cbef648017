"""Basic tests for the racetrack car module."""

import pytest

from racetrack.car.car import Car, CarStatus
from racetrack.vector import PositionVector, Direction


class TestCar:
    """Test car movement."""

    def test_car_initialization(self):
        """Test car starts at rest on its start cell."""
        car = Car("a", PositionVector(3, 4))

        assert car.id == "a"
        assert car.position == PositionVector(3, 4)
        assert car.velocity == PositionVector(0, 0)
        assert car.status is CarStatus.ACTIVE
        assert not car.is_crashed
        assert not car.has_penalty

    def test_invalid_id(self):
        """Test ids must be a single printable character."""
        with pytest.raises(ValueError):
            Car("ab", PositionVector(0, 0))
        with pytest.raises(ValueError):
            Car("", PositionVector(0, 0))
        with pytest.raises(TypeError):
            Car("a", None)

    def test_acceleration_adds_up(self):
        """Test velocity is the sum of all accelerations."""
        car = Car("a", PositionVector(0, 0))

        car.accelerate(Direction.RIGHT)
        car.accelerate(Direction.DOWN_RIGHT)
        car.accelerate(Direction.NONE)

        assert car.velocity == PositionVector(2, 1)
        assert car.position == PositionVector(0, 0)

    def test_velocity_not_clamped(self):
        """Test velocity keeps growing with repeated acceleration."""
        car = Car("a", PositionVector(0, 0))

        for _ in range(12):
            car.accelerate(Direction.UP_LEFT)

        assert car.velocity == PositionVector(-12, -12)

    def test_move(self):
        """Test a move adds the velocity to the position."""
        car = Car("a", PositionVector(5, 5))
        car.accelerate(Direction.UP_RIGHT)
        car.accelerate(Direction.UP)

        assert car.next_position == PositionVector(6, 3)
        car.move()
        assert car.position == PositionVector(6, 3)

    def test_accelerate_none_direction(self):
        """Test a missing direction is rejected."""
        car = Car("a", PositionVector(0, 0))
        with pytest.raises(TypeError):
            car.accelerate(None)


class TestCarStatus:
    """Test crash and penalty states."""

    def test_crash(self):
        """Test crashing moves the car to the crash cell."""
        car = Car("a", PositionVector(1, 1))
        car.accelerate(Direction.UP)
        car.crash(PositionVector(1, 0))

        assert car.is_crashed
        assert car.status is CarStatus.CRASHED
        assert car.position == PositionVector(1, 0)

    def test_crashed_car_is_frozen(self):
        """Test a crashed car ignores acceleration and moves."""
        car = Car("a", PositionVector(1, 1))
        car.accelerate(Direction.RIGHT)
        car.crash(PositionVector(2, 1))

        car.accelerate(Direction.RIGHT)
        car.move()
        car.move_to(PositionVector(7, 7))
        car.crash(PositionVector(9, 9))

        assert car.velocity == PositionVector(1, 0)
        assert car.position == PositionVector(2, 1)

    def test_penalty_toggle(self):
        """Test penalty is set and cleared."""
        car = Car("a", PositionVector(0, 0))

        car.penalize()
        assert car.has_penalty
        assert car.status is CarStatus.PENALIZED

        car.penalize()
        assert car.has_penalty

        car.clear_penalty()
        assert not car.has_penalty
        assert car.status is CarStatus.ACTIVE

    def test_crash_while_penalized(self):
        """Test crash is final even with a penalty pending."""
        car = Car("a", PositionVector(0, 0))
        car.penalize()
        car.crash(PositionVector(0, 0))

        assert car.is_crashed
        assert not car.has_penalty

        car.clear_penalty()
        car.penalize()
        assert car.status is CarStatus.CRASHED

    def test_car_state(self):
        """Test car state dictionary."""
        car = Car("z", PositionVector(2, 3))
        car.accelerate(Direction.DOWN_LEFT)
        state = car.get_state()

        assert state["id"] == "z"
        assert state["position"] == (2, 3)
        assert state["velocity"] == (-1, 1)
        assert state["status"] == "active"
